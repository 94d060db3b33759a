"""
r-tidy

Reformat R source code while preserving comments and blank lines: comments
are masked as expressions, the code is parsed and rendered in a canonical
layout, then the comments are put back and the result is reindented.
"""

from r_tidy.batch import TidyFileResult, tidy_dir
from r_tidy.exceptions import (ConfigError, DeprecatedOptionWarning,
                               MaskingError, ParseError, RSyntaxError,
                               TidyError)
from r_tidy.options import TidyOptions
from r_tidy.parser import parse
from r_tidy.tidy import TidyResult, tidy_source, tidy_text
from r_tidy.usage import usage

__all__ = [
    "ConfigError",
    "DeprecatedOptionWarning",
    "MaskingError",
    "ParseError",
    "RSyntaxError",
    "TidyError",
    "TidyFileResult",
    "TidyOptions",
    "TidyResult",
    "parse",
    "tidy_dir",
    "tidy_source",
    "tidy_text",
    "usage",
]
