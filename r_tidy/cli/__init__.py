"""CLI package for the r-tidy entrypoints."""

from r_tidy.cli.main import main
from r_tidy.cli.parser import build_parser, with_option_arguments

__all__ = ["build_parser", "main", "with_option_arguments"]
