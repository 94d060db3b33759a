from __future__ import annotations

import os
import sys

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import SLexer


def colorize_r(code: str, stream=None) -> str:
    """Highlight R snippets when writing to a terminal."""
    stream = sys.stdout if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    if (not code) or (os.getenv("NO_COLOR") == "1") or not (isatty and isatty()):
        return code
    return highlight(code, SLexer(), TerminalFormatter())


__all__ = ["colorize_r"]
