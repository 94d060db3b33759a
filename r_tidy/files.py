"""Reading R source and writing tidied results."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import IO, Iterable

from r_tidy.color import colorize_r


def split_lines(text: str) -> list[str]:
    """Split like a line reader: no trailing empty line, no carriage returns."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def join_lines(lines: list[str]) -> str:
    """Inverse of `split_lines`: every line newline-terminated."""
    return "".join(f"{line}\n" for line in lines)


def read_source(
    source: str | os.PathLike[str] | None = None,
    text: str | Iterable[str] | None = None,
) -> list[str]:
    """Return the input lines from `text`, a file, or stdin (`None`/`-`)."""
    if text is not None:
        if isinstance(text, str):
            return split_lines(text)
        return split_lines("\n".join(text))
    if source is None or str(source) == "-":
        return split_lines(sys.stdin.read())
    return split_lines(Path(source).read_text(encoding="utf-8"))


def atomic_write(path: str | os.PathLike[str], content: str) -> None:
    """Replace `path` with `content` without leaving a partial file behind."""
    target = Path(path)
    fd, temporary = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        if target.exists():
            os.chmod(temporary, target.stat().st_mode & 0o7777)
        os.replace(temporary, target)
    except BaseException:
        Path(temporary).unlink(missing_ok=True)
        raise


def write_output(
    lines: list[str],
    file: str | os.PathLike[str] | IO[str] | None = None,
    color: bool = True,
) -> None:
    """Write `lines` followed by a newline to a path, a stream or stdout."""
    content = join_lines(lines)
    if file is None or hasattr(file, "write"):
        stream = sys.stdout if file is None else file
        stream.write(colorize_r(content, stream) if color else content)
        return
    atomic_write(file, content)


__all__ = ["atomic_write", "join_lines", "read_source", "split_lines", "write_output"]
