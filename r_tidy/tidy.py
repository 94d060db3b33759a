"""The tidy pipeline: mask, parse, render, unmask, reindent."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import IO, Any, Iterable

from r_tidy.blank import record_blank_runs, restore_blank_runs
from r_tidy.brace import move_leftbrace
from r_tidy.engine import tidy_block
from r_tidy.exceptions import MaskingError
from r_tidy.files import read_source, split_lines, write_output
from r_tidy.masking import mask_comments
from r_tidy.options import TidyOptions, resolve_options
from r_tidy.reindent import reindent_lines
from r_tidy.unmasking import unmask_source

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TidyResult:
    """Formatted lines plus the rendered text that still carries the masks."""

    text_tidy: list[str] = field(default_factory=list)
    text_mask: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.text_tidy)

    def __str__(self) -> str:
        return self.text


def tidy_text(text: str | list[str], options: TidyOptions | None = None) -> TidyResult:
    """Reformat R code held in memory; nothing is read or written."""
    options = options or TidyOptions()
    lines = split_lines(text) if isinstance(text, str) else list(text)
    if not lines or all(not line.strip() for line in lines):
        return TidyResult(text_tidy=lines, text_mask=list(lines))

    source = "\n".join(lines)
    runs = record_blank_runs(source) if options.blank else None
    masked = mask_comments(source, blank=options.blank) if options.comment else None
    masked_text = masked.text if masked is not None else source

    rendered = tidy_block(
        masked_text,
        width=options.width_cutoff,
        arrow=options.arrow and "=" in masked_text,
    )
    text_mask = "\n".join(rendered)
    if masked is not None:
        text_tidy, restored = unmask_source(text_mask)
        if restored != len(masked.comments):
            raise MaskingError(
                f"Masked {len(masked.comments)} comment(s) and blank line(s) "
                f"but restored {restored}; the source may contain the "
                "reserved comment markers"
            )
    else:
        text_tidy = text_mask

    tidy_lines = text_tidy.split("\n") if rendered else []
    tidy_lines = reindent_lines(tidy_lines, options.indent)
    if options.brace_newline:
        tidy_lines = move_leftbrace(tidy_lines)
    if runs is not None:
        tidy_lines = restore_blank_runs(tidy_lines, runs)
    mask_lines = text_mask.split("\n") if rendered else []
    return TidyResult(text_tidy=tidy_lines, text_mask=mask_lines)


def tidy_source(
    source: str | os.PathLike[str] | None = None,
    *,
    text: str | Iterable[str] | None = None,
    output: bool = True,
    file: str | os.PathLike[str] | IO[str] | None = None,
    options: TidyOptions | None = None,
    **option_values: Any,
) -> TidyResult:
    """Reformat R code while preserving comments and blank lines.

    Args:
        source: path of the R script; `None` or `-` reads stdin
        text: code to use instead of `source` (a string or lines)
        output: whether to write the result to `file`
        file: destination path or stream, stdout by default
        options: base options; keyword values (including deprecated
            names such as `replace_assign`) are merged on top

    Returns:
        The tidied lines and the masked rendering.
    """
    options = resolve_options(options, **option_values)
    logger.debug("Tidying %s", "<text>" if text is not None else source or "<stdin>")
    lines = read_source(source, text)
    result = tidy_text(lines, options)
    if output:
        write_output(result.text_tidy, file=file)
    return result


__all__ = ["TidyResult", "tidy_source", "tidy_text"]
