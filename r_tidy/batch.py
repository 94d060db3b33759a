"""Tidy every R script under a directory, one independent job per file."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from itertools import repeat
from pathlib import Path
from typing import Any

from r_tidy.exceptions import TidyError
from r_tidy.files import atomic_write, join_lines, split_lines
from r_tidy.options import TidyOptions, resolve_options
from r_tidy.tidy import tidy_text

logger = logging.getLogger(__name__)

R_SCRIPT_SUFFIXES = frozenset({".R", ".r", ".S", ".s", ".Q", ".q"})


@dataclass(frozen=True, slots=True)
class TidyFileResult:
    path: Path
    ok: bool
    changed: bool = False
    error: str | None = None


def find_r_scripts(path: str | os.PathLike[str], recursive: bool = False) -> list[Path]:
    root = Path(path)
    candidates = root.rglob("*") if recursive else root.glob("*")
    return sorted(
        candidate
        for candidate in candidates
        if candidate.suffix in R_SCRIPT_SUFFIXES and candidate.is_file()
    )


def tidy_file(path: Path, options: TidyOptions) -> TidyFileResult:
    """Tidy one file in place; errors are reported, never raised."""
    logger.info("tidying %s", path)
    try:
        original = path.read_text(encoding="utf-8")
        result = tidy_text(split_lines(original), options)
        content = join_lines(result.text_tidy)
        changed = content != original
        if changed:
            atomic_write(path, content)
    except (TidyError, OSError, UnicodeDecodeError) as error:
        logger.error("Failed to tidy %s: %s", path, error)
        return TidyFileResult(path=path, ok=False, error=str(error))
    except Exception as error:
        logger.exception("Failed to tidy %s", path)
        return TidyFileResult(path=path, ok=False, error=f"{type(error).__name__}: {error}")
    return TidyFileResult(path=path, ok=True, changed=changed)


def tidy_dir(
    path: str | os.PathLike[str] = ".",
    recursive: bool = False,
    *,
    jobs: int | None = None,
    options: TidyOptions | None = None,
    **option_values: Any,
) -> list[TidyFileResult]:
    """Tidy the R scripts under `path`, overwriting each one that succeeds.

    Files are independent, so they are spread over a process pool of `jobs`
    workers (one per CPU by default); `jobs=1` runs in this process.
    """
    options = resolve_options(options, **option_values)
    files = find_r_scripts(path, recursive)
    if not files:
        logger.warning("No R scripts found under %s", path)
        return []
    workers = min(jobs or os.cpu_count() or 1, len(files))
    if workers == 1:
        return [tidy_file(file, options) for file in files]
    with ProcessPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(tidy_file, files, repeat(options)))


__all__ = ["R_SCRIPT_SUFFIXES", "TidyFileResult", "find_r_scripts", "tidy_dir", "tidy_file"]
