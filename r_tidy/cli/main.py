"""
Command line entrypoint for tidying R code.
"""

import logging
import sys
from pathlib import Path
from typing import Any

from r_tidy.batch import tidy_dir
from r_tidy.cli.parser import build_parser
from r_tidy.exceptions import TidyError
from r_tidy.files import atomic_write, join_lines, read_source, write_output
from r_tidy.options import DEPRECATED_OPTIONS, OPTION_NAMES, resolve_options
from r_tidy.tidy import tidy_text
from r_tidy.usage import usage

logger = logging.getLogger(__name__)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def option_values(args) -> dict[str, Any]:
    """Formatting flags the user actually gave, deprecated spellings included."""
    names = OPTION_NAMES | set(DEPRECATED_OPTIONS)
    return {
        name: value
        for name, value in vars(args).items()
        if name in names and value is not None
    }


def _tidy(args, options) -> int:
    sources = args.files or ["-"]
    if args.in_place and "-" in sources:
        logger.error("Cannot tidy stdin in place")
        return 2
    status = 0
    collected: list[str] = []
    for source in sources:
        try:
            result = tidy_text(read_source(source), options)
            if args.in_place:
                atomic_write(source, join_lines(result.text_tidy))
        except (TidyError, OSError, UnicodeDecodeError) as error:
            logger.error("Failed to tidy %s: %s", source, error)
            status = 1
            continue
        if not args.in_place:
            collected.extend(result.text_tidy)
    if not args.in_place and collected:
        if args.output:
            write_output(collected, file=args.output)
        else:
            write_output(collected, color=args.color)
    return status


def _check(args, options) -> int:
    status = 0
    for source in args.files:
        try:
            original = Path(source).read_text(encoding="utf-8")
            result = tidy_text(original, options)
        except (TidyError, OSError, UnicodeDecodeError) as error:
            logger.error("Failed to tidy %s: %s", source, error)
            status = 1
            continue
        if join_lines(result.text_tidy) != original:
            print(f"would reformat {source}")
            status = 1
    return status


def main(args=None) -> int:
    """Return CLI exit codes so automation can distinguish success from failure."""
    parser = build_parser()
    args = parser.parse_args(args)
    logging.basicConfig(
        level=LOG_LEVELS.get(args.verbose, logging.DEBUG),
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.captureWarnings(True)

    if args.command in ("tidy", "check", "dir"):
        try:
            options = resolve_options(**option_values(args))
        except TidyError as error:
            logger.error("%s", error)
            return 2

    match args.command:
        case "tidy":
            return _tidy(args, options)
        case "check":
            return _check(args, options)
        case "dir":
            results = tidy_dir(
                args.path, args.recursive, jobs=args.jobs, options=options
            )
            return 0 if all(result.ok for result in results) else 1
        case "usage":
            try:
                print(
                    usage(
                        Path(args.file),
                        name=args.name,
                        width=args.width,
                        indent_by_name=args.indent_by_name,
                    )
                )
            except (TidyError, OSError, ValueError) as error:
                logger.error("%s", error)
                return 1
            return 0
        case _:
            parser.print_help(sys.stderr)
            return 2
