import argparse

from r_tidy.options import DEFAULT_WIDTH

DEPRECATED_HELP = "deprecated, use %s"


def with_option_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Formatting flags shared by every subcommand that tidies code."""
    group = parser.add_argument_group("formatting")
    group.add_argument(
        "--no-comment",
        dest="comment",
        action="store_false",
        default=None,
        help="drop comments",
    )
    group.add_argument(
        "--no-blank",
        dest="blank",
        action="store_false",
        default=None,
        help="drop blank lines",
    )
    group.add_argument(
        "--arrow",
        action="store_true",
        default=None,
        help="replace '=' assignments with '<-'",
    )
    group.add_argument(
        "--brace-newline",
        action="store_true",
        default=None,
        help="put an opening '{' on its own line",
    )
    group.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="spaces per indentation level (default: 4)",
    )
    group.add_argument(
        "--width",
        dest="width_cutoff",
        type=int,
        default=None,
        metavar="N",
        help=f"target line width (default: {DEFAULT_WIDTH})",
    )

    deprecated = parser.add_argument_group("deprecated")
    deprecated.add_argument(
        "--no-keep-comment",
        dest="keep_comment",
        action="store_false",
        default=None,
        help=DEPRECATED_HELP % "--no-comment",
    )
    deprecated.add_argument(
        "--no-keep-blank-line",
        dest="keep_blank_line",
        action="store_false",
        default=None,
        help=DEPRECATED_HELP % "--no-blank",
    )
    deprecated.add_argument(
        "--replace-assign",
        action="store_true",
        default=None,
        help=DEPRECATED_HELP % "--arrow",
    )
    deprecated.add_argument(
        "--left-brace-newline",
        action="store_true",
        default=None,
        help=DEPRECATED_HELP % "--brace-newline",
    )
    deprecated.add_argument(
        "--reindent-spaces",
        type=int,
        default=None,
        metavar="N",
        help=DEPRECATED_HELP % "--indent",
    )
    return parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="r-tidy",
        description="Reformat R source code while keeping comments and blank lines.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress (-v) or debugging details (-vv)",
    )
    subparsers = parser.add_subparsers(dest="command")

    tidy = with_option_arguments(
        subparsers.add_parser("tidy", help="Tidy files or stdin and print the result")
    )
    tidy.add_argument("files", nargs="*", metavar="FILE", help="'-' or nothing reads stdin")
    destination = tidy.add_mutually_exclusive_group()
    destination.add_argument(
        "-i", "--in-place", action="store_true", help="overwrite each FILE"
    )
    destination.add_argument(
        "-o", "--output", metavar="PATH", help="write to PATH instead of stdout"
    )
    tidy.add_argument(
        "--no-color", dest="color", action="store_false", help="never colorize output"
    )

    check = with_option_arguments(
        subparsers.add_parser("check", help="Exit 1 when a file would be reformatted")
    )
    check.add_argument("files", nargs="+", metavar="FILE")

    directory = with_option_arguments(
        subparsers.add_parser("dir", help="Tidy every R script under a directory in place")
    )
    directory.add_argument("path", nargs="?", default=".", metavar="PATH")
    directory.add_argument(
        "-r", "--recursive", action="store_true", help="descend into subdirectories"
    )
    directory.add_argument(
        "-j", "--jobs", type=int, default=None, metavar="N", help="worker processes"
    )

    usage = subparsers.add_parser("usage", help="Print the usage of functions in a file")
    usage.add_argument("file", metavar="FILE")
    usage.add_argument("--name", default=None, help="only this function")
    usage.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        metavar="N",
        help=f"target line width (default: {DEFAULT_WIDTH})",
    )
    usage.add_argument(
        "--no-indent-by-name",
        dest="indent_by_name",
        action="store_false",
        help="indent continuation lines by four spaces instead of the name",
    )
    return parser
