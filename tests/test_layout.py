"""Line-level passes run after rendering."""

from r_tidy.blank import BlankRuns, record_blank_runs, restore_blank_runs
from r_tidy.brace import move_leftbrace
from r_tidy.reindent import reindent_lines
from r_tidy.scan import ScanState, scan_line


def test_scan_line_ignores_brackets_in_strings_and_comments():
    scanned, state = scan_line('f("(", x) # )')
    assert [char for _, char in scanned.brackets] == ["(", ")"]
    assert scanned.comment_start == 10
    assert state == ScanState()


def test_scan_line_carries_open_strings():
    scanned, state = scan_line('x <- "abc')
    assert scanned.ends_in_string
    scanned, state = scan_line('def" + (', state)
    assert scanned.starts_in_string
    assert not scanned.ends_in_string
    assert scanned.brackets == [(7, "(")]


def test_scan_line_raw_strings():
    scanned, state = scan_line('r"(a ) " ( b)" + 1')
    assert scanned.brackets == []
    assert state == ScanState()


def test_reindent_continuation_lines():
    assert reindent_lines(["f(a,", "b)", "x"]) == ["f(a,", "    b)", "x"]


def test_reindent_counts_each_line_once():
    assert reindent_lines(["f(g(", "x))"]) == ["f(g(", "    x))"]


def test_reindent_closing_brace():
    assert reindent_lines(["if (a) {", "  b", "    }"]) == ["if (a) {", "    b", "}"]


def test_reindent_spaced_closers():
    assert reindent_lines(["f({", "x", "} )"]) == ["f({", "    x", "} )"]


def test_reindent_custom_width():
    assert reindent_lines(["if (a) {", "b", "}"], indent=2) == ["if (a) {", "  b", "}"]


def test_reindent_leaves_multiline_strings():
    lines = ['x <- "a', '   b"', "  y"]
    assert reindent_lines(lines) == ['x <- "a', '   b"', "y"]


def test_reindent_blank_lines_are_empty():
    assert reindent_lines(["{", "   ", "x", "}"]) == ["{", "", "    x", "}"]


def test_move_leftbrace():
    lines = ["if (a) {", "    b", "} else {", "    c", "}"]
    assert move_leftbrace(lines) == [
        "if (a)",
        "{",
        "    b",
        "} else",
        "{",
        "    c",
        "}",
    ]


def test_move_leftbrace_keeps_indentation():
    lines = ["f <- function() {", "    for (i in x) {", "    }", "}"]
    assert move_leftbrace(lines) == [
        "f <- function()",
        "{",
        "    for (i in x)",
        "    {",
        "    }",
        "}",
    ]


def test_move_leftbrace_ignores_comments_and_strings():
    lines = ["if (a) {  # note", 'x <- "{"', "{"]
    assert move_leftbrace(lines) == lines


def test_record_blank_runs():
    assert record_blank_runs("\n\nx\n\n\n") == BlankRuns(leading=2, trailing=3)
    assert record_blank_runs("x") == BlankRuns()


def test_restore_blank_runs():
    runs = BlankRuns(leading=1, trailing=2)
    assert restore_blank_runs(["x"], runs) == ["", "x", "", ""]
