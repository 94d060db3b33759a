from textwrap import dedent

import pytest

from r_tidy.exceptions import MaskingError, RSyntaxError
from r_tidy.masking import (BEGIN_COMMENT, BLANK_PLACEHOLDER, COMMA_AFTER,
                            END_COMMENT, INLINE_MARKER, OWN_LINE_PREFIX,
                            CommentKind, brace_placeholder, escape_comment,
                            item_placeholder, mask_comments,
                            standalone_placeholder, unescape_comment)


def test_escape_comment_quotes_and_backslashes():
    text = '# say "hi" \\ bye'
    escaped = escape_comment(text)
    assert escaped == '# say \\"hi\\" \\\\ bye'
    assert unescape_comment(escaped) == text


def test_escape_comment_rejects_markers():
    with pytest.raises(MaskingError):
        escape_comment(f"# {BEGIN_COMMENT}")
    with pytest.raises(MaskingError):
        escape_comment(f"# {INLINE_MARKER}", (3, 0))


def test_mask_standalone_comment():
    masked = mask_comments("# just a comment")
    assert masked.text == f'invisible("{BEGIN_COMMENT}# just a comment{END_COMMENT}")'
    assert [record.kind for record in masked.comments] == [CommentKind.STANDALONE]
    assert masked.comments[0].raw_text == "# just a comment"


def test_mask_inline_comment():
    masked = mask_comments("x <- 1 # set x")
    assert masked.text.rstrip() == f'x <- 1 {INLINE_MARKER} "# set x"'
    assert masked.comments[0].kind is CommentKind.INLINE


def test_mask_inline_comment_skips_comma():
    masked = mask_comments("f(a, # first\n  b)")
    assert masked.text.startswith(f'f(a {INLINE_MARKER} "# first",')


def test_mask_comment_after_brace():
    masked = mask_comments("if (a) { # why\n  b\n}")
    assert brace_placeholder("# why") in masked.text
    assert masked.comments[0].kind is CommentKind.INLINE


def test_mask_comment_in_block():
    source = dedent("""
        f <- function() {
          # inside
          1
        }
    """).strip("\n")
    masked = mask_comments(source)
    assert standalone_placeholder("# inside") in masked.text


def test_mask_blank_lines():
    masked = mask_comments("x <- 1\n\ny <- 2")
    assert masked.text == f"x <- 1\n{BLANK_PLACEHOLDER}\ny <- 2"
    assert masked.comments[0].raw_text == ""


def test_mask_blank_lines_disabled():
    masked = mask_comments("x <- 1\n\ny <- 2", blank=False)
    assert masked.text == "x <- 1\n\ny <- 2"
    assert masked.comments == []


def test_mask_keeps_blank_lines_inside_a_call():
    masked = mask_comments("f(a,\n\n  b)")
    assert BLANK_PLACEHOLDER not in masked.text


def test_mask_records_are_in_source_order():
    masked = mask_comments("# one\nx <- 1 # two\n\n# three")
    assert [record.raw_text for record in masked.comments] == [
        "# one",
        "# two",
        "",
        "# three",
    ]


def test_mask_rejects_invalid_code():
    with pytest.raises(RSyntaxError):
        mask_comments("x <- ) # oops")


def test_mask_comment_between_arguments_takes_a_slot():
    masked = mask_comments("f(a,\n  # note\n  b)")
    placeholder = item_placeholder(COMMA_AFTER + OWN_LINE_PREFIX + "# note")
    assert masked.text == f"f(a,\n  {placeholder},\n  b)"
    assert masked.comments[0].kind is CommentKind.STANDALONE


def test_mask_comment_alone_in_a_call():
    masked = mask_comments("c(\n  # nothing yet\n)")
    placeholder = item_placeholder(OWN_LINE_PREFIX + "# nothing yet")
    assert masked.text == f"c(\n  {placeholder}\n)"


def test_mask_comment_after_a_parameter_name():
    masked = mask_comments("function(x, # the data\n  y) x")
    placeholder = item_placeholder(COMMA_AFTER + "# the data")
    assert masked.text == f"function(x, {placeholder},\n  y) x"
    assert masked.comments[0].kind is CommentKind.INLINE


def test_mask_comment_rides_on_the_next_expression():
    masked = mask_comments("if (a) # why\n  b")
    assert masked.text == f'if (a) \n  b {INLINE_MARKER} "# why"'
    assert masked.comments[0].kind is CommentKind.INLINE


def test_mask_own_line_comment_inside_an_expression():
    masked = mask_comments("x <- a +\n  # then\n  b")
    assert masked.text == f'x <- a +\n  \n  b {INLINE_MARKER} "{OWN_LINE_PREFIX}# then"'
    assert masked.comments[0].kind is CommentKind.STANDALONE
