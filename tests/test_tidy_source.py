import io
from textwrap import dedent

import pytest

from r_tidy import (MaskingError, RSyntaxError, TidyOptions, tidy_source,
                    tidy_text)
from r_tidy.engine import parse_expressions, render
from r_tidy.exceptions import DeprecatedOptionWarning
from r_tidy.masking import BEGIN_COMMENT, END_COMMENT


def tidy(text: str, **option_values) -> list[str]:
    return tidy_source(text=text, output=False, **option_values).text_tidy


def test_trailing_comment_and_blank_lines():
    assert tidy("x=1 # set x\ny=2\n\n\n", arrow=True) == [
        "x <- 1  # set x",
        "y <- 2",
        "",
        "",
    ]


def test_only_a_comment():
    assert tidy("# just a comment\n") == ["# just a comment"]


def test_comment_before_else():
    source = dedent("""
        f <- function(x) {
          if (x) {
            1
          } # comment
          else {
            2
          }
        }
    """).strip("\n")
    assert tidy(source) == [
        "f <- function(x) {",
        "    if (x) {",
        "        1",
        "    } else {  # comment",
        "        2",
        "    }",
        "}",
    ]


def test_comment_inside_call():
    assert tidy("f(a, # first\n  b)") == ["f(a,  # first", "    b)"]


def test_own_line_comment_between_arguments():
    assert tidy("f(a, # one\n  # two\n  b)") == ["f(a,  # one", "    # two", "    b)"]


def test_comment_between_parameters():
    source = dedent("""
        f <- function(x, # the data
          y) {
          x + y
        }
    """).strip("\n")
    assert tidy(source) == [
        "f <- function(x,  # the data",
        "    y) {",
        "    x + y",
        "}",
    ]


def test_comment_after_if_condition():
    assert tidy("if (a) # why\n  b") == ["if (a) b  # why"]


def test_own_line_comment_inside_an_expression():
    assert tidy("x <- a +\n  # then\n  b") == ["x <- a + b", "# then"]


def test_comment_and_blank_line_in_block():
    source = dedent("""
        f <- function() {
          # inside
          a

          b
        }
    """).strip("\n")
    assert tidy(source) == [
        "f <- function() {",
        "    # inside",
        "    a",
        "",
        "    b",
        "}",
    ]


def test_leading_and_trailing_blank_lines():
    assert tidy("\n\nx<-1\n\n") == ["", "", "x <- 1", ""]


def test_no_comment():
    assert tidy("x <- 1 # c\n# gone\ny", comment=False) == ["x <- 1", "y"]


def test_no_blank():
    assert tidy("\nx\n\ny\n\n", blank=False) == ["x", "y"]


def test_brace_newline():
    assert tidy("if (a) {\nb\n}", brace_newline=True) == ["if (a)", "{", "    b", "}"]


def test_indent():
    assert tidy("if (a) {\nb\n}", indent=2) == ["if (a) {", "  b", "}"]


def test_width_cutoff():
    source = "f(aaaaaaaaaa, bbbbbbbbbb, cccccccccc, dddddddddd)"
    assert tidy(source, width_cutoff=30) == [
        "f(aaaaaaaaaa, bbbbbbbbbb,",
        "    cccccccccc, dddddddddd)",
    ]


def test_comment_free_input_matches_the_renderer():
    source = "f<-function(x,y=2){x+y}\nz=f(1)"
    expected = "\n".join(render(expr) for expr in parse_expressions(source))
    result = tidy_text(source, TidyOptions(comment=False, blank=False))
    assert result.text == expected


def test_idempotent():
    source = dedent("""
        # setup
        x=c(1,2) # numbers


        f<-function(a,# first
          b){
          if(a){b} # positive
          else{-b}
        }
    """)
    once = tidy(source, arrow=True)
    assert tidy("\n".join(once), arrow=True) == once


def test_text_mask_keeps_placeholders():
    result = tidy_source(text="# hi", output=False)
    assert result.text_tidy == ["# hi"]
    assert BEGIN_COMMENT in result.text_mask[0]


def test_empty_input():
    assert tidy("") == []
    assert tidy("\n\n") == ["", ""]


def test_deprecated_option():
    with pytest.warns(DeprecatedOptionWarning):
        assert tidy("x=1", replace_assign=True) == ["x <- 1"]


def test_syntax_error():
    with pytest.raises(RSyntaxError):
        tidy("x <- (1 + ")


def test_reserved_marker_in_comment():
    with pytest.raises(MaskingError):
        tidy(f"x <- 1 # {BEGIN_COMMENT}")


def test_reserved_marker_in_code():
    source = f'x <- invisible("{BEGIN_COMMENT}hi{END_COMMENT}")'
    with pytest.raises(MaskingError, match="restored 1"):
        tidy(source)


def test_output_to_stream():
    stream = io.StringIO()
    tidy_source(text="x<-1", file=stream)
    assert stream.getvalue() == "x <- 1\n"


def test_output_to_stdout(capsys):
    tidy_source(text=["a<-1", "b<-2"])
    assert capsys.readouterr().out == "a <- 1\nb <- 2\n"


def test_read_and_write_files(tmp_path):
    source = tmp_path / "in.R"
    source.write_text("x<-1 # one\n")
    target = tmp_path / "out.R"
    result = tidy_source(source, file=target)
    assert str(result) == "x <- 1  # one"
    assert target.read_text() == "x <- 1  # one\n"
    assert source.read_text() == "x<-1 # one\n"
