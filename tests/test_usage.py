import pytest

from r_tidy.usage import usage


def test_usage_single_function():
    assert usage("f <- function(x, y = 2, ...) NULL") == "f(x, y = 2, ...)"


def test_usage_all_functions():
    source = "f <- function(x) x\ng = function() NULL\nh <- 1"
    assert usage(source) == "f(x)\ng()"


def test_usage_by_name():
    source = "f <- function(x) x\ng <- function(a, b) a"
    assert usage(source, name="g") == "g(a, b)"


def test_usage_unknown_name():
    with pytest.raises(ValueError, match="nope"):
        usage("f <- function(x) x", name="nope")


def test_usage_wraps_under_the_name():
    source = "long_function_name <- function(alpha, beta, gamma) NULL"
    assert usage(source, width=30) == (
        "long_function_name(alpha,\n"
        + " " * 19
        + "beta,\n"
        + " " * 19
        + "gamma)"
    )


def test_usage_wraps_with_fixed_indent():
    source = "long_function_name <- function(alpha, beta, gamma) NULL"
    assert usage(source, width=30, indent_by_name=False) == (
        "long_function_name(alpha,\n    beta, gamma)"
    )


def test_usage_from_file(tmp_path):
    path = tmp_path / "funcs.R"
    path.write_text("area <- function(w, h = w) w * h\n")
    assert usage(path) == "area(w, h = w)"
