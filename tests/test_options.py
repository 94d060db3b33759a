import pytest

from r_tidy.exceptions import ConfigError, DeprecatedOptionWarning
from r_tidy.options import TidyOptions, resolve_options


def test_defaults():
    options = TidyOptions()
    assert options.comment and options.blank
    assert not options.arrow and not options.brace_newline
    assert options.indent == 4
    assert options.width_cutoff == 80


@pytest.mark.parametrize("width", [19, 501, 80.0, True])
def test_invalid_width(width):
    with pytest.raises(ConfigError):
        TidyOptions(width_cutoff=width)


def test_invalid_indent():
    with pytest.raises(ConfigError):
        TidyOptions(indent=-1)


def test_resolve_current_names():
    options = resolve_options(arrow=True, width_cutoff=60)
    assert options == TidyOptions(arrow=True, width_cutoff=60)


def test_resolve_on_top_of_base_options():
    base = TidyOptions(indent=2)
    assert resolve_options(base, blank=False) == TidyOptions(indent=2, blank=False)


def test_resolve_deprecated_name():
    with pytest.warns(DeprecatedOptionWarning, match="replace_assign"):
        options = resolve_options(replace_assign=True)
    assert options.arrow


def test_resolve_deprecated_and_current_agree():
    with pytest.warns(DeprecatedOptionWarning):
        options = resolve_options(reindent_spaces=2, indent=2)
    assert options.indent == 2


def test_resolve_deprecated_and_current_conflict():
    with pytest.warns(DeprecatedOptionWarning), pytest.raises(ConfigError):
        resolve_options(keep_comment=False, comment=True)


def test_resolve_unknown_option():
    with pytest.raises(ConfigError, match="bogus"):
        resolve_options(bogus=1)


def test_deprecated_warning_is_a_future_warning():
    assert issubclass(DeprecatedOptionWarning, FutureWarning)
