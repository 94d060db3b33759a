"""Immutable formatting options and the deprecated-name merge."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, fields, replace
from typing import Any

from r_tidy.exceptions import ConfigError, DeprecatedOptionWarning

DEFAULT_WIDTH = 80
MIN_WIDTH = 20
MAX_WIDTH = 500

DEPRECATED_OPTIONS: dict[str, str] = {
    "keep_comment": "comment",
    "keep_blank_line": "blank",
    "replace_assign": "arrow",
    "left_brace_newline": "brace_newline",
    "reindent_spaces": "indent",
}


@dataclass(frozen=True, slots=True)
class TidyOptions:
    """Settings governing a single tidy run."""

    comment: bool = True
    blank: bool = True
    arrow: bool = False
    brace_newline: bool = False
    indent: int = 4
    width_cutoff: int = DEFAULT_WIDTH

    def __post_init__(self) -> None:
        """Reject values the renderer cannot honour before any work starts."""
        if isinstance(self.width_cutoff, bool) or not isinstance(self.width_cutoff, int):
            raise ConfigError(
                f"width_cutoff must be an integer, got {self.width_cutoff!r}"
            )
        if not MIN_WIDTH <= self.width_cutoff <= MAX_WIDTH:
            raise ConfigError(
                f"width_cutoff must be in [{MIN_WIDTH}, {MAX_WIDTH}], "
                f"got {self.width_cutoff}"
            )
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise ConfigError(f"indent must be an integer, got {self.indent!r}")
        if self.indent < 0:
            raise ConfigError(f"indent must not be negative, got {self.indent}")

    def model_copy(self, update: dict[str, Any] | None = None) -> TidyOptions:
        if not update:
            return self
        return replace(self, **update)


OPTION_NAMES = frozenset(option.name for option in fields(TidyOptions))


def resolve_options(
    options: TidyOptions | None = None, /, **values: Any
) -> TidyOptions:
    """Merge keyword values, deprecated names included, into one TidyOptions.

    Deprecated names take effect and warn. Giving a deprecated name together
    with its replacement is only accepted when both carry the same value.
    """
    base = options if options is not None else TidyOptions()
    unknown = sorted(
        name
        for name in values
        if name not in OPTION_NAMES and name not in DEPRECATED_OPTIONS
    )
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")

    update = {
        name: value for name, value in values.items() if name in OPTION_NAMES
    }
    for old_name, new_name in DEPRECATED_OPTIONS.items():
        if old_name not in values:
            continue
        value = values[old_name]
        warnings.warn(
            f"The option '{old_name}' is deprecated; please use '{new_name}'",
            DeprecatedOptionWarning,
            stacklevel=3,
        )
        if new_name in update and update[new_name] != value:
            raise ConfigError(
                f"Conflicting values for '{new_name}' ({update[new_name]!r}) "
                f"and its deprecated alias '{old_name}' ({value!r})"
            )
        update[new_name] = value
    return base.model_copy(update=update)


__all__ = [
    "DEFAULT_WIDTH",
    "DEPRECATED_OPTIONS",
    "OPTION_NAMES",
    "TidyOptions",
    "resolve_options",
]
