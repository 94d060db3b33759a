class TidyError(Exception):
    """Base class for errors raised while tidying R source."""

    pass


class RSyntaxError(TidyError, SyntaxError):
    """Raised when the input is not syntactically valid R."""

    pass


class MaskingError(TidyError):
    """Raised when a comment cannot be carried through the parser."""

    pass


class ConfigError(TidyError, ValueError):
    pass


class DeprecatedOptionWarning(FutureWarning):
    """Emitted when a deprecated option name is used."""

    pass


ParseError = RSyntaxError
