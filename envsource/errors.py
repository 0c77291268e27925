"""
Error types raised while parsing and sourcing environment definition files.

Line errors describe why a single line could not be turned into a
name/value pair. The driver wraps them (and any visitor failure) in a
`SourcingError` that carries the 1-based line number.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Line error codes."""
    NON_VARIABLE_LINE = "non_variable_line"
    INVALID_NAME = "invalid_name"
    UNCLOSED_QUOTE = "unclosed_quote"
    UNQUOTE_ERROR = "unquote_error"
    INVALID_LEADING_WHITESPACE = "invalid_leading_whitespace"


class EnvSourceError(Exception):
    """Base class for everything raised by envsource."""


class LineError(EnvSourceError, ValueError):
    """A single line could not be parsed.

    Attributes:
        kind: ErrorKind of the failure
        text: The offending text (line, name or value depending on kind)
    """
    kind: ErrorKind

    def __init__(self, text: str, message: str):
        super().__init__(message)
        self.text = text


class NonVariableLineError(LineError):
    """Line is neither blank, a comment, nor a variable definition.

    E.g. "export", "cat in.csv > out.csv" or "name".
    """
    kind = ErrorKind.NON_VARIABLE_LINE

    def __init__(self, line: str):
        super().__init__(line, f"line does not contain a variable definition {line!r}")


class InvalidNameError(LineError):
    """Name is empty, contains whitespace, or contains the comment token."""
    kind = ErrorKind.INVALID_NAME

    def __init__(self, name: str):
        super().__init__(name, f"name {name!r} is invalid")


class UnclosedQuoteError(LineError):
    kind = ErrorKind.UNCLOSED_QUOTE

    def __init__(self, value: str, quote: str):
        super().__init__(value, f"value {value!r} cannot start with unclosed quote {quote!r}")
        self.quote = quote


class UnquoteError(LineError):
    """The unquote strategy rejected a quoted value."""
    kind = ErrorKind.UNQUOTE_ERROR

    def __init__(self, value: str, reason: str = ""):
        message = f"cannot unquote value {value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(value, message)
        self.reason = reason


class InvalidLeadingWhitespaceError(LineError):
    """Whitespace sits between the equal sign and the value."""
    kind = ErrorKind.INVALID_LEADING_WHITESPACE

    def __init__(self, value: str):
        super().__init__(value, f"invalid whitespace at beginning of value {value!r}")


class SetenvError(EnvSourceError, OSError):
    """The platform refused to set an environment variable."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"cannot set environment variable {name!r}: {reason}")
        self.name = name
        self.reason = reason


class SourcingError(EnvSourceError):
    """Parsing or visiting failed on a specific line.

    Attributes:
        line: 1-based line number the failure occurred on
        error: The underlying LineError or visitor exception
    """

    def __init__(self, line: int, error: BaseException, source: Optional[str] = None):
        self.line = line
        self.error = error
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}line {line}: {error}")

    @property
    def kind(self) -> Optional[ErrorKind]:
        """ErrorKind of the wrapped line error, None for visitor failures."""
        return getattr(self.error, "kind", None)
