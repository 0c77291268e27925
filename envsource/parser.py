"""
Line parser for environment definition files.

`parse_line` maps a single line (without its newline) to an `Entry`, to
`SKIP` for blank and comment lines, or raises a `LineError`. It performs
no I/O and keeps no state.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .config import DEFAULT_CONFIG, SPACE_TAB, SourcerConfig
from .errors import (
    InvalidLeadingWhitespaceError,
    InvalidNameError,
    NonVariableLineError,
    UnclosedQuoteError,
    UnquoteError,
)


@dataclass(frozen=True)
class Entry:
    """A parsed variable definition."""
    name: str
    value: str

    def as_tuple(self) -> Tuple[str, str]:
        return (self.name, self.value)


class Skip:
    """Outcome for lines that carry no definition (blank or whole-line comment)."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "SKIP"

    def __bool__(self):
        return False


SKIP = Skip()

ParseOutcome = Union[Entry, Skip]


def _starts_with_comment(text: str, config: SourcerConfig) -> bool:
    return bool(config.comment) and text.startswith(config.comment)


def is_name_invalid(name: str, config: SourcerConfig = DEFAULT_CONFIG) -> bool:
    """Check a left-trimmed name against the naming rules of `config`."""
    return (
        not name
        or any(c in SPACE_TAB for c in name)
        or (bool(config.comment) and config.comment in name)
    )


def normalize_value(raw_value: str, config: SourcerConfig = DEFAULT_CONFIG) -> str:
    """Turn the text following the first '=' into the value to store.

    Quoted values are passed whole, delimiters included, to
    `config.unquote`. Unquoted values lose any trailing comment and
    trailing whitespace, and must not start with whitespace.

    Raises:
        UnclosedQuoteError: Value starts with the quote token but does not end with it
        UnquoteError: The unquote strategy rejected the quoted value
        InvalidLeadingWhitespaceError: Whitespace follows the equal sign
    """
    if not raw_value:
        return ""

    quote = config.quote
    if quote and raw_value.startswith(quote):
        if raw_value.endswith(quote) and raw_value != quote:
            try:
                return config.unquote(raw_value)
            except UnquoteError:
                raise
            except Exception as exc:
                raise UnquoteError(raw_value, str(exc)) from exc
        raise UnclosedQuoteError(raw_value, quote)

    value = raw_value
    if config.comment:
        comment_index = value.find(config.comment)
        if comment_index >= 0:
            value = value[:comment_index]
    value = value.rstrip(SPACE_TAB)

    if value != value.lstrip(SPACE_TAB):
        raise InvalidLeadingWhitespaceError(raw_value)
    return value


def parse_line(line: str, config: SourcerConfig = DEFAULT_CONFIG) -> ParseOutcome:
    """Parse one line into an Entry, or SKIP if it holds no definition.

    Args:
        line: Line of text without its trailing newline
        config: Tokens to recognize

    Returns:
        Entry(name, value), or SKIP for blank and comment lines

    Raises:
        NonVariableLineError: Line is not blank, a comment, or a definition
        InvalidNameError: Name is empty, contains whitespace or the comment token
        UnclosedQuoteError, UnquoteError, InvalidLeadingWhitespaceError: see normalize_value
    """
    original = line
    line = line.lstrip(SPACE_TAB)

    # "export" on its own, or followed only by a comment, is not a definition.
    if config.export and line.startswith(config.export):
        line = line[len(config.export):].lstrip(SPACE_TAB)
        if not line or _starts_with_comment(line, config):
            raise NonVariableLineError(original)

    equal_index = line.find("=")
    if equal_index < 0:
        line = line.lstrip(SPACE_TAB)
        if not line or _starts_with_comment(line, config):
            return SKIP
        raise NonVariableLineError(original)

    raw_name, raw_value = line[:equal_index], line[equal_index + 1:]

    # A comment marker before the name wins over the assignment.
    if _starts_with_comment(line.lstrip(SPACE_TAB), config):
        return SKIP

    name = raw_name.lstrip(SPACE_TAB)
    if is_name_invalid(name, config):
        raise InvalidNameError(name)

    return Entry(name, normalize_value(raw_value, config))


def name_var(line: str, config: SourcerConfig = DEFAULT_CONFIG) -> Optional[Tuple[str, str]]:
    """Tuple form of parse_line: (name, value), or None for skipped lines."""
    outcome = parse_line(line, config)
    if isinstance(outcome, Entry):
        return outcome.as_tuple()
    return None
