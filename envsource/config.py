"""
Sourcer configuration.

A `SourcerConfig` names the tokens the line parser recognizes. Setting a
token to the empty string disables that feature entirely:

- comment: start of a whole-line or trailing comment
- quote: delimiter that may enclose a value to allow whitespace, comment
  characters and escapes
- export: keyword that may prefix a definition without changing it, so a
  file can also be sourced by a shell
"""
import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from .quoting import unquote as default_unquote

logger = logging.getLogger(__name__)

DEFAULT_COMMENT = "#"
DEFAULT_QUOTE = '"'
DEFAULT_EXPORT = "export"

# Characters trimmed and rejected around names and values.
SPACE_TAB = " \t"

ENV_PREFIX = "ENVSOURCE_"


@dataclass(frozen=True)
class SourcerConfig:
    """Tokens and unquote strategy used while parsing a source.

    Attributes:
        comment: Comment token ("" disables comments)
        quote: Quote token ("" disables quoting)
        export: Export keyword ("" disables the prefix)
        unquote: Callable mapping a full quoted literal, delimiters included,
            to its value. Any exception it raises is reported as UnquoteError.
    """
    comment: str = DEFAULT_COMMENT
    quote: str = DEFAULT_QUOTE
    export: str = DEFAULT_EXPORT
    unquote: Callable[[str], str] = default_unquote

    def __post_init__(self):
        """Validate token types."""
        for field_name in ("comment", "quote", "export"):
            value = getattr(self, field_name)
            if not isinstance(value, str):
                raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")
        if not callable(self.unquote):
            raise TypeError("unquote must be callable")

    def replace(self, **changes) -> "SourcerConfig":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
    ) -> "SourcerConfig":
        """Build a config from ENVSOURCE_COMMENT, ENVSOURCE_QUOTE and ENVSOURCE_EXPORT.

        Unset variables keep the defaults. A variable that is set but empty
        disables the corresponding feature.
        """
        env = os.environ if environ is None else environ
        changes = {}
        for field_name in ("comment", "quote", "export"):
            key = f"{prefix}{field_name.upper()}"
            value = env.get(key)
            if value is not None:
                changes[field_name] = value
                logger.debug(f"{key} overrides {field_name} token: {value!r}")
        return cls(**changes)


DEFAULT_CONFIG = SourcerConfig()
