"""envsource - parse and source dotenv-style environment definition files"""
__version__ = "0.1.0"

from .config import (
    DEFAULT_COMMENT,
    DEFAULT_CONFIG,
    DEFAULT_EXPORT,
    DEFAULT_QUOTE,
    SourcerConfig,
)
from .errors import (
    EnvSourceError,
    ErrorKind,
    InvalidLeadingWhitespaceError,
    InvalidNameError,
    LineError,
    NonVariableLineError,
    SetenvError,
    SourcingError,
    UnclosedQuoteError,
    UnquoteError,
)
from .parser import SKIP, Entry, Skip, name_var, normalize_value, parse_line
from .quoting import quote, unquote
from .source import (
    CollectingVisitor,
    EnvironVisitor,
    Sourcer,
    drive,
    name_vars,
    name_vars_file,
    source,
    source_file,
)
from .utils.env_loader import load_dotenv

__all__ = [
    # Configuration
    "SourcerConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_COMMENT",
    "DEFAULT_QUOTE",
    "DEFAULT_EXPORT",
    # Errors
    "EnvSourceError",
    "ErrorKind",
    "LineError",
    "NonVariableLineError",
    "InvalidNameError",
    "UnclosedQuoteError",
    "UnquoteError",
    "InvalidLeadingWhitespaceError",
    "SetenvError",
    "SourcingError",
    # Line parser
    "Entry",
    "Skip",
    "SKIP",
    "parse_line",
    "name_var",
    "normalize_value",
    # Quoting
    "quote",
    "unquote",
    # Driver
    "Sourcer",
    "EnvironVisitor",
    "CollectingVisitor",
    "drive",
    "source",
    "source_file",
    "name_vars",
    "name_vars_file",
    "load_dotenv",
]
