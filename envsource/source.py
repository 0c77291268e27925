"""
Source driver.

Reads a text stream line by line, parses each line and hands every
definition to a visitor. The first parse or visitor failure stops the
run and is raised as a `SourcingError` tagged with its 1-based line
number, so the stream is not guaranteed to be fully consumed afterwards.
Read failures of the stream itself propagate unwrapped.
"""
import io
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, MutableMapping, Optional, Tuple, Union

from .config import DEFAULT_CONFIG, SourcerConfig
from .errors import LineError, SetenvError, SourcingError
from .parser import Entry, ParseOutcome, name_var, parse_line

logger = logging.getLogger(__name__)

Visitor = Callable[[str, str], None]
PathLike = Union[str, "os.PathLike[str]"]


def _strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class EnvironVisitor:
    """Visitor that sets each definition into an environment mapping.

    Args:
        environ: Target mapping (default: os.environ)
        override: If False, names already present in environ are left untouched
    """

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None, override: bool = True):
        self.environ = os.environ if environ is None else environ
        self.override = override

    def __call__(self, name: str, value: str) -> None:
        if not self.override and name in self.environ:
            logger.debug(f"Keeping existing value of {name}")
            return
        try:
            self.environ[name] = value
        except (ValueError, OSError) as exc:
            raise SetenvError(name, str(exc)) from exc


class CollectingVisitor:
    """Visitor that appends each definition, in order, to `pairs`."""

    def __init__(self):
        self.pairs: List[Tuple[str, str]] = []

    def __call__(self, name: str, value: str) -> None:
        self.pairs.append((name, value))


def drive(
    stream: Iterable[str],
    visit: Visitor,
    config: SourcerConfig = DEFAULT_CONFIG,
    source_name: Optional[str] = None,
) -> int:
    """Parse every line of `stream` and call `visit(name, value)` per definition.

    Args:
        stream: Text stream or any iterable of lines
        visit: Called once per definition, in order
        config: Tokens to recognize
        source_name: Optional label (e.g. a file path) included in errors

    Returns:
        Number of definitions visited

    Raises:
        SourcingError: On the first line that fails to parse or visit
    """
    visited = 0
    for line_number, raw_line in enumerate(stream, start=1):
        line = _strip_newline(raw_line)
        try:
            outcome = parse_line(line, config)
        except LineError as exc:
            raise SourcingError(line_number, exc, source_name) from exc

        if not isinstance(outcome, Entry):
            logger.debug(f"Line {line_number}: skipped")
            continue

        try:
            visit(outcome.name, outcome.value)
        except Exception as exc:
            raise SourcingError(line_number, exc, source_name) from exc
        visited += 1
        logger.debug(f"Line {line_number}: visited {outcome.name}")
    return visited


class Sourcer:
    """Parses environment definition sources with a fixed configuration.

    Example:
        >>> sourcer = Sourcer()
        >>> sourcer.name_vars_string("a=1\\nexport b=2\\n")
        [('a', '1'), ('b', '2')]
    """

    def __init__(self, config: Optional[SourcerConfig] = None):
        self.config = DEFAULT_CONFIG if config is None else config

    def parse_line(self, line: str) -> ParseOutcome:
        return parse_line(line, self.config)

    def name_var(self, line: str) -> Optional[Tuple[str, str]]:
        return name_var(line, self.config)

    def visit(self, stream: Iterable[str], visit: Visitor, source_name: Optional[str] = None) -> int:
        """Drive `visit` over every definition in `stream`."""
        return drive(stream, visit, self.config, source_name)

    def source(
        self,
        stream: Iterable[str],
        environ: Optional[MutableMapping[str, str]] = None,
        override: bool = True,
        source_name: Optional[str] = None,
    ) -> int:
        """Set every definition in `stream` into `environ` (default: os.environ).

        Definitions visited before a failing line stay set.
        """
        return self.visit(stream, EnvironVisitor(environ, override), source_name)

    def source_file(
        self,
        path: PathLike,
        environ: Optional[MutableMapping[str, str]] = None,
        override: bool = True,
        encoding: str = "utf-8",
    ) -> int:
        """Open `path`, source it into `environ` and close it again.

        Raises:
            OSError: If the file cannot be opened or read
            SourcingError: On the first failing line
        """
        path = Path(path)
        with path.open("r", encoding=encoding, newline="\n") as handle:
            count = self.source(handle, environ, override, source_name=str(path))
        logger.info(f"Sourced {count} variable(s) from {path}")
        return count

    def source_string(
        self,
        text: str,
        environ: Optional[MutableMapping[str, str]] = None,
        override: bool = True,
    ) -> int:
        return self.source(io.StringIO(text, newline="\n"), environ, override)

    def name_vars(self, stream: Iterable[str], source_name: Optional[str] = None) -> List[Tuple[str, str]]:
        """Return all (name, value) definitions in `stream`, in order.

        Nothing is returned if any line fails; the SourcingError propagates.
        """
        collector = CollectingVisitor()
        self.visit(stream, collector, source_name)
        return collector.pairs

    def name_vars_file(self, path: PathLike, encoding: str = "utf-8") -> List[Tuple[str, str]]:
        path = Path(path)
        with path.open("r", encoding=encoding, newline="\n") as handle:
            return self.name_vars(handle, source_name=str(path))

    def name_vars_string(self, text: str) -> List[Tuple[str, str]]:
        return self.name_vars(io.StringIO(text, newline="\n"))


_default_sourcer = Sourcer()


def source(
    stream: Iterable[str],
    environ: Optional[MutableMapping[str, str]] = None,
    override: bool = True,
) -> int:
    """Source `stream` into os.environ (or `environ`) with the default configuration."""
    return _default_sourcer.source(stream, environ, override)


def source_file(
    path: PathLike,
    environ: Optional[MutableMapping[str, str]] = None,
    override: bool = True,
    encoding: str = "utf-8",
) -> int:
    return _default_sourcer.source_file(path, environ, override, encoding)


def name_vars(stream: Iterable[str]) -> List[Tuple[str, str]]:
    return _default_sourcer.name_vars(stream)


def name_vars_file(path: PathLike, encoding: str = "utf-8") -> List[Tuple[str, str]]:
    return _default_sourcer.name_vars_file(path, encoding)
