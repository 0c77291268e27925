"""Environment loader utilities.

`load_dotenv` sources a local `.env` file into `os.environ` so API keys and
other settings can stay out of code.

Security:
  - `.env` should remain uncommitted.
  - This loader does NOT log values, only names and counts.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import MutableMapping, Optional

from ..config import SourcerConfig
from ..source import Sourcer

logger = logging.getLogger(__name__)


def load_dotenv(
    path: str | os.PathLike[str] = ".env",
    *,
    override: bool = False,
    config: Optional[SourcerConfig] = None,
    environ: Optional[MutableMapping[str, str]] = None,
) -> bool:
    """Load environment variables from a .env file.

    Args:
        path: Path to .env file (default: ".env" in current working directory).
        override: If True, overwrite existing environment keys.
        config: Parser tokens (default: SourcerConfig()).
        environ: Target mapping (default: os.environ).

    Returns:
        True if a file was found and sourced; False if file does not exist.

    Raises:
        SourcingError: If a line cannot be parsed or set.
    """
    p = Path(path)
    if not p.exists() or not p.is_file():
        logger.debug(f"No env file at {p}")
        return False

    Sourcer(config).source_file(p, environ=environ, override=override)
    return True
