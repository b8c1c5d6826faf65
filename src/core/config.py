"""Runtime configuration model for sdeload.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DATA_PATH,
    DEFAULT_DATABASE_FILE_NAME,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_STATE_ROOT,
    LATEST_VERSION_URL,
)
from core.errors import SdeConfigError


@dataclass(frozen=True)
class SdeConfig:
    """Validated runtime configuration.

    Attributes:
        data_path: Export archive file or directory holding archives.
        chunk_size: Maximum rows buffered per table before a batch write.
        database_path: DuckDB database file used as destination sink.
        state_root: Local directory for installed-version state.
        latest_version_url: Remote endpoint describing the latest export.
        request_timeout: HTTP timeout in seconds for release checks.
    """

    data_path: Path
    chunk_size: int
    database_path: Path
    state_root: Path
    latest_version_url: str
    request_timeout: float

    @classmethod
    def from_env(cls) -> "SdeConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SdeConfigError: If environment values are invalid.
        """
        data_path_value = os.getenv("SDE_DATA_PATH", str(DEFAULT_DATA_PATH))
        state_root = Path(os.getenv("SDE_STATE_ROOT", str(DEFAULT_STATE_ROOT)))
        state_root = state_root.expanduser().resolve()
        database_value = os.getenv("SDE_DATABASE_PATH")
        database_path = (
            Path(database_value).expanduser().resolve()
            if database_value
            else state_root / DEFAULT_DATABASE_FILE_NAME
        )
        return cls(
            data_path=Path(data_path_value).expanduser().resolve(),
            chunk_size=_parse_chunk_size(os.getenv("SDE_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE))),
            database_path=database_path,
            state_root=state_root,
            latest_version_url=os.getenv("SDE_LATEST_VERSION_URL", LATEST_VERSION_URL),
            request_timeout=_parse_timeout(
                os.getenv("SDE_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT_SECONDS))
            ),
        )


def _parse_chunk_size(raw_value: str) -> int:
    """Parse the chunk size environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive chunk size.

    Raises:
        SdeConfigError: If value is not a positive integer.
    """
    try:
        chunk_size = int(raw_value)
    except ValueError as error:
        raise SdeConfigError(
            "Invalid SDE_CHUNK_SIZE value: "
            f"expected integer, got '{raw_value}'. "
            "Set SDE_CHUNK_SIZE to a positive number of rows."
        ) from error
    if chunk_size < 1:
        raise SdeConfigError(
            f"Invalid SDE_CHUNK_SIZE value: expected at least 1, got {chunk_size}. "
            "Set SDE_CHUNK_SIZE to a positive number of rows."
        )
    return chunk_size


def _parse_timeout(raw_value: str) -> float:
    """Parse the HTTP timeout environment value."""
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise SdeConfigError(
            "Invalid SDE_REQUEST_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'."
        ) from error
    if timeout <= 0:
        raise SdeConfigError(
            f"Invalid SDE_REQUEST_TIMEOUT value: expected a positive number, got {timeout}."
        )
    return timeout
