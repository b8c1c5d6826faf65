"""Installed-version state persistence.

This module records which export version was last imported so that
repeated installs of the same archive can be skipped.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
from pathlib import Path

from core.constants import INSTALL_STATE_FILE_NAME
from core.errors import SdeError
from core.types import SdeVersion


@dataclass(frozen=True)
class InstalledVersion:
    """Installed-version state metadata."""

    version: str
    build_number: int
    release_date: str


class InstalledVersionStore:
    """Filesystem-backed installed-version store."""

    def __init__(self, state_root: Path) -> None:
        self._state_root = state_root

    @property
    def state_path(self) -> Path:
        return self._state_root / INSTALL_STATE_FILE_NAME

    def read(self) -> InstalledVersion | None:
        """Read installed version state if present.

        Returns:
            Installed version, or None when nothing was installed yet.

        Raises:
            SdeError: If the state file exists but cannot be parsed.
        """
        state_path = self.state_path
        if not state_path.exists():
            return None
        try:
            payload = json.loads(state_path.read_text(encoding="utf-8"))
            return InstalledVersion(
                version=str(payload["version"]),
                build_number=int(payload["build_number"]),
                release_date=str(payload["release_date"]),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as error:
            raise SdeError(
                f"Failed to read installed version state at {state_path}: {error}. "
                "Delete the state file and rerun install with --force."
            ) from error

    def installed_version(self) -> str | None:
        """Return the installed version token, if any."""
        state = self.read()
        return state.version if state is not None else None

    def write(self, version: SdeVersion) -> InstalledVersion:
        """Persist the version of a successfully imported archive."""
        state = InstalledVersion(
            version=version.version,
            build_number=version.build_number,
            release_date=version.release_date,
        )
        self._state_root.mkdir(parents=True, exist_ok=True)
        self.state_path.write_text(json.dumps(asdict(state), indent=2) + "\n", encoding="utf-8")
        return state
