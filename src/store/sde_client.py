"""Python SDK for static data operations.

This module exposes high-level APIs for installing an export archive,
checking for newer releases, and inspecting archive versions.
"""

from __future__ import annotations

from pathlib import Path

from core.config import SdeConfig
from core.logging_config import get_logger
from core.types import ImportReport, InstallOptions, ReleaseCheck, SdeVersion
from ingest.import_pipeline import import_sde, resolve_install_path
from ingest.release_check import compare_versions, fetch_latest_release
from ingest.version_reader import read_sde_version
from store.duckdb_sink import DuckDbSink
from store.install_state import InstalledVersion, InstalledVersionStore
from store.storage_sink import StorageSink

_LOGGER = get_logger(__name__)


class SdeClient:
    """Primary SDK entry point for static data workflows."""

    def __init__(self, config: SdeConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or SdeConfig.from_env()
        self._state = InstalledVersionStore(self._config.state_root)

    @property
    def config(self) -> SdeConfig:
        return self._config

    def install(self, options: InstallOptions, sink: StorageSink | None = None) -> ImportReport:
        """Import an export archive unless its version is already installed.

        Args:
            options: Install options.
            sink: Optional destination sink. Defaults to the configured
                DuckDB database.

        Returns:
            Import report. Status is ``already_installed`` when the
            archive version matches installed state and ``force`` is off.

        Raises:
            SdeError: If the archive cannot be located or read.
            SdeImportError: If the import run fails.
        """
        version = read_sde_version(resolve_install_path(options, self._config))
        installed_version = self._state.installed_version()
        if installed_version == version.version and not options.force:
            _LOGGER.info("install_skipped", version=version.version)
            return ImportReport(status="already_installed", version=version)
        if sink is not None:
            report = import_sde(options, self._config, sink)
        else:
            with DuckDbSink.connect(self._config.database_path) as database_sink:
                report = import_sde(options, self._config, database_sink)
        self._state.write(version)
        return report

    def check(self) -> ReleaseCheck:
        """Compare installed state with the latest published release.

        Raises:
            ReleaseCheckError: If release metadata cannot be fetched.
        """
        latest = fetch_latest_release(
            self._config.latest_version_url,
            self._config.request_timeout,
        )
        return compare_versions(self._state.installed_version(), latest)

    def version(self, data_path: str | None = None) -> SdeVersion:
        """Read version metadata of an archive.

        Args:
            data_path: Optional archive or directory; defaults to config data path.
        """
        path = Path(data_path).expanduser().resolve() if data_path else self._config.data_path
        return read_sde_version(path)

    def installed(self) -> InstalledVersion | None:
        """Return installed-version state, if any."""
        return self._state.read()
