"""Public SDK surface for sdeload.

This module provides a stable import path for library users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import SdeConfig
from core.types import (
    ImportReport,
    InstallOptions,
    LoadMode,
    MappedRow,
    ReleaseCheck,
    ReleaseInfo,
    SdeVersion,
)
from ingest.import_pipeline import SdeImportRunner, import_sde
from mapping.mapping_engine import map_record
from store.duckdb_sink import DuckDbSink
from store.memory_sink import InMemorySink
from store.sde_client import SdeClient

__all__ = [
    "DuckDbSink",
    "ImportReport",
    "InMemorySink",
    "InstallOptions",
    "LoadMode",
    "MappedRow",
    "ReleaseCheck",
    "ReleaseInfo",
    "SdeClient",
    "SdeConfig",
    "SdeImportRunner",
    "SdeVersion",
    "import_sde",
    "map_record",
]
