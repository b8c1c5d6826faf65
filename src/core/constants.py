"""Core constants used across sdeload modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_PATH = Path("storage/sde")
DEFAULT_STATE_ROOT = Path(".sdeload")
DEFAULT_DATABASE_FILE_NAME = "sde.duckdb"
INSTALL_STATE_FILE_NAME = "installed_version.json"
DEFAULT_CHUNK_SIZE = 1000
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
DEFAULT_IMPORT_PROFILE = "full"
LATEST_VERSION_URL = "https://developers.eveonline.com/static-data/tranquility/latest.jsonl"
ARCHIVE_SUFFIX = ".zip"
JSONL_SUFFIX = ".jsonl"
VERSION_MEMBER_NAME = "_sde.jsonl"
VERSION_PREFIX = "sde-"
VIRTUAL_ID_SEPARATOR = ":"
STAGING_FILE_PREFIX = "sdeload-"
INT32_MIN = -2_147_483_648
INT32_MAX = 2_147_483_647
ARCHIVE_FILE_TEMPLATE = "eve-online-static-data-{build_number}-jsonl.zip"
