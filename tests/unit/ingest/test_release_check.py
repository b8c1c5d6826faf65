"""Unit tests for remote release checks."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from core.errors import ReleaseCheckError
from core.types import ReleaseInfo
from ingest import release_check
from ingest.release_check import compare_versions, fetch_latest_release

_LATEST = ReleaseInfo(build_number=3142455, release_date="2024-12-10T11:00:00Z")


class _FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")


def _patch_get(monkeypatch: pytest.MonkeyPatch, response: _FakeResponse) -> None:
    def _fake_get(url: str, timeout: float, **_: Any) -> _FakeResponse:
        return response

    monkeypatch.setattr(release_check.requests, "get", _fake_get)


def test_fetch_latest_release_reads_first_line(monkeypatch: pytest.MonkeyPatch) -> None:
    """First JSONL line should provide the latest build."""
    body = (
        '{"_key": "sde", "buildNumber": 3142455, "releaseDate": "2024-12-10T11:00:00Z"}\n'
        '{"_key": "old", "buildNumber": 1, "releaseDate": "2020-01-01"}\n'
    )
    _patch_get(monkeypatch, _FakeResponse(body))

    latest = fetch_latest_release("https://example.invalid/latest.jsonl", 1.0)

    assert latest.build_number == 3142455


def test_fetch_latest_release_wraps_http_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """HTTP failures should surface as ReleaseCheckError."""
    _patch_get(monkeypatch, _FakeResponse("", status_code=503))

    with pytest.raises(ReleaseCheckError):
        fetch_latest_release("https://example.invalid/latest.jsonl", 1.0)


def test_fetch_latest_release_rejects_missing_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    """Payloads without buildNumber should be rejected."""
    _patch_get(monkeypatch, _FakeResponse('{"releaseDate": "2024-12-10"}\n'))

    with pytest.raises(ReleaseCheckError):
        fetch_latest_release("https://example.invalid/latest.jsonl", 1.0)


def test_compare_without_install_reports_not_installed() -> None:
    """Missing installed version should offer an update."""
    result = compare_versions(None, _LATEST)

    assert (result.status, result.update_available) == ("not_installed", True)


def test_compare_same_build_is_up_to_date() -> None:
    """Equal builds should be up to date."""
    assert compare_versions("sde-3142455", _LATEST).status == "up_to_date"


def test_compare_older_build_has_update() -> None:
    """Older installed builds should have an update available."""
    assert compare_versions("sde-3000000", _LATEST).status == "update_available"


def test_compare_newer_build_is_newer_than_latest() -> None:
    """Installed builds beyond the latest release should be flagged."""
    result = compare_versions("sde-3200000", _LATEST)

    assert (result.status, result.update_available) == ("newer_than_latest", False)
