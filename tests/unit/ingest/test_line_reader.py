"""Unit tests for the streaming JSONL reader."""

from __future__ import annotations

import io

import pytest

from core.errors import MalformedRecordError
from ingest.line_reader import iter_jsonl_records, read_jsonl_file
from tests.fixture_paths import fixture_path


def test_read_jsonl_file_skips_blank_lines() -> None:
    """Three records separated by blank lines should yield three records."""
    records = list(read_jsonl_file(fixture_path("sde/types.jsonl")))

    assert [record["_key"] for record in records] == [34, 35, 36]


def test_malformed_line_reports_line_number() -> None:
    """A broken second line should fail with its line number."""
    with pytest.raises(MalformedRecordError) as error_info:
        list(read_jsonl_file(fixture_path("sde/malformed.jsonl"), "malformed.jsonl"))

    assert error_info.value.line_number == 2


def test_malformed_line_yields_preceding_records() -> None:
    """Records before a malformed line should already have been yielded."""
    records = []
    with pytest.raises(MalformedRecordError):
        for record in read_jsonl_file(fixture_path("sde/malformed.jsonl")):
            records.append(record)

    assert len(records) == 1


def test_non_object_line_is_malformed() -> None:
    """A JSON array line should be rejected as a record."""
    stream = io.BytesIO(b'{"_key": 1}\n[1, 2]\n')

    with pytest.raises(MalformedRecordError) as error_info:
        list(iter_jsonl_records(stream, "array.jsonl"))

    assert error_info.value.source_id == "array.jsonl"


def test_text_stream_is_accepted() -> None:
    """Text streams should decode like binary ones."""
    stream = io.StringIO('{"_key": 7}\n\n')

    records = list(iter_jsonl_records(stream, "text.jsonl"))

    assert records == [{"_key": 7}]


def test_invalid_utf8_is_malformed() -> None:
    """Undecodable bytes should fail as a malformed record."""
    stream = io.BytesIO(b'{"_key": 1}\n\xff\xfe\n')

    with pytest.raises(MalformedRecordError):
        list(iter_jsonl_records(stream, "binary.jsonl"))
