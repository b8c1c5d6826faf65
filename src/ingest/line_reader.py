"""Streaming JSONL record reader.

This module decodes one JSON object per non-blank line from a stream.
It never buffers more than the current line, so exports larger than
memory can be read record by record.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Iterator

from core.errors import MalformedRecordError
from core.types import SourceRecord


def iter_jsonl_records(stream: IO[Any], source_id: str) -> Iterator[SourceRecord]:
    """Yield decoded records from a JSONL stream.

    Args:
        stream: Binary or text stream positioned at the first line.
        source_id: File or member identifier used in error messages.

    Yields:
        One decoded JSON object per non-blank line, in file order.

    Raises:
        MalformedRecordError: If a line is not a valid JSON object.
    """
    for line_number, raw_line in enumerate(stream, 1):
        line = _decode_line(raw_line, source_id, line_number).strip()
        if not line:
            continue
        yield _parse_record_line(line, source_id, line_number)


def read_jsonl_file(file_path: Path, source_id: str | None = None) -> Iterator[SourceRecord]:
    """Yield decoded records from a loose JSONL file.

    Args:
        file_path: Path to a ``.jsonl`` file on disk.
        source_id: Optional identifier for error messages, defaults to the path.

    Yields:
        Decoded records in file order.
    """
    with file_path.open("rb") as stream:
        yield from iter_jsonl_records(stream, source_id or str(file_path))


def _decode_line(raw_line: bytes | str, source_id: str, line_number: int) -> str:
    """Decode one raw line into text."""
    if isinstance(raw_line, str):
        return raw_line
    try:
        return raw_line.decode("utf-8")
    except UnicodeDecodeError as error:
        raise MalformedRecordError(source_id, line_number, str(error)) from error


def _parse_record_line(line: str, source_id: str, line_number: int) -> SourceRecord:
    """Parse and validate a JSONL row.

    Args:
        line: Stripped, non-empty line text.
        source_id: Parent source identifier for context.
        line_number: One-based line number.

    Returns:
        Parsed JSON object.

    Raises:
        MalformedRecordError: If line is invalid JSON or not an object.
    """
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as error:
        raise MalformedRecordError(source_id, line_number, error.msg) from error
    if not isinstance(payload, dict):
        raise MalformedRecordError(
            source_id,
            line_number,
            f"expected JSON object, got {type(payload).__name__}",
        )
    return payload
