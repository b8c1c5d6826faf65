"""Export ingestion pipeline.

This module reads export archives, streams their JSONL members,
and orchestrates loading mapped rows into the storage sink.
"""
