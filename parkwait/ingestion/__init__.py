"""
Ingestion & cleaning of raw attraction wait-time files.

This module provides:
- Row-level parsing into RawRecords (lazy, one row at a time)
- A Polars bulk reader with the same acceptance rules

Quick start:
    from parkwait.ingestion import Ingestor
    raw_lf = Ingestor().scan("waiting_times.csv")

Row-level:
    from parkwait.ingestion import read_raw_records
    for record in read_raw_records("waiting_times.csv"):
        ...
"""

from parkwait.ingestion.records import (
    RAW_COLUMNS,
    RawRecord,
    IngestionStats,
    parse_row,
    iter_raw_records,
    read_raw_records,
)
from parkwait.ingestion.loader import RAW_SCHEMA, Ingestor, normalize_raw

__all__ = [
    # Records
    "RAW_COLUMNS",
    "RawRecord",
    "IngestionStats",
    "parse_row",
    "iter_raw_records",
    "read_raw_records",
    # Bulk
    "RAW_SCHEMA",
    "Ingestor",
    "normalize_raw",
]
