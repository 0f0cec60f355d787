"""
Bulk ingestion of raw wait-time files with Polars.

Same contract as the row-level parser in records.py, expressed as a
lazy query so the engine can parallelise the scan:

- every column is read as text and cast non-strictly
- rows with any failed cast, an empty attraction or an hour outside
  0..23 are dropped
- rows with wait_time_max < 0 or capacity < 0 are dropped
- remaining numeric columns are clamped at zero
"""

from collections.abc import Iterable
from pathlib import Path

import polars as pl
from loguru import logger

from parkwait.config import IngestionSettings
from parkwait.ingestion.records import (
    DATE_PATTERN,
    FLOAT_COLUMNS,
    INT_COLUMNS,
    RAW_COLUMNS,
    REQUIRED_NON_NEGATIVE,
    IngestionStats,
    RawRecord,
)
from parkwait.utils.exceptions import IngestionError


RAW_SCHEMA = {
    "work_date": pl.Date,
    "start_time": pl.String,
    "start_hour": pl.Int64,
    "end_time": pl.String,
    "attraction_name": pl.String,
    "wait_time_max": pl.Int64,
    "nb_units": pl.Float64,
    "guest_carried": pl.Float64,
    "capacity": pl.Float64,
    "adjust_capacity": pl.Float64,
    "open_time": pl.Int64,
    "up_time": pl.Int64,
    "downtime": pl.Int64,
    "nb_max_unit": pl.Float64,
}


def _number(name: str) -> pl.Expr:
    text = pl.col(name).str.strip_chars()
    return (
        pl.when(text.str.contains("_", literal=True))
        .then(None)
        .otherwise(text.cast(pl.Float64, strict=False))
    )


def _int_expr(name: str) -> pl.Expr:
    # Integral floats ("45.0") parse, fractional values become null
    number = _number(name)
    return (
        pl.when(number.is_finite() & (number == number.floor()))
        .then(number.cast(pl.Int64))
        .otherwise(None)
        .alias(name)
    )


def _float_expr(name: str) -> pl.Expr:
    number = _number(name)
    return pl.when(number.is_finite()).then(number).otherwise(None).alias(name)


def normalize_raw(text_lf: pl.LazyFrame) -> pl.LazyFrame:
    """
    Type, validate and filter an all-text raw frame.

    Args:
        text_lf: LazyFrame with RAW_COLUMNS as String columns

    Returns:
        LazyFrame matching RAW_SCHEMA with rejected rows removed
    """
    day = pl.col("work_date").str.strip_chars().str.slice(0, 10)
    typed = text_lf.select([
        pl.when(day.str.contains(DATE_PATTERN))
        .then(day.str.to_date("%Y-%m-%d", strict=False))
        .otherwise(None)
        .alias("work_date"),
        pl.col("start_time").str.strip_chars().fill_null(""),
        _int_expr("start_hour"),
        pl.col("end_time").str.strip_chars().fill_null(""),
        pl.col("attraction_name").str.strip_chars(),
        _int_expr("wait_time_max"),
        _float_expr("nb_units"),
        _float_expr("guest_carried"),
        _float_expr("capacity"),
        _float_expr("adjust_capacity"),
        _int_expr("open_time"),
        _int_expr("up_time"),
        _int_expr("downtime"),
        _float_expr("nb_max_unit"),
    ])

    accepted = typed.drop_nulls().filter(
        (pl.col("attraction_name").str.len_chars() > 0)
        & pl.col("start_hour").is_between(0, 23)
        & pl.all_horizontal([pl.col(name) >= 0 for name in REQUIRED_NON_NEGATIVE])
    )

    clamped = [
        pl.col(name).clip(lower_bound=0)
        for name in INT_COLUMNS + FLOAT_COLUMNS
        if name not in REQUIRED_NON_NEGATIVE
    ]
    return accepted.with_columns(clamped).select(RAW_COLUMNS)


class Ingestor:
    """
    Reads raw delimited files into a typed, validated LazyFrame.

    Usage:
        ingestor = Ingestor(settings.ingestion)
        raw_lf = ingestor.scan("waiting_times.csv")
    """

    def __init__(self, settings: IngestionSettings | None = None):
        self.settings = settings or IngestionSettings()
        self.last_stats: IngestionStats | None = None

    def _scan_text(self, path: Path) -> pl.LazyFrame:
        return pl.scan_csv(
            path,
            separator=self.settings.separator,
            has_header=self.settings.has_header,
            # Header names are discarded, columns are bound by position
            new_columns=RAW_COLUMNS,
            infer_schema=False,
            truncate_ragged_lines=True,
        )

    def scan(self, path: str | Path) -> pl.LazyFrame:
        """
        Lazily scan a raw file.

        Args:
            path: Raw delimited file

        Returns:
            LazyFrame of accepted RawRecords

        Raises:
            IngestionError: If the file does not exist
        """
        path = Path(path)
        if not path.is_file():
            raise IngestionError(f"Raw input not found: {path}", path=str(path))

        logger.info(f"Scanning raw input: {path}")
        return normalize_raw(self._scan_text(path))

    def load(self, path: str | Path) -> pl.DataFrame:
        """
        Scan and materialise a raw file, recording row counts.

        Args:
            path: Raw delimited file

        Returns:
            DataFrame of accepted RawRecords
        """
        lf = self.scan(path)

        try:
            rows_read = self._scan_text(Path(path)).select(pl.len()).collect().item()
            df = lf.collect()
        except pl.exceptions.PolarsError as e:
            raise IngestionError(f"Failed to read {path}: {e}", path=str(path)) from e

        self.last_stats = IngestionStats(
            rows_read=rows_read,
            rows_accepted=len(df),
            rows_rejected=rows_read - len(df),
        )
        logger.info(
            f"Ingestion complete: {len(df):,} rows accepted "
            f"({self.last_stats.rows_rejected:,} rejected, {self.last_stats.rejection_rate:.1f}%)"
        )
        return df

    @staticmethod
    def from_records(records: Iterable[RawRecord]) -> pl.LazyFrame:
        """
        Build the typed raw frame from already-parsed RawRecords.

        Args:
            records: RawRecords, e.g. from iter_raw_records

        Returns:
            LazyFrame matching RAW_SCHEMA
        """
        rows = [record.to_dict() for record in records]
        return pl.DataFrame(rows, schema=RAW_SCHEMA).lazy()


__all__ = ["RAW_SCHEMA", "Ingestor", "normalize_raw"]
