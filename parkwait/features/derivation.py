"""
Feature derivation for raw wait-time records.

Adds to every raw record:
- year, month, day, quarter: calendar breakdown of work_date
- day_of_week: 1=Sunday .. 7=Saturday
- is_weekend: True for Sunday (1) and Saturday (7)
- utilization_rate: guest_carried / capacity * 100
- efficiency_score: up_time / open_time * 100
- downtime_rate: downtime / open_time * 100

Ratios with a zero denominator are 0, never NaN or an error. The
row-level functions and the Polars expressions produce identical values.
"""

from datetime import date
from typing import NamedTuple

import polars as pl
from loguru import logger

from parkwait.ingestion.records import RAW_COLUMNS, RawRecord


DERIVED_COLUMNS = [
    "year",
    "month",
    "day",
    "day_of_week",
    "quarter",
    "is_weekend",
    "utilization_rate",
    "efficiency_score",
    "downtime_rate",
]

CLEANED_COLUMNS = RAW_COLUMNS + DERIVED_COLUMNS

SUNDAY = 1
SATURDAY = 7


class Percentage(NamedTuple):
    """Result of a guarded ratio: the value, and whether it fell back to zero."""
    value: float
    defaulted: bool


def percentage(numerator: float, denominator: float) -> Percentage:
    """numerator / denominator * 100, or a defaulted 0.0 when denominator is 0."""
    if denominator == 0:
        return Percentage(0.0, True)
    return Percentage(numerator / denominator * 100, False)


def day_of_week_sunday_first(day: date) -> int:
    """Day of week numbered 1=Sunday .. 7=Saturday."""
    return day.isoweekday() % 7 + 1


def quarter_of(month: int) -> int:
    return (month - 1) // 3 + 1


def is_weekend_day(day_of_week: int) -> bool:
    return day_of_week in (SUNDAY, SATURDAY)


class CleanedRecord(NamedTuple):
    """A RawRecord enriched with calendar, utilization and efficiency features."""
    work_date: date
    start_time: str
    start_hour: int
    end_time: str
    attraction_name: str
    wait_time_max: int
    nb_units: float
    guest_carried: float
    capacity: float
    adjust_capacity: float
    open_time: int
    up_time: int
    downtime: int
    nb_max_unit: float
    year: int
    month: int
    day: int
    day_of_week: int
    quarter: int
    is_weekend: bool
    utilization_rate: float
    efficiency_score: float
    downtime_rate: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return self._asdict()


def derive_features(raw: RawRecord) -> CleanedRecord:
    """
    Map a RawRecord to its CleanedRecord.

    Pure and deterministic: safe to run on any partition of the input.

    Args:
        raw: A validated raw record

    Returns:
        The enriched record
    """
    day_of_week = day_of_week_sunday_first(raw.work_date)

    return CleanedRecord(
        *raw,
        year=raw.work_date.year,
        month=raw.work_date.month,
        day=raw.work_date.day,
        day_of_week=day_of_week,
        quarter=quarter_of(raw.work_date.month),
        is_weekend=is_weekend_day(day_of_week),
        utilization_rate=percentage(raw.guest_carried, raw.capacity).value,
        efficiency_score=percentage(raw.up_time, raw.open_time).value,
        downtime_rate=percentage(raw.downtime, raw.open_time).value,
    )


def percentage_expr(numerator: str, denominator: str) -> pl.Expr:
    """Vectorised counterpart of percentage()."""
    return (
        pl.when(pl.col(denominator) == 0)
        .then(pl.lit(0.0))
        .otherwise(pl.col(numerator) / pl.col(denominator) * 100)
    )


def add_derived_columns(lf: pl.LazyFrame) -> pl.LazyFrame:
    """
    Add derived feature columns to a typed raw frame.

    Args:
        lf: LazyFrame matching RAW_SCHEMA

    Returns:
        LazyFrame with CLEANED_COLUMNS
    """
    day_of_week = (pl.col("work_date").dt.weekday() % 7 + 1).cast(pl.Int32)

    return lf.with_columns([
        pl.col("work_date").dt.year().cast(pl.Int32).alias("year"),
        pl.col("work_date").dt.month().cast(pl.Int32).alias("month"),
        pl.col("work_date").dt.day().cast(pl.Int32).alias("day"),
        day_of_week.alias("day_of_week"),
        pl.col("work_date").dt.quarter().cast(pl.Int32).alias("quarter"),
        day_of_week.is_in([SUNDAY, SATURDAY]).alias("is_weekend"),
        percentage_expr("guest_carried", "capacity").alias("utilization_rate"),
        percentage_expr("up_time", "open_time").alias("efficiency_score"),
        percentage_expr("downtime", "open_time").alias("downtime_rate"),
    ]).select(CLEANED_COLUMNS)


def derive_frame(df: pl.DataFrame | pl.LazyFrame) -> pl.DataFrame:
    """
    Materialise the cleaned table from a raw frame.

    Args:
        df: Typed raw frame (eager or lazy)

    Returns:
        Cleaned DataFrame
    """
    cleaned = add_derived_columns(df.lazy()).collect()
    logger.info(f"Derived features for {len(cleaned):,} records")
    return cleaned


__all__ = [
    "DERIVED_COLUMNS",
    "CLEANED_COLUMNS",
    "Percentage",
    "percentage",
    "day_of_week_sunday_first",
    "quarter_of",
    "is_weekend_day",
    "CleanedRecord",
    "derive_features",
    "percentage_expr",
    "add_derived_columns",
    "derive_frame",
]
