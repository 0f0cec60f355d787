"""
Feature contract for wait-time prediction.

The model input is a fixed, ordered set of cleaned-table columns plus an
integer attraction code; the target is wait_time_max. Only rows with
scheduled open time are used.
"""

import polars as pl
from loguru import logger

from parkwait.utils.exceptions import TrainingError


FEATURE_COLUMNS = [
    "start_hour",
    "month",
    "day_of_week",
    "quarter",
    "is_weekend",
    "attraction_code",
    "capacity",
    "adjust_capacity",
    "nb_units",
    "nb_max_unit",
    "utilization_rate",
    "efficiency_score",
]

TARGET_COLUMN = "wait_time_max"


def build_training_frame(cleaned: pl.DataFrame | pl.LazyFrame) -> pl.DataFrame:
    """
    Select the feature contract from the cleaned table.

    Args:
        cleaned: Cleaned wait-time table

    Returns:
        Chronologically sorted DataFrame of FEATURE_COLUMNS + TARGET_COLUMN
    """
    df = (
        cleaned.lazy()
        .filter(pl.col("open_time") > 0)
        .with_columns([
            # Dense rank over names is stable across runs, unlike categorical codes
            pl.col("attraction_name").rank("dense").cast(pl.Int64).alias("attraction_code"),
            pl.col("is_weekend").cast(pl.Int32),
        ])
        .sort(["work_date", "start_time", "attraction_name"])
        .select(FEATURE_COLUMNS + [TARGET_COLUMN])
        .collect()
    )

    logger.info(f"Training frame: {len(df):,} samples, {len(FEATURE_COLUMNS)} features")
    return df


def time_split(df: pl.DataFrame, test_ratio: float) -> tuple[pl.DataFrame, pl.DataFrame]:
    """
    Chronological train/test split.

    Args:
        df: Sorted training frame
        test_ratio: Share of the most recent rows held out

    Returns:
        (train, test)

    Raises:
        TrainingError: If either side would be empty
    """
    split_idx = int(len(df) * (1 - test_ratio))
    if split_idx < 1 or split_idx >= len(df):
        raise TrainingError(
            f"Cannot split {len(df)} samples with test_ratio={test_ratio}: need at least one row on each side"
        )
    return df.head(split_idx), df.slice(split_idx)


__all__ = ["FEATURE_COLUMNS", "TARGET_COLUMN", "build_training_frame", "time_split"]
