"""
Delimited text output for aggregate views.

Each table is a header row with the view's column names followed by
the data rows. Floats are written with a fixed number of decimals
(40.00), integers as-is and booleans as true/false.
"""

from pathlib import Path

import polars as pl
from loguru import logger

from parkwait.utils.exceptions import ReportWriteError


def view_to_text(df: pl.DataFrame, float_precision: int = 2, separator: str = ",") -> str:
    """
    Serialize a view to delimited text.

    Args:
        df: Aggregate view
        float_precision: Decimals for float columns
        separator: Field delimiter

    Returns:
        Header line plus one line per row
    """
    return df.write_csv(None, separator=separator, float_precision=float_precision)


def write_view(
    df: pl.DataFrame,
    path: str | Path,
    float_precision: int = 2,
    separator: str = ",",
) -> Path:
    """
    Write a view table to disk, creating parent directories.

    Args:
        df: Aggregate view
        path: Output file path
        float_precision: Decimals for float columns
        separator: Field delimiter

    Returns:
        Path of the written file

    Raises:
        ReportWriteError: If the file cannot be written
    """
    path = Path(path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.write_csv(path, separator=separator, float_precision=float_precision)
    except (OSError, pl.exceptions.PolarsError) as e:
        raise ReportWriteError(f"Failed to write {path}: {e}", path=str(path)) from e

    logger.info(f"Wrote {len(df)} rows to {path}")
    return path


__all__ = ["view_to_text", "write_view"]
