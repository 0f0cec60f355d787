"""
Summary statistics of the cleaned wait-time table.
"""

import polars as pl


def get_data_summary(df: pl.DataFrame) -> dict:
    """
    Get summary statistics of the cleaned data.

    Args:
        df: Cleaned wait-time DataFrame

    Returns:
        Dictionary with summary statistics
    """
    if df.is_empty():
        return {"total_records": 0}

    summary = {
        "total_records": len(df),
        "unique_attractions": df["attraction_name"].n_unique(),
        "date_min": df["work_date"].min(),
        "date_max": df["work_date"].max(),
        "null_counts": {col: df[col].null_count() for col in df.columns if df[col].null_count()},
    }

    numeric_cols = ["wait_time_max", "utilization_rate", "efficiency_score", "downtime_rate"]
    for col in numeric_cols:
        if col in df.columns:
            summary[f"{col}_min"] = df[col].min()
            summary[f"{col}_max"] = df[col].max()
            summary[f"{col}_mean"] = df[col].mean()

    if "is_weekend" in df.columns:
        summary["weekend_share"] = df["is_weekend"].mean()

    return summary


__all__ = ["get_data_summary"]
