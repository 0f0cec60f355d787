"""
The six aggregate views over the cleaned wait-time table.

Each view is a pure function of the cleaned table: it never mutates
its input and can be re-run independently of the others.

Views:
- by_attraction: average/max wait and utilization, top N attractions
- by_hour: average and median wait per start hour
- seasonal: wait, operating days and guests per (year, quarter, month)
- weekend_vs_weekday: wait and utilization for weekend vs weekday
- efficiency: uptime efficiency and downtime per attraction, top N
- peak_hour: busiest hour per attraction, top N

Averages are rounded to 2 decimals after sorting, so ordering uses the
exact values. Ties in the top-N views fall back to attraction_name
ascending.
"""

from collections.abc import Callable

import polars as pl

DEFAULT_TOP_N = 10

VIEW_COLUMNS = {
    "by_attraction": [
        "attraction_name", "avg_wait_time", "max_wait_time", "total_observations", "avg_utilization",
    ],
    "by_hour": ["hour", "avg_wait_time", "median_wait_time", "total_observations"],
    "seasonal": ["year", "quarter", "month", "avg_wait_time", "days_count", "total_guests"],
    "weekend_vs_weekday": ["is_weekend", "avg_wait_time", "avg_utilization", "total_observations"],
    "efficiency": [
        "attraction_name", "avg_efficiency", "avg_downtime_rate", "total_downtime_minutes", "total_observations",
    ],
    "peak_hour": ["attraction_name", "peak_hour", "avg_wait_time"],
}


def _lazy(cleaned: pl.DataFrame | pl.LazyFrame) -> pl.LazyFrame:
    return cleaned.lazy()


def _count() -> pl.Expr:
    return pl.len().cast(pl.Int64).alias("total_observations")


def _round(*columns: str) -> list[pl.Expr]:
    # Half away from zero, as SQL ROUND: 2.125 -> 2.13
    return [pl.col(name).round(2, mode="half_away_from_zero") for name in columns]


def by_attraction(cleaned: pl.DataFrame | pl.LazyFrame, top_n: int = DEFAULT_TOP_N) -> pl.DataFrame:
    """
    Attractions with the longest average wait.

    Args:
        cleaned: Cleaned wait-time table
        top_n: Number of attractions to keep

    Returns:
        DataFrame with VIEW_COLUMNS["by_attraction"]
    """
    return (
        _lazy(cleaned)
        .filter(pl.col("wait_time_max") > 0)
        .group_by("attraction_name")
        .agg([
            pl.col("wait_time_max").mean().alias("avg_wait_time"),
            pl.col("wait_time_max").max().alias("max_wait_time"),
            _count(),
            pl.col("utilization_rate").mean().alias("avg_utilization"),
        ])
        .sort(["avg_wait_time", "attraction_name"], descending=[True, False])
        .head(top_n)
        .with_columns(_round("avg_wait_time", "avg_utilization"))
        .select(VIEW_COLUMNS["by_attraction"])
        .collect()
    )


def by_hour(cleaned: pl.DataFrame | pl.LazyFrame, top_n: int = DEFAULT_TOP_N) -> pl.DataFrame:
    """
    Wait-time profile across the day, one row per start hour.

    top_n is accepted for a uniform signature and ignored.
    """
    return (
        _lazy(cleaned)
        .filter(pl.col("wait_time_max") > 0)
        .group_by(pl.col("start_hour").alias("hour"))
        .agg([
            pl.col("wait_time_max").mean().alias("avg_wait_time"),
            pl.col("wait_time_max").median().alias("median_wait_time"),
            _count(),
        ])
        .sort("hour")
        .with_columns(_round("avg_wait_time", "median_wait_time"))
        .select(VIEW_COLUMNS["by_hour"])
        .collect()
    )


def seasonal(cleaned: pl.DataFrame | pl.LazyFrame, top_n: int = DEFAULT_TOP_N) -> pl.DataFrame:
    """
    Monthly totals: average wait, distinct operating days, guests carried.

    No row filter: closed periods count toward days and guests.
    """
    return (
        _lazy(cleaned)
        .group_by(["year", "quarter", "month"])
        .agg([
            pl.col("wait_time_max").mean().alias("avg_wait_time"),
            pl.col("work_date").n_unique().cast(pl.Int64).alias("days_count"),
            pl.col("guest_carried").sum().alias("total_guests"),
        ])
        .sort(["year", "month"])
        .with_columns(_round("avg_wait_time", "total_guests"))
        .select(VIEW_COLUMNS["seasonal"])
        .collect()
    )


def weekend_vs_weekday(cleaned: pl.DataFrame | pl.LazyFrame, top_n: int = DEFAULT_TOP_N) -> pl.DataFrame:
    """At most two rows: weekday (false) first, then weekend (true)."""
    return (
        _lazy(cleaned)
        .filter(pl.col("wait_time_max") > 0)
        .group_by("is_weekend")
        .agg([
            pl.col("wait_time_max").mean().alias("avg_wait_time"),
            pl.col("utilization_rate").mean().alias("avg_utilization"),
            _count(),
        ])
        .sort("is_weekend")
        .with_columns(_round("avg_wait_time", "avg_utilization"))
        .select(VIEW_COLUMNS["weekend_vs_weekday"])
        .collect()
    )


def efficiency(cleaned: pl.DataFrame | pl.LazyFrame, top_n: int = DEFAULT_TOP_N) -> pl.DataFrame:
    """
    Most efficient attractions by share of scheduled time actually running.

    Rows without scheduled open time are excluded.
    """
    return (
        _lazy(cleaned)
        .filter(pl.col("open_time") > 0)
        .group_by("attraction_name")
        .agg([
            pl.col("efficiency_score").mean().alias("avg_efficiency"),
            pl.col("downtime_rate").mean().alias("avg_downtime_rate"),
            pl.col("downtime").sum().cast(pl.Int64).alias("total_downtime_minutes"),
            _count(),
        ])
        .sort(["avg_efficiency", "attraction_name"], descending=[True, False])
        .head(top_n)
        .with_columns(_round("avg_efficiency", "avg_downtime_rate"))
        .select(VIEW_COLUMNS["efficiency"])
        .collect()
    )


def peak_hour(cleaned: pl.DataFrame | pl.LazyFrame, top_n: int = DEFAULT_TOP_N) -> pl.DataFrame:
    """
    Busiest start hour of each attraction.

    For every attraction the hour with the highest average wait is kept.
    When several hours share that average, the hour whose first
    observation comes earliest in the cleaned table wins.
    """
    hourly = (
        _lazy(cleaned)
        .with_row_index("_row")
        .group_by(["attraction_name", "start_hour"])
        .agg([
            pl.col("wait_time_max").mean().alias("avg_wait_time"),
            pl.col("_row").min().alias("_first_seen"),
        ])
    )

    return (
        hourly
        .sort(["attraction_name", "avg_wait_time", "_first_seen"], descending=[False, True, False])
        .group_by("attraction_name", maintain_order=True)
        .first()
        .rename({"start_hour": "peak_hour"})
        .sort(["avg_wait_time", "attraction_name"], descending=[True, False])
        .head(top_n)
        .with_columns(_round("avg_wait_time"))
        .select(VIEW_COLUMNS["peak_hour"])
        .collect()
    )


Aggregation = Callable[[pl.DataFrame | pl.LazyFrame, int], pl.DataFrame]

# Output order of the report
AGGREGATIONS: dict[str, Aggregation] = {
    "by_attraction": by_attraction,
    "by_hour": by_hour,
    "seasonal": seasonal,
    "weekend_vs_weekday": weekend_vs_weekday,
    "efficiency": efficiency,
    "peak_hour": peak_hour,
}


__all__ = [
    "DEFAULT_TOP_N",
    "VIEW_COLUMNS",
    "by_attraction",
    "by_hour",
    "seasonal",
    "weekend_vs_weekday",
    "efficiency",
    "peak_hour",
    "Aggregation",
    "AGGREGATIONS",
]
