"""
Aggregation reporting over the cleaned wait-time table.

Submodules:
- aggregations: the six aggregate views
- builder: runs the views independently and writes their tables
- writer: delimited text output
- visualization: PNG charts of selected views
"""

from parkwait.reporting.aggregations import (
    DEFAULT_TOP_N,
    VIEW_COLUMNS,
    AGGREGATIONS,
    by_attraction,
    by_hour,
    seasonal,
    weekend_vs_weekday,
    efficiency,
    peak_hour,
)
from parkwait.reporting.builder import RunStatus, ReportRun, ReportBuilder, create_builder
from parkwait.reporting.writer import view_to_text, write_view
from parkwait.reporting.visualization import (
    plot_hourly_wait_profile,
    plot_top_attractions,
    plot_weekend_comparison,
    save_report_plots,
)

__all__ = [
    # Aggregations
    "DEFAULT_TOP_N",
    "VIEW_COLUMNS",
    "AGGREGATIONS",
    "by_attraction",
    "by_hour",
    "seasonal",
    "weekend_vs_weekday",
    "efficiency",
    "peak_hour",
    # Builder
    "RunStatus",
    "ReportRun",
    "ReportBuilder",
    "create_builder",
    # Writer
    "view_to_text",
    "write_view",
    # Visualization
    "plot_hourly_wait_profile",
    "plot_top_attractions",
    "plot_weekend_comparison",
    "save_report_plots",
]
