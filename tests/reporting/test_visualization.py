"""
Charts of the aggregate views.
"""

from parkwait.reporting import AGGREGATIONS, save_report_plots
from parkwait.reporting.visualization import plot_hourly_wait_profile


def test_save_report_plots(tmp_path, park_cleaned):
    views = {name: aggregate(park_cleaned, 10) for name, aggregate in AGGREGATIONS.items()}

    saved = save_report_plots(views, tmp_path)

    assert sorted(path.name for path in saved) == ["by_attraction.png", "by_hour.png", "weekend_vs_weekday.png"]
    assert all(path.stat().st_size > 0 for path in saved)


def test_empty_view_skipped(tmp_path, park_cleaned):
    by_hour = AGGREGATIONS["by_hour"](park_cleaned.clear(), 10)

    plot_hourly_wait_profile(by_hour, save_path=tmp_path / "by_hour.png")

    assert not (tmp_path / "by_hour.png").exists()
    assert save_report_plots({"by_hour": by_hour}, tmp_path) == []
