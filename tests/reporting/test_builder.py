"""
Report runs: every view written, failures isolated per view.
"""

from unittest.mock import Mock, patch

import polars as pl
import pytest

from parkwait.config import ReportSettings
from parkwait.reporting import AGGREGATIONS, VIEW_COLUMNS, ReportBuilder, RunStatus
from parkwait.reporting.builder import create_builder
from parkwait.utils.exceptions import AggregationError, ReportWriteError


@pytest.fixture
def builder(tmp_path) -> ReportBuilder:
    return create_builder(ReportSettings(output_dir=str(tmp_path / "reports")))


def test_run_writes_all_views(builder, park_cleaned):
    run = builder.run(park_cleaned)

    assert run.status == RunStatus.SUCCESS
    assert run.succeeded == list(AGGREGATIONS)
    assert not run.failures

    for name, path in run.paths.items():
        assert path.name == f"{name}.csv"
        header = path.read_text().splitlines()[0]
        assert header == ",".join(VIEW_COLUMNS[name])


def test_written_values_are_text(builder, park_cleaned):
    run = builder.run(park_cleaned, views=["weekend_vs_weekday"])

    lines = run.paths["weekend_vs_weekday"].read_text().splitlines()
    assert lines[0] == "is_weekend,avg_wait_time,avg_utilization,total_observations"
    assert lines[1].startswith("false,")
    assert lines[2].startswith("true,")


def test_run_subset_without_writing(builder, park_cleaned):
    run = builder.run(park_cleaned.lazy(), views=["by_hour"], write=False)

    assert run.succeeded == ["by_hour"]
    assert run.paths == {}
    assert not builder.output_dir.exists()


def test_failing_view_does_not_affect_others(builder, park_cleaned):
    """One aggregation raising leaves the other five written."""
    broken = Mock(side_effect=pl.exceptions.ComputeError("partition lost"))

    with patch.dict(AGGREGATIONS, {"seasonal": broken}):
        run = builder.run(park_cleaned)

    assert run.status == RunStatus.PARTIAL
    assert list(run.failures) == ["seasonal"]
    assert isinstance(run.failures["seasonal"], AggregationError)
    assert "partition lost" in run.failures["seasonal"].message
    assert "seasonal" not in run.paths
    assert not builder.view_path("seasonal").exists()
    assert len(run.paths) == 5


def test_write_failure_recorded(builder, park_cleaned):
    with patch(
        "parkwait.reporting.builder.write_view",
        side_effect=ReportWriteError("disk full", path="x.csv"),
    ):
        run = builder.run(park_cleaned, views=["by_hour", "peak_hour"])

    assert run.status == RunStatus.FAILED
    assert set(run.failures) == {"by_hour", "peak_hour"}


def test_unavailable_input_fails_every_view(builder):
    missing = Mock(spec=pl.LazyFrame)
    missing.collect.side_effect = pl.exceptions.ComputeError("input unavailable")

    run = builder.run(missing, views=["by_attraction", "efficiency"])

    assert run.status == RunStatus.FAILED
    assert set(run.failures) == {"by_attraction", "efficiency"}
    assert run.views == {}


def test_run_view_unknown(builder, park_cleaned):
    with pytest.raises(AggregationError) as exc_info:
        builder.run_view("by_weather", park_cleaned)

    assert exc_info.value.view == "by_weather"


def test_run_view_respects_top_n(tmp_path, park_cleaned):
    builder = ReportBuilder(ReportSettings(top_n=2, output_dir=str(tmp_path)))

    view = builder.run_view("by_attraction", park_cleaned)

    assert len(view) == 2


def test_rerun_overwrites_identically(builder, park_cleaned):
    first = {name: path.read_text() for name, path in builder.run(park_cleaned).paths.items()}
    second = {name: path.read_text() for name, path in builder.run(park_cleaned).paths.items()}

    assert first == second


def test_report_run_to_dict(builder, park_cleaned):
    broken = Mock(side_effect=RuntimeError("boom"))

    with patch.dict(AGGREGATIONS, {"peak_hour": broken}):
        summary = builder.run(park_cleaned, views=["by_hour", "peak_hour"]).to_dict()

    assert summary["status"] == "partial"
    assert summary["succeeded"] == ["by_hour"]
    assert "boom" in summary["failures"]["peak_hour"]
