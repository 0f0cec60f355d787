"""
Delimited view tables.
"""

from unittest.mock import patch

import polars as pl
import pytest

from parkwait.reporting import view_to_text, write_view
from parkwait.utils.exceptions import ReportWriteError


@pytest.fixture
def view() -> pl.DataFrame:
    return pl.DataFrame({
        "is_weekend": [False, True],
        "avg_wait_time": [40.0, 52.5],
        "avg_utilization": [85.0, 91.257],
        "total_observations": [2, 3],
    })


def test_view_to_text(view):
    assert view_to_text(view).splitlines() == [
        "is_weekend,avg_wait_time,avg_utilization,total_observations",
        "false,40.00,85.00,2",
        "true,52.50,91.26,3",
    ]


def test_view_to_text_separator(view):
    assert view_to_text(view, separator="\t").splitlines()[0].split("\t")[0] == "is_weekend"


def test_write_view_creates_directories(tmp_path, view):
    path = write_view(view, tmp_path / "nested" / "dir" / "weekend.csv")

    assert path.exists()
    assert path.read_text() == view_to_text(view)


def test_empty_view_writes_header_only(tmp_path, view):
    path = write_view(view.clear(), tmp_path / "empty.csv")

    assert path.read_text().strip() == "is_weekend,avg_wait_time,avg_utilization,total_observations"


def test_write_view_failure(tmp_path, view):
    with patch.object(pl.DataFrame, "write_csv", side_effect=OSError("read-only file system")):
        with pytest.raises(ReportWriteError) as exc_info:
            write_view(view, tmp_path / "weekend.csv")

    assert exc_info.value.path.endswith("weekend.csv")
