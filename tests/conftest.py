"""
Shared fixtures for the parkwait test suite.
"""

import matplotlib

matplotlib.use("Agg")

from pathlib import Path

import polars as pl
import pytest

from parkwait.features import derive_frame
from parkwait.ingestion import RAW_COLUMNS, Ingestor, parse_row
from parkwait.utils.logger import setup_logger


HEADER = [
    "WORK_DATE", "DEB_TIME", "DEB_TIME_HOUR", "FIN_TIME", "ENTITY_DESCRIPTION_SHORT",
    "WAIT_TIME_MAX", "NB_UNITS", "GUEST_CARRIED", "CAPACITY", "ADJUST_CAPACITY",
    "OPEN_TIME", "UP_TIME", "DOWNTIME", "NB_MAX_UNIT",
]

# 2024-03-04 is a Monday
DEFAULT_ROW = {
    "work_date": "2024-03-04",
    "start_time": "2024-03-04 10:00:00.000",
    "start_hour": "10",
    "end_time": "2024-03-04 10:15:00.000",
    "attraction_name": "Space Mountain",
    "wait_time_max": "30",
    "nb_units": "2.0",
    "guest_carried": "80.0",
    "capacity": "100.0",
    "adjust_capacity": "100.0",
    "open_time": "15",
    "up_time": "15",
    "downtime": "0",
    "nb_max_unit": "2.0",
}


def make_row(**overrides) -> list[str]:
    """A raw row as field strings, with selected columns overridden."""
    values = {**DEFAULT_ROW, **{k: str(v) for k, v in overrides.items()}}
    return [values[name] for name in RAW_COLUMNS]


def write_raw_csv(path: Path, rows: list[list[str]], separator: str = ",") -> Path:
    lines = [separator.join(HEADER)] + [separator.join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def cleaned_frame(rows: list[list[str]]) -> pl.DataFrame:
    """Cleaned table built through the row-level path."""
    records = [parse_row(row) for row in rows]
    return derive_frame(Ingestor.from_records(records))


@pytest.fixture(autouse=True)
def quiet_logger():
    setup_logger(log_level="WARNING")
    yield


@pytest.fixture
def space_mountain_rows() -> list[list[str]]:
    return [
        make_row(wait_time_max=30, guest_carried=80),
        make_row(wait_time_max=50, guest_carried=90, start_hour=11, start_time="2024-03-04 11:00:00.000"),
    ]


@pytest.fixture
def park_rows() -> list[list[str]]:
    """A small week of observations over three attractions."""
    rows = []
    days = ["2024-03-02", "2024-03-03", "2024-03-04", "2024-03-05"]  # Sat, Sun, Mon, Tue
    attractions = {
        "Space Mountain": (45, 100.0),
        "Dumbo": (20, 50.0),
        "Pirates": (30, 0.0),  # no rated capacity
    }
    for day in days:
        for hour in (9, 12, 15):
            for name, (base_wait, capacity) in attractions.items():
                rows.append(make_row(
                    work_date=day,
                    start_time=f"{day} {hour:02d}:00:00.000",
                    start_hour=hour,
                    end_time=f"{day} {hour:02d}:15:00.000",
                    attraction_name=name,
                    wait_time_max=base_wait + hour,
                    guest_carried=40.0,
                    capacity=capacity,
                    adjust_capacity=capacity,
                    open_time=15 if hour != 15 else 0,
                    up_time=12 if hour != 15 else 0,
                    downtime=3 if hour != 15 else 0,
                ))
    return rows


@pytest.fixture
def park_cleaned(park_rows) -> pl.DataFrame:
    return cleaned_frame(park_rows)
