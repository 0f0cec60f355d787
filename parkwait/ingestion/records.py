"""
Row-level parsing of raw wait-time observations.

A raw file has a fixed 14-column layout (the header row is discarded,
columns are matched by position):

    WORK_DATE, DEB_TIME, DEB_TIME_HOUR, FIN_TIME, ENTITY_DESCRIPTION_SHORT,
    WAIT_TIME_MAX, NB_UNITS, GUEST_CARRIED, CAPACITY, ADJUST_CAPACITY,
    OPEN_TIME, UP_TIME, DOWNTIME, NB_MAX_UNIT

Rows that do not parse, or that fail the acceptance filter
(wait_time_max >= 0 and capacity >= 0), are rejected. All other numeric
fields are clamped at zero.
"""

import csv
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import NamedTuple

from loguru import logger

from parkwait.utils.exceptions import IngestionError, RowRejectedError


RAW_COLUMNS = [
    "work_date",
    "start_time",
    "start_hour",
    "end_time",
    "attraction_name",
    "wait_time_max",
    "nb_units",
    "guest_carried",
    "capacity",
    "adjust_capacity",
    "open_time",
    "up_time",
    "downtime",
    "nb_max_unit",
]

INT_COLUMNS = ["start_hour", "wait_time_max", "open_time", "up_time", "downtime"]
FLOAT_COLUMNS = ["nb_units", "guest_carried", "capacity", "adjust_capacity", "nb_max_unit"]

# Acceptance filter: negative values reject the row instead of being clamped
REQUIRED_NON_NEGATIVE = ("wait_time_max", "capacity")

# Extended ISO date only; basic format "20240304" is malformed
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class RawRecord(NamedTuple):
    """One observation per attraction per time bucket."""
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

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return self._asdict()


@dataclass
class IngestionStats:
    """Counters for a single ingestion pass."""
    rows_read: int = 0
    rows_accepted: int = 0
    rows_rejected: int = 0

    @property
    def rejection_rate(self) -> float:
        if self.rows_read == 0:
            return 0.0
        return 100 * self.rows_rejected / self.rows_read


def _parse_int(name: str, value: str) -> int:
    text = value.strip()
    if "_" in text:
        raise RowRejectedError(f"{name} is not numeric: {value!r}")
    try:
        return int(text)
    except ValueError:
        pass
    # Integral floats such as "45.0" are accepted, anything else is malformed
    try:
        number = float(text)
    except ValueError:
        raise RowRejectedError(f"{name} is not numeric: {value!r}") from None
    if not number.is_integer():
        raise RowRejectedError(f"{name} is not an integer: {value!r}")
    return int(number)


def _parse_float(name: str, value: str) -> float:
    text = value.strip()
    if "_" in text:
        raise RowRejectedError(f"{name} is not numeric: {value!r}")
    try:
        number = float(text)
    except ValueError:
        raise RowRejectedError(f"{name} is not numeric: {value!r}") from None
    if number != number or number in (float("inf"), float("-inf")):
        raise RowRejectedError(f"{name} is not finite: {value!r}")
    return number


def _parse_date(value: str) -> date:
    text = value.strip()[:10]
    if not re.match(DATE_PATTERN, text):
        raise RowRejectedError(f"work_date is not a date: {value!r}")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise RowRejectedError(f"work_date is not a date: {value!r}") from None


def parse_row(fields: Sequence[str], line_number: int | None = None) -> RawRecord:
    """
    Parse one delimited row into a RawRecord.

    Args:
        fields: The row's field values, in file order
        line_number: Optional 1-based line number for error messages

    Returns:
        A validated RawRecord

    Raises:
        RowRejectedError: If the row is malformed or fails the acceptance filter
    """
    try:
        if len(fields) != len(RAW_COLUMNS):
            raise RowRejectedError(f"expected {len(RAW_COLUMNS)} fields, got {len(fields)}")

        values = dict(zip(RAW_COLUMNS, fields))
        parsed: dict = {
            "work_date": _parse_date(values["work_date"]),
            "start_time": values["start_time"].strip(),
            "end_time": values["end_time"].strip(),
            "attraction_name": values["attraction_name"].strip(),
        }
        if not parsed["attraction_name"]:
            raise RowRejectedError("attraction_name is empty")

        for name in INT_COLUMNS:
            parsed[name] = _parse_int(name, values[name])
        for name in FLOAT_COLUMNS:
            parsed[name] = _parse_float(name, values[name])

        if not 0 <= parsed["start_hour"] <= 23:
            raise RowRejectedError(f"start_hour out of range: {parsed['start_hour']}")

        for name in REQUIRED_NON_NEGATIVE:
            if parsed[name] < 0:
                raise RowRejectedError(f"{name} is negative: {parsed[name]}")

        for name in INT_COLUMNS + FLOAT_COLUMNS:
            if name not in REQUIRED_NON_NEGATIVE and parsed[name] < 0:
                parsed[name] = type(parsed[name])(0)

        return RawRecord(**parsed)

    except RowRejectedError as e:
        raise RowRejectedError(e.reason, line_number=line_number, row=list(fields)) from None


def iter_raw_records(
    rows: Iterable[Sequence[str]],
    has_header: bool = True,
    stats: IngestionStats | None = None,
) -> Iterator[RawRecord]:
    """
    Lazily parse rows, skipping the header and dropping rejected rows.

    Args:
        rows: Iterable of field lists (e.g. a csv.reader)
        has_header: Whether the first row is a header to discard
        stats: Optional counters, updated as rows are consumed

    Yields:
        Valid RawRecords, in input order
    """
    stats = stats if stats is not None else IngestionStats()
    start = 1
    iterator = iter(rows)

    if has_header:
        next(iterator, None)
        start = 2

    for line_number, fields in enumerate(iterator, start=start):
        stats.rows_read += 1
        try:
            record = parse_row(fields, line_number=line_number)
        except RowRejectedError as e:
            stats.rows_rejected += 1
            logger.debug(f"Rejected row: {e}")
            continue
        stats.rows_accepted += 1
        yield record


def read_raw_records(
    path: str | Path,
    separator: str = ",",
    has_header: bool = True,
    stats: IngestionStats | None = None,
) -> Iterator[RawRecord]:
    """
    Lazily read RawRecords from a delimited file.

    Args:
        path: Raw file path
        separator: Field delimiter
        has_header: Whether the first line is a header
        stats: Optional counters

    Yields:
        Valid RawRecords

    Raises:
        IngestionError: If the file does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise IngestionError(f"Raw input not found: {path}", path=str(path))

    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.reader(f, delimiter=separator)
        yield from iter_raw_records(reader, has_header=has_header, stats=stats)


__all__ = [
    "RAW_COLUMNS",
    "INT_COLUMNS",
    "FLOAT_COLUMNS",
    "RawRecord",
    "IngestionStats",
    "parse_row",
    "iter_raw_records",
    "read_raw_records",
]
