"""
Bulk Polars ingestion: same acceptance rules as the row-level parser.
"""

import polars as pl
import pytest

from parkwait.config import IngestionSettings
from parkwait.ingestion import RAW_COLUMNS, RAW_SCHEMA, Ingestor, read_raw_records
from parkwait.utils.exceptions import IngestionError
from tests.conftest import make_row, write_raw_csv


@pytest.fixture
def mixed_rows() -> list[list[str]]:
    return [
        make_row(),
        make_row(wait_time_max=-1),
        make_row(capacity=-0.5),
        make_row(wait_time_max="n/a"),
        make_row(start_hour=30),
        make_row(downtime=-4, attraction_name="Dumbo"),
        make_row(wait_time_max="45.0", attraction_name="Pirates"),
        make_row(open_time="7.5"),
    ]


def test_scan_returns_typed_lazyframe(tmp_path, mixed_rows):
    path = write_raw_csv(tmp_path / "raw.csv", mixed_rows)

    lf = Ingestor().scan(path)

    assert isinstance(lf, pl.LazyFrame)
    assert lf.collect_schema().names() == RAW_COLUMNS
    assert dict(lf.collect_schema()) == RAW_SCHEMA


def test_load_applies_acceptance_filter(tmp_path, mixed_rows):
    """Rejected rows are dropped and counted; the rest are clamped."""
    path = write_raw_csv(tmp_path / "raw.csv", mixed_rows)
    ingestor = Ingestor()

    df = ingestor.load(path)

    assert df["attraction_name"].to_list() == ["Space Mountain", "Dumbo", "Pirates"]
    assert df.filter(pl.col("attraction_name") == "Dumbo")["downtime"].item() == 0
    assert df.filter(pl.col("attraction_name") == "Pirates")["wait_time_max"].item() == 45
    assert ingestor.last_stats.rows_read == 8
    assert ingestor.last_stats.rows_accepted == 3
    assert ingestor.last_stats.rows_rejected == 5


def test_bulk_and_row_level_paths_agree(tmp_path, mixed_rows):
    path = write_raw_csv(tmp_path / "raw.csv", mixed_rows)

    bulk = Ingestor().load(path)
    row_level = Ingestor.from_records(read_raw_records(path)).collect()

    assert bulk.equals(row_level)


def test_custom_separator(tmp_path):
    path = write_raw_csv(tmp_path / "raw.csv", [make_row(), make_row()], separator=";")

    df = Ingestor(IngestionSettings(separator=";")).load(path)

    assert len(df) == 2


def test_from_records_empty():
    df = Ingestor.from_records([]).collect()

    assert df.is_empty()
    assert df.columns == RAW_COLUMNS


def test_scan_missing_file(tmp_path):
    with pytest.raises(IngestionError) as exc_info:
        Ingestor().scan(tmp_path / "missing.csv")

    assert exc_info.value.path.endswith("missing.csv")


def test_header_names_are_discarded(tmp_path):
    """Columns bind by position whatever the header says."""
    path = tmp_path / "raw.csv"
    header = ",".join(f"Col {i}" for i in range(len(RAW_COLUMNS)))
    path.write_text(header + "\n" + ",".join(make_row()) + "\n", encoding="utf-8")

    df = Ingestor().load(path)

    assert df.columns == RAW_COLUMNS
    assert df["attraction_name"].to_list() == ["Space Mountain"]


def test_file_without_header(tmp_path):
    path = tmp_path / "raw.csv"
    path.write_text(",".join(make_row()) + "\n", encoding="utf-8")

    df = Ingestor(IngestionSettings(has_header=False)).load(path)

    assert df["wait_time_max"].to_list() == [30]


def test_paths_agree_on_compact_dates_and_underscores(tmp_path):
    rows = [
        make_row(),
        make_row(work_date="20240304"),
        make_row(wait_time_max="1_000"),
        make_row(guest_carried="8_0.0"),
    ]
    path = write_raw_csv(tmp_path / "raw.csv", rows)

    bulk = Ingestor().load(path)
    row_level = Ingestor.from_records(read_raw_records(path)).collect()

    assert bulk.height == 1
    assert bulk.equals(row_level)
