"""
Logger configuration.
"""

from parkwait.ingestion import Ingestor, read_raw_records
from parkwait.utils.logger import logger, setup_logger
from tests.conftest import make_row, write_raw_csv


def test_file_sink_writes_log(tmp_path):
    setup_logger(log_level="INFO", log_dir=tmp_path / "logs", enable_stdout=False, enable_file=True)

    logger.info("ingested 12 rows")
    logger.complete()

    log_file = tmp_path / "logs" / "parkwait.log"
    assert log_file.exists()
    assert "ingested 12 rows" in log_file.read_text()


def test_file_level_filters_debug(tmp_path):
    setup_logger(log_dir=tmp_path, enable_stdout=False, enable_file=True, file_level="WARNING")

    logger.info("hidden")
    logger.warning("shown")
    logger.complete()

    text = (tmp_path / "parkwait.log").read_text()
    assert "shown" in text
    assert "hidden" not in text


def test_file_keeps_row_rejections_below_console_level(tmp_path):
    raw_path = write_raw_csv(tmp_path / "raw.csv", [make_row(), make_row(capacity=-1)])
    setup_logger(log_level="WARNING", log_dir=tmp_path / "logs", enable_stdout=False, enable_file=True)

    list(read_raw_records(raw_path))
    logger.complete()

    text = (tmp_path / "logs" / "parkwait.log").read_text()
    assert "line 3: capacity is negative" in text


def test_records_tagged_with_stage(tmp_path):
    raw_path = write_raw_csv(tmp_path / "raw.csv", [make_row()])
    setup_logger(log_dir=tmp_path / "logs", enable_stdout=False, enable_file=True)

    Ingestor().scan(raw_path)
    logger.info("from a test module")
    logger.complete()

    lines = (tmp_path / "logs" / "parkwait.log").read_text().splitlines()
    assert any("| ingestion |" in line and "Scanning raw input" in line for line in lines)
    assert any("| -         |" in line and "from a test module" in line for line in lines)
