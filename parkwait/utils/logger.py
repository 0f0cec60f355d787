"""
Loguru logging for the parkwait pipeline.

Every record is tagged with the pipeline stage that emitted it
(ingestion, features, reporting, training, pipeline), taken from the
emitting module. The console shows stage boundaries at the configured
level; the optional file sink keeps DEBUG by default so per-row
rejections are kept on disk without flooding the console.

Usage:
    from parkwait.utils.logger import logger, setup_logger

    setup_logger(log_level="INFO", enable_file=True)
    logger.info("Ingestion complete: 1,204 rows accepted")
"""

import sys
from pathlib import Path

from loguru import logger

STAGES = ("ingestion", "features", "reporting", "training", "pipeline")

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[stage]: <9}</cyan> | "
    "<level>{message}</level>"
)

FILE_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{extra[stage]: <9} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def _tag_stage(record: dict) -> None:
    parts = (record["name"] or "").split(".")
    stage = parts[1] if len(parts) > 1 and parts[0] == "parkwait" and parts[1] in STAGES else "-"
    record["extra"].setdefault("stage", stage)


def setup_logger(
    log_level: str = "INFO",
    log_dir: str | Path = "logs",
    log_file: str = "parkwait.log",
    rotation: str = "10 MB",
    retention: str = "7 days",
    enable_stdout: bool = True,
    enable_file: bool = False,
    file_level: str = "DEBUG",
) -> None:
    """
    Configure the console sink and the optional rotating file sink.

    Args:
        log_level: Minimum console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the log file
        log_file: Name of the log file
        rotation: When to rotate the log file (e.g., "10 MB", "1 day")
        retention: How long to keep old log files (e.g., "7 days")
        enable_stdout: Whether to log to stdout
        enable_file: Whether to log to file
        file_level: Minimum file level; DEBUG keeps per-row rejections
    """
    logger.remove()
    logger.configure(patcher=_tag_stage)

    if enable_stdout:
        logger.add(
            sys.stdout,
            format=CONSOLE_FORMAT,
            level=log_level,
            colorize=True,
            backtrace=False,
            diagnose=False,
        )

    if enable_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / log_file,
            format=FILE_LOG_FORMAT,
            level=file_level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )

    logger.debug(f"Logger initialized: console={log_level}, file={file_level if enable_file else 'off'}")


# Console only on import; the CLI reconfigures from settings
setup_logger()


__all__ = ["logger", "setup_logger", "STAGES"]
