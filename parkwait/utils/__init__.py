"""
Utility modules for the parkwait pipeline.

Provides:
    - logger: Loguru-based logging with stdout and optional file output
    - exceptions: Custom exception classes for error handling
"""

from parkwait.utils.logger import logger, setup_logger
from parkwait.utils.exceptions import (
    # Base
    ParkWaitError,
    # Ingestion
    IngestionError,
    RowRejectedError,
    # Reporting
    ReportingError,
    AggregationError,
    ReportWriteError,
    # Training / configuration
    TrainingError,
    ConfigurationError,
)

__all__ = [
    # Logger
    "logger",
    "setup_logger",
    # Base
    "ParkWaitError",
    # Ingestion
    "IngestionError",
    "RowRejectedError",
    # Reporting
    "ReportingError",
    "AggregationError",
    "ReportWriteError",
    # Training / configuration
    "TrainingError",
    "ConfigurationError",
]
