"""
Custom exceptions for the parkwait pipeline.

Provides a hierarchy of exceptions for different error scenarios:
- Ingestion errors (rejected rows, unreadable input)
- Reporting errors (failed aggregations, unwritable tables)
- Training errors
"""


class ParkWaitError(Exception):
    """Base exception for all parkwait errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# =============================================================================
# Ingestion Exceptions
# =============================================================================

class IngestionError(ParkWaitError):
    """Error when the raw input cannot be read at all."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class RowRejectedError(ParkWaitError):
    """
    A single raw row failed parsing or the acceptance filter.

    Never fatal: the ingestion iterator drops the row and counts it.
    """

    def __init__(self, reason: str, line_number: int | None = None, row: list[str] | None = None):
        self.reason = reason
        self.line_number = line_number
        self.row = row
        location = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}{reason}")


# =============================================================================
# Reporting Exceptions
# =============================================================================

class ReportingError(ParkWaitError):
    """Base exception for aggregation reporting errors."""
    pass


class AggregationError(ReportingError):
    """An aggregate view could not be computed. Fatal for that view only."""

    def __init__(self, view: str, message: str):
        self.view = view
        super().__init__(f"[{view}] {message}")


class ReportWriteError(ReportingError):
    """Error when writing a view table to disk."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


# =============================================================================
# Training / Configuration Exceptions
# =============================================================================

class TrainingError(ParkWaitError):
    """Error when the model cannot be trained (e.g. no usable rows)."""
    pass


class ConfigurationError(ParkWaitError):
    """Error with pipeline configuration."""
    pass


__all__ = [
    "ParkWaitError",
    "IngestionError",
    "RowRejectedError",
    "ReportingError",
    "AggregationError",
    "ReportWriteError",
    "TrainingError",
    "ConfigurationError",
]
