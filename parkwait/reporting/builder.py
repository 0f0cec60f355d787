"""
Runs the aggregate views and writes their tables.

The cleaned table is materialised once, before any view is computed.
Each view then runs on its own: a failure is recorded as an
AggregationError for that view and the remaining views still run and
are written. Nothing is retried; re-running a view is idempotent.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import polars as pl
from loguru import logger

from parkwait.config import ReportSettings
from parkwait.reporting.aggregations import AGGREGATIONS
from parkwait.reporting.writer import write_view
from parkwait.utils.exceptions import AggregationError, ReportWriteError


class RunStatus(str, Enum):
    """Status of a report run."""
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"  # Some views written, others failed


@dataclass
class ReportRun:
    """Outcome of a report run."""
    views: dict[str, pl.DataFrame] = field(default_factory=dict)
    paths: dict[str, Path] = field(default_factory=dict)
    failures: dict[str, AggregationError] = field(default_factory=dict)

    @property
    def succeeded(self) -> list[str]:
        return list(self.views)

    @property
    def status(self) -> RunStatus:
        if not self.failures:
            return RunStatus.SUCCESS
        if not self.views:
            return RunStatus.FAILED
        return RunStatus.PARTIAL

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "succeeded": self.succeeded,
            "paths": {name: str(path) for name, path in self.paths.items()},
            "failures": {name: error.message for name, error in self.failures.items()},
        }


class ReportBuilder:
    """
    Computes and writes the aggregate views.

    Usage:
        builder = ReportBuilder(settings.report)
        run = builder.run(cleaned_df)
    """

    def __init__(self, settings: ReportSettings | None = None):
        self.settings = settings or ReportSettings()
        self.output_dir = Path(self.settings.output_dir)

    def view_path(self, name: str) -> Path:
        return self.output_dir / f"{name}.csv"

    def run_view(self, name: str, cleaned: pl.DataFrame | pl.LazyFrame) -> pl.DataFrame:
        """
        Compute a single view.

        Args:
            name: View name (key of AGGREGATIONS)
            cleaned: Cleaned wait-time table

        Returns:
            The view

        Raises:
            AggregationError: If the view is unknown or cannot be computed
        """
        if name not in AGGREGATIONS:
            raise AggregationError(name, f"Unknown view, expected one of {list(AGGREGATIONS)}")

        try:
            view = AGGREGATIONS[name](cleaned, self.settings.top_n)
        except Exception as e:
            raise AggregationError(name, str(e)) from e

        logger.debug(f"Computed {name}: {len(view)} rows")
        return view

    def run(
        self,
        cleaned: pl.DataFrame | pl.LazyFrame,
        views: list[str] | None = None,
        write: bool = True,
    ) -> ReportRun:
        """
        Compute (and optionally write) the requested views.

        Args:
            cleaned: Cleaned wait-time table
            views: View names to run, defaults to all six in report order
            write: Whether to write each view under output_dir

        Returns:
            ReportRun with computed views, written paths and failures
        """
        names = views or list(AGGREGATIONS)
        result = ReportRun()

        try:
            table = cleaned.collect() if isinstance(cleaned, pl.LazyFrame) else cleaned
        except Exception as e:
            logger.error(f"Cleaned table unavailable: {e}")
            for name in names:
                result.failures[name] = AggregationError(name, f"Cleaned table unavailable: {e}")
            return result

        logger.info(f"Building {len(names)} views over {len(table):,} cleaned records")

        for name in names:
            try:
                view = self.run_view(name, table)
                if write:
                    result.paths[name] = write_view(
                        view,
                        self.view_path(name),
                        float_precision=self.settings.float_precision,
                        separator=self.settings.separator,
                    )
            except AggregationError as e:
                logger.error(f"View failed: {e.message}")
                result.failures[name] = e
                continue
            except ReportWriteError as e:
                logger.error(f"View not written: {e.message}")
                result.failures[name] = AggregationError(name, e.message)
                continue

            result.views[name] = view

        logger.info(
            f"Report run {result.status.value}: "
            f"{len(result.views)} succeeded, {len(result.failures)} failed"
        )
        return result


def create_builder(settings: ReportSettings | None = None) -> ReportBuilder:
    """Create a new report builder."""
    return ReportBuilder(settings)


__all__ = ["RunStatus", "ReportRun", "ReportBuilder", "create_builder"]
