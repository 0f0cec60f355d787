"""
Wait-time report pipeline runner.

Ingests a raw file, derives features, writes the six aggregate view
tables and optionally charts, the cleaned table and a baseline model.

Usage:
    python -m parkwait.pipeline.run data/waiting_times.csv
    python -m parkwait.pipeline.run data/waiting_times.csv --views by_hour peak_hour --plots
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from parkwait.config import Settings, get_settings
from parkwait.features import derive_frame, get_data_summary
from parkwait.ingestion import Ingestor
from parkwait.reporting import AGGREGATIONS, ReportBuilder, ReportRun, save_report_plots
from parkwait.training import train_model
from parkwait.utils.exceptions import IngestionError, TrainingError
from parkwait.utils.logger import setup_logger


def run_pipeline(
    input_path: str | Path,
    settings: Settings,
    views: list[str] | None = None,
    cleaned_out: str | Path | None = None,
    plots: bool = False,
    train: bool = False,
) -> ReportRun:
    """
    Run ingestion, feature derivation and reporting once over a file.

    Args:
        input_path: Raw delimited file
        settings: Pipeline settings
        views: Views to build, defaults to all
        cleaned_out: Optional parquet path for the cleaned table
        plots: Whether to save PNG charts next to the view tables
        train: Whether to train the baseline model on the cleaned table

    Returns:
        ReportRun describing the written views and any failures

    Raises:
        IngestionError: If the raw file cannot be read
        TrainingError: If training was requested and failed, after the
            view tables are written and the summary printed
    """
    print("=" * 60)
    print("WAIT-TIME REPORT PIPELINE")
    print(f"Input: {input_path}")
    print("=" * 60)

    logger.info("Step 1: Ingesting raw data...")
    raw_df = Ingestor(settings.ingestion).load(input_path)

    logger.info("Step 2: Deriving features...")
    cleaned = derive_frame(raw_df)

    summary = get_data_summary(cleaned)
    logger.info(
        f"Cleaned table: {summary['total_records']:,} records, "
        f"{summary.get('unique_attractions', 0)} attractions, "
        f"{summary.get('date_min')} to {summary.get('date_max')}"
    )

    if cleaned_out:
        cleaned_path = Path(cleaned_out)
        cleaned_path.parent.mkdir(parents=True, exist_ok=True)
        cleaned.write_parquet(cleaned_path)
        logger.info(f"Saved cleaned table: {cleaned_path}")

    logger.info("Step 3: Building reports...")
    builder = ReportBuilder(settings.report)
    report = builder.run(cleaned, views=views)

    if plots:
        logger.info("Step 4: Saving plots...")
        save_report_plots(report.views, settings.report.output_dir)

    training_error = None
    if train:
        logger.info("Step 5: Training baseline model...")
        try:
            result = train_model(cleaned, settings.training)
            logger.info(f"Baseline metrics: {result.metrics}")
        except TrainingError as e:
            logger.error(f"Training failed: {e.message}")
            training_error = e

    print("=" * 60)
    print(f"PIPELINE {report.status.value.upper()}")
    for name, path in report.paths.items():
        print(f"  {name}: {path}")
    for name, error in report.failures.items():
        print(f"  {name}: FAILED ({error.message})")
    if training_error:
        print(f"  training: FAILED ({training_error.message})")
    print("=" * 60)

    if training_error:
        raise training_error
    return report


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Build wait-time aggregate reports")
    parser.add_argument("input", help="Raw wait-time file (14 columns, header row)")
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for view tables (default: from settings)",
    )
    parser.add_argument(
        "--views",
        nargs="+",
        choices=list(AGGREGATIONS),
        default=None,
        help="Views to build (default: all)",
    )
    parser.add_argument(
        "--cleaned-out",
        type=str,
        default=None,
        help="Write the cleaned table to this parquet file",
    )
    parser.add_argument("--plots", action="store_true", help="Save PNG charts")
    parser.add_argument("--train", action="store_true", help="Train the baseline model")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (default: from settings)",
    )

    args = parser.parse_args(argv)
    settings = get_settings()

    if args.output_dir:
        settings = settings.model_copy(
            update={"report": settings.report.model_copy(update={"output_dir": args.output_dir})}
        )

    setup_logger(
        log_level=args.log_level or settings.logging.level,
        log_dir=settings.logging.log_dir,
        log_file=settings.logging.log_file,
        rotation=settings.logging.rotation,
        retention=settings.logging.retention,
        enable_file=settings.logging.to_file,
        file_level=settings.logging.file_level,
    )

    try:
        report = run_pipeline(
            args.input,
            settings,
            views=args.views,
            cleaned_out=args.cleaned_out,
            plots=args.plots,
            train=args.train,
        )
    except IngestionError as e:
        logger.error(f"Ingestion failed: {e.message}")
        return 2
    except TrainingError:
        return 1

    return 1 if report.failures else 0


if __name__ == "__main__":
    sys.exit(main())
