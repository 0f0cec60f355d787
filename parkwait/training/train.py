"""
Gradient-boosted baseline for wait-time prediction.

Trains a GradientBoostingRegressor on the feature contract with a
chronological hold-out and reports MAE, RMSE and R² on both sides.
The fitted model is returned to the caller, never persisted.

Usage:
    python -m parkwait.training.train data/waiting_times.csv
"""

import argparse
from dataclasses import dataclass, field

import numpy as np
import polars as pl
from loguru import logger
from sklearn.ensemble import GradientBoostingRegressor
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from parkwait.config import TrainingSettings, get_settings
from parkwait.training.dataset import FEATURE_COLUMNS, TARGET_COLUMN, build_training_frame, time_split


@dataclass
class TrainingResult:
    """Fitted model and its evaluation."""
    model: GradientBoostingRegressor
    metrics: dict[str, float]
    feature_importances: dict[str, float] = field(default_factory=dict)
    samples_train: int = 0
    samples_test: int = 0


def _metrics(prefix: str, y_true: np.ndarray, y_pred: np.ndarray) -> dict[str, float]:
    metrics = {
        f"{prefix}_mae": float(mean_absolute_error(y_true, y_pred)),
        f"{prefix}_rmse": float(np.sqrt(mean_squared_error(y_true, y_pred))),
    }
    # R² is undefined for a single sample
    if len(y_true) > 1:
        metrics[f"{prefix}_r2"] = float(r2_score(y_true, y_pred))
    return metrics


def train_model(
    cleaned: pl.DataFrame | pl.LazyFrame,
    settings: TrainingSettings | None = None,
) -> TrainingResult:
    """
    Train the baseline on a cleaned table.

    Args:
        cleaned: Cleaned wait-time table
        settings: Training configuration

    Returns:
        TrainingResult with the fitted model and metrics

    Raises:
        TrainingError: If there are too few usable rows to split
    """
    settings = settings or TrainingSettings()

    logger.info("Step 1: Building training frame...")
    df = build_training_frame(cleaned)
    train_df, test_df = time_split(df, settings.test_ratio)

    X_train = train_df.select(FEATURE_COLUMNS).to_numpy()
    y_train = train_df[TARGET_COLUMN].to_numpy()
    X_test = test_df.select(FEATURE_COLUMNS).to_numpy()
    y_test = test_df[TARGET_COLUMN].to_numpy()

    logger.info(f"Step 2: Training on {len(X_train):,} samples (test: {len(X_test):,})...")
    model = GradientBoostingRegressor(
        n_estimators=settings.n_estimators,
        learning_rate=settings.learning_rate,
        max_depth=settings.max_depth,
        random_state=settings.random_state,
    )
    model.fit(X_train, y_train)

    logger.info("Step 3: Computing metrics...")
    metrics = {
        **_metrics("train", y_train, model.predict(X_train)),
        **_metrics("test", y_test, model.predict(X_test)),
    }
    importances = dict(zip(FEATURE_COLUMNS, (float(v) for v in model.feature_importances_)))

    logger.info(
        f"Train MAE: {metrics['train_mae']:.2f}, Test MAE: {metrics['test_mae']:.2f}, "
        f"Test RMSE: {metrics['test_rmse']:.2f}"
    )

    return TrainingResult(
        model=model,
        metrics=metrics,
        feature_importances=importances,
        samples_train=len(X_train),
        samples_test=len(X_test),
    )


def main():
    """Main entry point."""
    from parkwait.features import derive_frame
    from parkwait.ingestion import Ingestor

    parser = argparse.ArgumentParser(description="Train the wait-time baseline model")
    parser.add_argument("input", help="Raw wait-time file")

    args = parser.parse_args()
    settings = get_settings()

    raw_df = Ingestor(settings.ingestion).load(args.input)
    result = train_model(derive_frame(raw_df), settings.training)

    print("=" * 60)
    print("TRAINING COMPLETE")
    for name, value in result.metrics.items():
        print(f"  {name}: {value:.3f}")
    print("Top features:")
    for name, value in sorted(result.feature_importances.items(), key=lambda kv: kv[1], reverse=True)[:5]:
        print(f"  {name}: {value:.3f}")
    print("=" * 60)


if __name__ == "__main__":
    main()
