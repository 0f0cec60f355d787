"""
Wait-time prediction: feature contract and gradient-boosted baseline.
"""

from parkwait.training.dataset import FEATURE_COLUMNS, TARGET_COLUMN, build_training_frame, time_split
from parkwait.training.train import TrainingResult, train_model

__all__ = [
    "FEATURE_COLUMNS",
    "TARGET_COLUMN",
    "build_training_frame",
    "time_split",
    "TrainingResult",
    "train_model",
]
