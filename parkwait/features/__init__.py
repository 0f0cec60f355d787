"""
Feature derivation for cleaned wait-time records.

Submodules:
- derivation: row-level and vectorised feature derivation
- summary: summary statistics of the cleaned table
"""

from parkwait.features.derivation import (
    DERIVED_COLUMNS,
    CLEANED_COLUMNS,
    Percentage,
    percentage,
    day_of_week_sunday_first,
    quarter_of,
    is_weekend_day,
    CleanedRecord,
    derive_features,
    add_derived_columns,
    derive_frame,
)
from parkwait.features.summary import get_data_summary

__all__ = [
    "DERIVED_COLUMNS",
    "CLEANED_COLUMNS",
    "Percentage",
    "percentage",
    "day_of_week_sunday_first",
    "quarter_of",
    "is_weekend_day",
    "CleanedRecord",
    "derive_features",
    "add_derived_columns",
    "derive_frame",
    "get_data_summary",
]
