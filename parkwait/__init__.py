"""
Feature engineering and aggregation pipeline for theme-park attraction wait times.

Submodules:
- ingestion: Parse and validate raw wait-time records
- features: Derive calendar, utilization and efficiency features
- reporting: The six aggregate views, their tables and charts
- training: Feature contract and gradient-boosted baseline
- pipeline: End-to-end runner and CLI
"""

__version__ = "0.1.0"
