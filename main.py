"""
Wait-time report pipeline - Entry point

Build the six aggregate views from a raw file:
    python main.py data/waiting_times.csv

Or import and use programmatically:
    from parkwait.pipeline.run import run_pipeline

Environment variables:
    PARKWAIT_REPORT_OUTPUT_DIR: Directory for view tables (default: reports)
    PARKWAIT_REPORT_TOP_N: Rows kept by the top-N views (default: 10)
    PARKWAIT_LOG_LEVEL: Log level (default: INFO)
"""

import sys

from parkwait.pipeline.run import main


if __name__ == "__main__":
    sys.exit(main())
