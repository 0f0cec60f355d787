"""
Wait-time report pipeline.

Runs once over a raw file:
- Ingestion & cleaning
- Feature derivation
- The six aggregate views, written as delimited tables
"""
