"""
Data Ingestion Module

Canonical fund data model and the transforms that build it from caller rows:
- Fund profiles, performance observations and return series
- Alternative-investment allocation records
- Row validators and normalizers (dicts or pandas DataFrames)
"""

__version__ = "0.1.0"
