"""Situation monitor: background news aggregation, scoring and caching."""

__version__ = "0.1.0"
