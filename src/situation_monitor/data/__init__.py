"""Cached snapshots of market data and public datasets."""
