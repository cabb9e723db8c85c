"""Superstore Profit Story: profit aggregation and a three-scene narrative."""

__version__ = "0.1.0"
