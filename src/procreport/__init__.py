"""Procedure report: CSV aggregation of medical procedures by year."""

__version__ = "1.0.0"
