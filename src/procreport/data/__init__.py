"""CSV loading and tokenizing."""

from .loader import ParsedCSV, fetch_csv_text, load_csv, parse_csv

__all__ = ["ParsedCSV", "fetch_csv_text", "load_csv", "parse_csv"]
