from __future__ import annotations


class ReportError(Exception):
    """Base class for failures surfaced by a report load."""


class LoadError(ReportError):
    """The CSV resource could not be fetched."""


class ParseError(ReportError):
    """The CSV text could not be tokenized."""


class ReportStateError(ReportError):
    """A report session was asked to leave a state it already settled."""


__all__ = ["ReportError", "LoadError", "ParseError", "ReportStateError"]
