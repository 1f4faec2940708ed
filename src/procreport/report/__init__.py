"""Report sessions and static figure export."""

from .state import ReportSession, ReportStatus, load_report, load_report_from_config

__all__ = ["ReportSession", "ReportStatus", "load_report", "load_report_from_config"]
