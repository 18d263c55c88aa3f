from gofinances.reporters.dashboard import DashboardReport, build_dashboard
from gofinances.reporters.summary import SummaryReport, build_summary

__all__ = ["DashboardReport", "SummaryReport", "build_dashboard", "build_summary"]
