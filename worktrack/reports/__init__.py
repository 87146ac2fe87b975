"""Reporting queries package."""

from worktrack.reports.queries import HISTORY_FILTERS, QueryError, ReportQueries

__all__ = ["HISTORY_FILTERS", "QueryError", "ReportQueries"]
