"""Exceptions for the dashboard service."""


class DashboardUnavailableError(Exception):
    """Raised when the dashboard document cannot be fetched or decoded."""
    pass
