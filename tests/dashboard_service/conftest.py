import pytest

from src.dashboard_service.domain import Dashboard, DashboardClient
from src.dashboard_service.exceptions import DashboardUnavailableError


class FakeDashboardClient(DashboardClient):
    """Dashboard client returning a fixed document."""
    def __init__(self, document: dict):
        self.document = document
        self.calls = 0
        self.closed = False

    def fetch_dashboard(self) -> Dashboard:
        self.calls += 1
        return Dashboard(**self.document)

    def close(self) -> None:
        self.closed = True


class UnavailableDashboardClient(DashboardClient):
    def fetch_dashboard(self) -> Dashboard:
        raise DashboardUnavailableError("Dashboard request failed: connection refused")


@pytest.fixture
def dashboard_document() -> dict:
    return {
        "totalTickets": 12,
        "totalLeads": 4,
        "expenses": [{"id": 1, "amount": 250.5}],
        "budget": {"total": 10000, "remaining": 9749.5},
    }


@pytest.fixture
def fake_dashboard_client(dashboard_document: dict) -> FakeDashboardClient:
    return FakeDashboardClient(dashboard_document)
