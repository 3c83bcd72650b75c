from typing import Protocol

from pydantic import BaseModel, ConfigDict


class Dashboard(BaseModel):
    """Dashboard document as returned by the CRM API. Fields are passed through as-is."""

    model_config = ConfigDict(extra="allow")


class DashboardClient(Protocol):
    def fetch_dashboard(self) -> Dashboard:
        """Fetch the current dashboard document."""
        ...
