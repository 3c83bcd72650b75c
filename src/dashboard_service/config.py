import os
from pydantic import BaseModel


class DashboardServiceConfig(BaseModel):
    dashboard_url: str
    timeout: float


def load_config() -> DashboardServiceConfig:
    dashboard_url = os.getenv("DASHBOARD_URL", "http://localhost:8080/api/dashboard")
    timeout = float(os.getenv("DASHBOARD_TIMEOUT", "10.0"))

    return DashboardServiceConfig(
        dashboard_url=dashboard_url,
        timeout=timeout,
    )
