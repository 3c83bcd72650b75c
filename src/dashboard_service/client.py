import logging
from typing import Optional

import httpx

from src.dashboard_service.domain import Dashboard
from src.dashboard_service.exceptions import DashboardUnavailableError


logger = logging.getLogger(__name__)


class HttpDashboardClient:
    """Fetches the dashboard JSON document from the CRM API."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: Absolute URL of the dashboard endpoint.
            timeout: Request timeout in seconds.
            client: Preconfigured httpx client (optional, used in tests).
        """
        self.url = url
        self.client = client or httpx.Client(timeout=timeout)

    def fetch_dashboard(self) -> Dashboard:
        try:
            response = self.client.get(self.url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.error("Dashboard request to %s failed: %s", self.url, e)
            raise DashboardUnavailableError(f"Dashboard request failed: {e}") from e
        except ValueError as e:
            logger.error("Dashboard response from %s is not JSON: %s", self.url, e)
            raise DashboardUnavailableError("Dashboard response is not valid JSON") from e

        if not isinstance(payload, dict):
            logger.error("Dashboard response from %s is not an object", self.url)
            raise DashboardUnavailableError("Dashboard response is not a JSON object")

        return Dashboard(**payload)

    def close(self) -> None:
        self.client.close()
