import logging

from src.dashboard_service.app import create_app
from src.dashboard_service.client import HttpDashboardClient
from src.dashboard_service.config import load_config


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

config = load_config()

_client = HttpDashboardClient(config.dashboard_url, timeout=config.timeout)

app = create_app(_client)
