from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from src.dashboard_service.domain import DashboardClient
from src.dashboard_service.exceptions import DashboardUnavailableError


def create_app(dashboard_client: DashboardClient) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        close = getattr(dashboard_client, "close", None)
        if close is not None:
            close()

    app = FastAPI(title="Dashboard Service", lifespan=lifespan)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/dashboard")
    def get_dashboard() -> dict:
        try:
            dashboard = dashboard_client.fetch_dashboard()
        except DashboardUnavailableError:
            raise HTTPException(status_code=502, detail="Dashboard service unavailable")

        return dashboard.model_dump()

    return app
