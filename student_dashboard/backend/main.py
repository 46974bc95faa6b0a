import os
import logging
import secrets
from dataclasses import replace
from typing import Optional

from dotenv import load_dotenv
import uvicorn
from fastapi import FastAPI

from student_dashboard.backend.config import Settings, get_settings
from student_dashboard.backend.routers import assignments_api
from student_dashboard.backend.routers import auth_api
from student_dashboard.backend.routers import dashboard_api
from student_dashboard.backend.services.workspace import (
    GatewayFactory,
    WorkspaceRegistry,
    default_gateway_factory,
)
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    gateway_factory: GatewayFactory = default_gateway_factory,
) -> FastAPI:
    settings = settings or get_settings()
    if not settings.api_url:
        logger.warning("API_URL is not set; signed-in users will see a load error instead of assignments.")
    if not settings.allowed_emails:
        logger.warning("ALLOWED_EMAILS is empty; nobody will be able to sign in.")
    if not settings.session_secret:
        logger.warning("SESSION_SECRET is not set; sign-ins will not survive a restart.")
        settings = replace(settings, session_secret=secrets.token_urlsafe(32))

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.workspaces = WorkspaceRegistry(settings, gateway_factory)

    app.include_router(
        auth_api.router
    )
    app.include_router(
        dashboard_api.router
    )
    app.include_router(
        assignments_api.router
    )

    @app.get("/health")
    def health():
        return {"success": True, "status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "student_dashboard.backend.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        reload=os.getenv("RELOAD", "false").lower() == "true",
    )
