from contextlib import asynccontextmanager

from fastapi import FastAPI

from carecomm.application.use_cases.notifications import NotificationHub
from carecomm.config import get_settings
from carecomm.infrastructure.database import SessionLocal, engine, initialize_database
from carecomm.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and notification providers, release them on shutdown."""

    initialize_database()
    if getattr(app.state, "notification_hub", None) is None:
        app.state.notification_hub = NotificationHub.from_settings(
            SessionLocal, get_settings()
        )
    yield
    engine.dispose()


def create_app(hub: NotificationHub | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="carecomm", lifespan=lifespan)
    app.state.notification_hub = hub
    register_routes(app)
    return app


app = create_app()
