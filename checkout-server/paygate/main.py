from contextlib import asynccontextmanager

from fastapi import FastAPI

from paygate import __version__
from paygate.core.config import get_settings
from paygate.core.container import get_container
from paygate.core.logging import configure_logging
from paygate.infrastructure.database import dispose_engine, init_db
from paygate.interfaces.http import create_api_router

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    container = get_container()
    yield
    await container.aclose()
    get_container.cache_clear()
    await dispose_engine()


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.project_name,
        description="Hosted checkout payment intake and processor webhooks",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(create_api_router())

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
