from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from neocoffee import __version__
from neocoffee.shared.config.database import Database
from neocoffee.shared.config.settings import Settings
from neocoffee.shared.errors import register_exception_handlers
from neocoffee.shared.observability import setup_observability
from neocoffee.shared.security import configure_rate_limits, limiter

# Importing the routers also registers every model with Base
from neocoffee.services.auth_service.router import router as auth_router
from neocoffee.services.auth_service.service import AuthService
from neocoffee.services.order_service.router import public_router as order_public_router
from neocoffee.services.order_service.router import router as order_router
from neocoffee.services.product_service.router import public_router as product_public_router
from neocoffee.services.product_service.router import router as product_router
from neocoffee.services.product_service.service import ProductService

logger = structlog.get_logger(__name__)

API_PREFIX = "/api"


async def bootstrap(database: Database, settings: Settings) -> None:
    await database.create_all()
    async with database.sessionmaker() as db:
        if settings.admin_username and settings.admin_password:
            await AuthService.ensure_admin(db, settings.admin_username, settings.admin_password)
        else:
            logger.warning("admin_bootstrap_skipped", reason="ADMIN_USERNAME/ADMIN_PASSWORD not set")

        if settings.seed_catalog:
            await ProductService.seed_catalog(db)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.database_url, echo=settings.database_echo)
        app.state.database = database
        try:
            await bootstrap(database, settings)
            logger.info("startup_complete", database_url=database.engine.url.render_as_string())
            yield
        finally:
            # Flush and close every pooled connection before the process exits
            await database.dispose()
            logger.info("database_closed")

    app = FastAPI(
        title="NeoCoffee Webshop",
        version=__version__,
        description="Coffee catalog, checkout and admin order management.",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # --- OBSERVABILITY BOOTSTRAP ---
    setup_observability(
        app,
        "neocoffee",
        otlp_endpoint=settings.otlp_endpoint,
        metrics_enabled=settings.metrics_enabled,
    )

    # --- SECURITY SETUP ---
    configure_rate_limits(settings.rate_limit_enabled, settings.login_rate_limit)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )

    @app.get(f"{API_PREFIX}/health", include_in_schema=False)
    async def health_check():
        return {"service": "neocoffee", "status": "running"}

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(product_public_router, prefix=API_PREFIX)
    app.include_router(product_router, prefix=API_PREFIX)
    app.include_router(order_public_router, prefix=API_PREFIX)
    app.include_router(order_router, prefix=API_PREFIX)
    return app


def run() -> None:
    settings = Settings.from_env()
    uvicorn.run("neocoffee.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
