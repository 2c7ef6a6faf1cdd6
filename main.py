"""Superpowers - agents assembled from reusable skills, scripts and tools."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from superpowers.api import require_basic_auth
from superpowers.api.routes import router
from superpowers.config import get_settings
from superpowers.db import close_db, init_db
from superpowers.dependencies import get_llm_provider, get_sandbox


def _setup_logging(debug: bool = False) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    _setup_logging(settings.debug)

    provider = get_llm_provider()
    sandbox = get_sandbox()

    logger.info("Starting %s v%s", settings.app_name, settings.app_version)

    await init_db()
    logger.info("Database initialized")
    logger.info("Environment: %s", settings.env)
    logger.info("LLM Provider: %s (%s)", provider.provider_name, provider.model_name)
    logger.info("Embeddings: %s", settings.embedding_provider)
    logger.info(
        "Script sandbox: %s processes, %gs budget", sandbox.start_method, sandbox.timeout
    )
    if settings.auth_enabled:
        logger.info("HTTP Basic authentication enabled")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Shutdown complete")


settings = get_settings()

allowed_origins = ["*"] if settings.is_development else []

app = FastAPI(
    title=settings.app_name,
    description="Agents assembled per turn from reusable skills, sandboxed scripts and tools",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(router, prefix="/api/v1", dependencies=[Depends(require_basic_auth)])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
