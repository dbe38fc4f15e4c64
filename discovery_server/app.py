"""
Style Discovery: FastAPI app factory.

Use: uvicorn discovery_server.app:app
Or:  from discovery_server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # LiteLLM is chatty at INFO
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    app = FastAPI(
        title="Style Discovery API",
        description="Binary-choice style quiz with preference scoring and convergence",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def _startup():
        config = get_config()
        configure_logging(config.log_level)
        ok, errors = config.validate()
        for error in errors:
            logger.warning("[startup] Config problem: %s", error)
        state = get_state()
        logger.info(
            "[startup] Style Discovery API ready (catalog=%s, valid_config=%s, analysis=%s)",
            config.catalog_dir,
            ok,
            state.analysis_provider.provider,
        )

    return app


app = create_app()
