"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boxforge.core.config import AppConfig
from boxforge.metadata.validator import validate_metadata_dir
from boxforge.metaboxes import load_plugins, register_builtin_renderers
from boxforge.metaboxes.service import MetaBoxService
from boxforge.screens.endpoints import create_screens_router
from boxforge.screens.loader import ScreenConfigLoader

logger = logging.getLogger(__name__)

# Global instances (initialized on startup)
config: AppConfig | None = None
screen_loader: ScreenConfigLoader | None = None
meta_box_service: MetaBoxService | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize on startup, cleanup on shutdown."""
    global config, screen_loader, meta_box_service

    config = AppConfig.from_env()
    logging.getLogger("boxforge").setLevel(config.log_level.upper())

    register_builtin_renderers()
    load_plugins(config.plugins)

    # Validate metadata YAML files against JSON Schemas (warn on errors, don't block startup)
    schema_issues = validate_metadata_dir(config.metadata_path)
    if schema_issues:
        error_count = sum(1 for i in schema_issues if i.severity == "error")
        warn_count = sum(1 for i in schema_issues if i.severity == "warning")
        for issue in schema_issues:
            if issue.severity == "error":
                logger.error("Metadata schema error: %s", issue)
            else:
                logger.warning("Metadata schema warning: %s", issue)
        logger.warning(
            "Metadata validation: %d error(s), %d warning(s). "
            "Run 'boxforge metadata validate' for details.",
            error_count,
            warn_count,
        )

    screen_loader = ScreenConfigLoader(config.screens_path)
    screen_loader.load_all()
    meta_box_service = MetaBoxService(screen_loader)
    logger.info("Loaded %d screen(s) from %s", len(screen_loader.screens), config.screens_path)

    yield

    screen_loader = None
    meta_box_service = None


app = FastAPI(title="BoxForge API", lifespan=lifespan)

# Middleware can't be added once the app has started, so CORS reads its
# origins at import time
_cors_origins = AppConfig.from_env().cors_origins
if _cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(
    create_screens_router(
        get_screen_loader=lambda: screen_loader,
        get_meta_box_service=lambda: meta_box_service,
    )
)
