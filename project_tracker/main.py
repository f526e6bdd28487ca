import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from project_tracker.api.api import api_router
from project_tracker.core.config import Settings, get_settings
from project_tracker.core.context import AppContext
from project_tracker.core.exceptions import TrackerError
from project_tracker.core.logging_config import setup_logging
from project_tracker.services import uploads

logger = logging.getLogger(__name__)


async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": str(exc)})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and its context (engine, tables, upload directory)."""
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    context = AppContext.build(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json"
    )
    app.state.context = context

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TrackerError, tracker_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    # Uploaded files are served back by their stored path
    app.mount(f"/{uploads.MOUNT_PREFIX}", StaticFiles(directory=context.upload_dir), name="uploads")

    @app.get("/", include_in_schema=False)
    def read_root():
        return {"message": "API is running..."}

    logger.info("%s %s ready (database: %s)", settings.PROJECT_NAME, settings.VERSION,
                context.engine.url.render_as_string(hide_password=True))
    return app


app = create_app()
