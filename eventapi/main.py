import logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from eventapi import containers
from eventapi.config import settings
from eventapi.core.exception_handlers import (
    handle_base_api_exception,
    handle_http_exception,
    handle_unexpected_error,
    handle_validation_error,
)
from eventapi.core.exceptions import BaseAPIException
from eventapi.core.logging_middleware import LoggingMiddleware
from eventapi.logging_config import setup_logging
from eventapi.routers import (
    event_router,
    health_router,
    participation_router,
    reward_history_router,
)

load_dotenv("eventapi/.env")
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)
    app.container = containers.Container()  # type: ignore

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BaseAPIException, handle_base_api_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(health_router.router)
    app.include_router(health_router.router, prefix=settings.API_V1_STR)
    app.include_router(event_router.router, prefix=settings.API_V1_STR)
    app.include_router(participation_router.router, prefix=settings.API_V1_STR)
    app.include_router(reward_history_router.router, prefix=settings.API_V1_STR)
    return app


app = create_app()

handler = Mangum(app)
