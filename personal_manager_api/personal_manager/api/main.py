from __future__ import annotations

import logging
from typing import Any, List, Optional
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from personal_manager.core.logging import configure_logging, correlation_id_var, role_var, user_id_var
from personal_manager.core.settings import AppSettings, get_app_settings
from personal_manager.db.seed import seed_all
from personal_manager.repositories import EntityNotFoundError, RepositoryFactory
from personal_manager.schemas.common import ApiResponse

# Routers
from personal_manager.api.routes.auth import router as auth_router
from personal_manager.api.routes.users import router as users_router
from personal_manager.api.routes.system import router as system_router
# Domain routers
from personal_manager.api.routes.portfolio import (
    contact_methods_router,
    educations_router,
    portfolios_router,
    profiles_router,
    skills_router,
    work_experiences_router,
)
from personal_manager.api.routes.planner import (
    calendar_events_router,
    todo_items_router,
    work_tasks_router,
)
from personal_manager.api.routes.content import blog_posts_router, guestbook_router

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Liveness probe."},
    {"name": "Auth", "description": "Registration, login and current user."},
    {"name": "Users", "description": "User administration endpoints (Admin role)."},
    {"name": "Profiles", "description": "Personal profile pages."},
    {"name": "Educations", "description": "Education history."},
    {"name": "Work Experiences", "description": "Employment history."},
    {"name": "Skills", "description": "Skills with level and category."},
    {"name": "Portfolios", "description": "Showcased projects."},
    {"name": "Contact Methods", "description": "Public contact channels."},
    {"name": "Calendar Events", "description": "Personal calendar."},
    {"name": "Todo Items", "description": "Personal to-do list."},
    {"name": "Work Tasks", "description": "Project task tracking."},
    {"name": "Blog Posts", "description": "Blog with slugs and view counts."},
    {"name": "Guestbook", "description": "Visitor messages with moderation."},
]


def _error_response(status_code: int, message: str, errors: Optional[List[str]] = None) -> JSONResponse:
    """Build the failure envelope."""
    body = ApiResponse[Any].fail(message, errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _format_validation_errors(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        messages.append(f"{field}: {err.get('msg', 'invalid value')}")
    return messages


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Global handler for HTTPException to produce the standard envelope.
        """
        detail = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
        response = _error_response(exc.status_code, detail)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Global handler for request validation errors; each error becomes "field: message".
        """
        return _error_response(422, "Validation failed", _format_validation_errors(exc))

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        return _error_response(404, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler to avoid leaking stack traces and to return a structured error.
        """
        logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
        return _error_response(500, "An unexpected error occurred")


# PUBLIC_INTERFACE
def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The settings and the repository factory live on app.state so dependencies
    (core.deps) share one repository per entity type for the app's lifetime.
    """
    settings = settings or get_app_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.repositories = RepositoryFactory(settings)

    # CORS - avoid wildcard with credentials
    cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
    if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
        logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
        cors_allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=cors_allow_credentials,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """
        Enrich request context with a correlation id for logging and echo it
        back as 'X-Correlation-ID' on every response.
        """
        corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
        token_corr = correlation_id_var.set(corr)
        token_user = user_id_var.set(None)
        token_role = role_var.set(None)
        request.state.correlation_id = corr

        logger.info("Incoming request %s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token_corr)
            user_id_var.reset(token_user)
            role_var.reset(token_role)

        response.headers["X-Correlation-ID"] = corr
        return response

    _register_exception_handlers(app)

    @app.on_event("startup")
    async def on_startup() -> None:
        """
        Prepare storage on service startup.

        Creates missing tables for the SQL backend and seeds an admin account
        when AUTO_SEED is on.
        """
        if settings.STORAGE_BACKEND == "sql" and settings.CREATE_TABLES_ON_STARTUP:
            from personal_manager.db.session import create_tables

            logger.info("Creating missing database tables")
            await create_tables()

        if settings.AUTO_SEED:
            logger.info("Running seeding...")
            await seed_all(app.state.repositories)
            logger.info("Seeding completed.")

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        if settings.STORAGE_BACKEND == "sql":
            from personal_manager.db.session import dispose_engine

            await dispose_engine()

    # Build API router and include sub-routers
    api = APIRouter(prefix="/api")
    for router in (
        system_router,
        auth_router,
        users_router,
        profiles_router,
        educations_router,
        work_experiences_router,
        skills_router,
        portfolios_router,
        contact_methods_router,
        calendar_events_router,
        todo_items_router,
        work_tasks_router,
        blog_posts_router,
        guestbook_router,
    ):
        api.include_router(router)
    app.include_router(api)
    return app


app = create_app()
