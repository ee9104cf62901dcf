"""
Main application entry point for the gateway API.

create_app() registers the services and then assembles the HTTP pipeline.
Starlette runs the middleware added last first, so the pipeline is added
innermost to outermost.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from starlette.staticfiles import StaticFiles

from api import docs, jobs_dashboard
from api.v1.endpoints.health import service_status
from api.v1.router import api_router
from core.config import Settings, settings
from core.logging_config import configure_logging
from core.versioning import DEFAULT_API_VERSION, SUPPORTED_API_VERSIONS, API_PREFIX, ApiVersionMiddleware
from db.database import DatabaseManager
from middlewares.authentication import JwtAuthBackend
from middlewares.error_handler import ErrorHandlerMiddleware
from middlewares.request_size import RequestSizeLimitMiddleware
from middlewares.static_files import ProtectedFilesMiddleware
from services.job_service import JobService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await app.state.db_manager.init_db()
    logger.info(f"{app.title} started ({app.state.settings.environment})")
    yield
    await app.state.db_manager.close()


def configure_services(app_settings: Settings) -> FastAPI:
    """Register everything the pipeline relies on and build the application."""
    swagger = app_settings.swagger
    openapi_url = None
    if swagger.enabled:
        openapi_url = f"{swagger.path}/{DEFAULT_API_VERSION.group_name}/swagger.json"

    app = FastAPI(
        title=app_settings.app_name,
        description=swagger.description,
        version=app_settings.version,
        debug=app_settings.is_development,
        openapi_url=openapi_url,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    # Job server: memory storage and in-process execution in development,
    # database storage and external workers otherwise
    app.state.job_service = JobService.from_settings(app_settings)
    app.state.db_manager = DatabaseManager.from_settings(app_settings)

    # Controllers, one router per supported version plus the default version
    # when the request does not name one
    for version in SUPPORTED_API_VERSIONS:
        app.include_router(api_router, prefix=version.url_prefix)
    app.include_router(api_router, prefix=API_PREFIX, include_in_schema=False)

    # Job dashboard
    app.include_router(jobs_dashboard.router, prefix=app_settings.jobs.dashboard_path)

    @app.get("/", response_model=dict, include_in_schema=False)
    async def root():
        return service_status(app_settings)

    if swagger.enabled:
        docs.register_swagger_ui(app, swagger)

    return app


def configure_pipeline(app: FastAPI, app_settings: Settings) -> None:
    """
    Request flow, outermost first:
    CORS, error handler, HTTPS redirection, body size limit, versioning,
    authentication, files authorization, endpoints and static files.
    """
    app.add_middleware(ProtectedFilesMiddleware, path_prefix=app_settings.files_path)
    app.add_middleware(AuthenticationMiddleware, backend=JwtAuthBackend(app_settings.jwt))
    app.add_middleware(ApiVersionMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware, max_body_size=app_settings.max_request_body_size)
    if app_settings.https_redirection:
        app.add_middleware(HTTPSRedirectMiddleware)
    app.add_middleware(ErrorHandlerMiddleware, show_details=app_settings.is_development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors.allowed_origins,
        allow_credentials=app_settings.cors.allow_credentials,
        allow_methods=app_settings.cors.allowed_methods,
        allow_headers=app_settings.cors.allowed_headers,
    )

    # Static files come after every route so they never shadow an endpoint
    app_settings.files_root.mkdir(parents=True, exist_ok=True)
    app.mount("/", StaticFiles(directory=app_settings.web_root_path), name="static")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings
    configure_logging(app_settings.log_level)

    app = configure_services(app_settings)
    configure_pipeline(app, app_settings)
    logger.info(
        f"Configured {app_settings.app_name} for {app_settings.environment} "
        f"(CORS policy {app_settings.cors.policy_name})"
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
