"""FastAPI application for the recruitment intake endpoint."""

import asyncio

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from belmont_recruitment.api.models import ApiResponse
from belmont_recruitment.api.routes import all_routers
from belmont_recruitment.config import Settings
from belmont_recruitment.core.errors import RecruitmentError
from belmont_recruitment.core.gateway import ChatGateway
from belmont_recruitment.core.intake import ApplicationIntake
from belmont_recruitment.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(settings: Settings, gateway: ChatGateway) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Belmont Recruitment API",
        description="Receives recruitment applications and posts them for staff review",
        version="1.0.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.intake = ApplicationIntake(
        gateway=gateway,
        shared_secret=settings.shared_secret,
        organization=settings.organization_name,
    )

    setup_middleware(app, settings)
    setup_exception_handlers(app)

    for router in all_routers:
        app.include_router(router)

    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(ok=False, error=message).model_dump(),
    )


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Setup application middleware.

    The last middleware added runs outermost, so CORS is registered after
    request logging and every response, errors included, carries its headers.
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = asyncio.get_running_loop().time()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_seconds=asyncio.get_running_loop().time() - start_time
            )
            return _error(500, "Erro interno.")

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            client_ip=request.client.host if request.client else None,
            duration_seconds=asyncio.get_running_loop().time() - start_time
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Setup global exception handlers."""

    @app.exception_handler(RecruitmentError)
    async def recruitment_error_handler(request: Request, exc: RecruitmentError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Submission refused",
            error_type=type(exc).__name__,
            status_code=exc.status_code,
            message=exc.message,
            path=request.url.path
        )
        return _error(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path
        )
        return _error(500, "Erro interno.")
