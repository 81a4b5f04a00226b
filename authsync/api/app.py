import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from authsync.app.services.reset_token_sweeper import ResetTokenSweeper
from authsync.domain.entities import ErrorKind
from .error import ClientError, ServerError
from .middleware import RateLimitMiddleware, RequestLoggingMiddleware, SecurityHeadersMiddleware
from .utils.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"error": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error on {request.url.path}: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content=error_dict)


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"error": exc.base_error.code, "message": exc.base_error.message}
    if request.app.state.expose_error_details and exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    logger.error(f"Server error on {request.url.path}: {exc.base_error.message} ({exc.base_error.details})")
    return JSONResponse(status_code=exc.status_code, content=error_dict)


def _describe_validation_error(err: dict) -> str:
    field = ".".join(str(part) for part in err["loc"] if part != "body")
    return f"{field}: {err['msg']}" if field else err["msg"]


async def handle_validation_error(request: Request, exc: RequestValidationError):
    problems = "; ".join(_describe_validation_error(err) for err in exc.errors())
    logger.warning(f"Invalid request body on {request.url.path}: {problems}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": ErrorKind.bad_request.value, "message": problems or "Invalid request"},
    )


HTTP_ERROR_KINDS = {
    status.HTTP_400_BAD_REQUEST: ErrorKind.bad_request,
    status.HTTP_401_UNAUTHORIZED: ErrorKind.unauthorized,
    status.HTTP_403_FORBIDDEN: ErrorKind.forbidden,
    status.HTTP_404_NOT_FOUND: ErrorKind.not_found,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorKind.method_not_allowed,
    status.HTTP_429_TOO_MANY_REQUESTS: ErrorKind.too_many_requests,
}


def _error_kind_for_status(status_code: int) -> ErrorKind:
    if status_code in HTTP_ERROR_KINDS:
        return HTTP_ERROR_KINDS[status_code]
    return ErrorKind.bad_request if status_code < 500 else ErrorKind.internal


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Endpoint not found"
    else:
        message = str(exc.detail)
    content = {"error": _error_kind_for_status(exc.status_code).value, "message": message}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": ErrorKind.internal.value, "message": "Something went wrong!"},
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from authsync.depends import engine, get_reset_token_repository

        if ApplicationConfig.TOKEN_STORE_BACKEND == "sql":
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        sweeper = ResetTokenSweeper(
            get_reset_token_repository(),
            interval_seconds=ApplicationConfig.RESET_TOKEN_SWEEP_INTERVAL_SECONDS,
        )
        sweeper.start()
        app.state.reset_token_sweeper = sweeper
        logger.info(f"{ApplicationConfig.SERVICE_NAME} started ({ApplicationConfig.ENVIRONMENT})")
        try:
            yield
        finally:
            await sweeper.stop()
            logger.info("Shutting down gracefully")

    app = FastAPI(title=ApplicationConfig.SERVICE_NAME, version="1.0.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.expose_error_details = ApplicationConfig.ENVIRONMENT != "production"
    app.state.trust_proxy_headers = ApplicationConfig.TRUST_PROXY_HEADERS
    app.state.password_reset_limiter = SlidingWindowRateLimiter(
        max_requests=ApplicationConfig.PASSWORD_RESET_RATE_LIMIT_MAX,
        window_seconds=ApplicationConfig.RATE_LIMIT_WINDOW_SECONDS,
    )
    app.state.api_limiter = SlidingWindowRateLimiter(
        max_requests=ApplicationConfig.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=ApplicationConfig.RATE_LIMIT_WINDOW_SECONDS,
    )

    # Last added runs first: logging wraps everything, then CORS, headers, limits
    app.add_middleware(
        RateLimitMiddleware,
        limiter=app.state.api_limiter,
        path_prefix=ApplicationConfig.API_PREFIX,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    from authsync.api.routes import accounts, health_check, password_reset

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(password_reset.router, prefix=ApplicationConfig.API_PREFIX, tags=["Password Reset"])
    app.include_router(accounts.router, prefix=ApplicationConfig.API_PREFIX, tags=["Accounts"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
