import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.settings import Settings, settings
from src.domains.auth.routes import router as auth_router
from src.domains.auth.tokens import SessionTokenService
from src.domains.checkin.routes import router as checkin_router
from src.shared.farcaster import SignInVerifier

logger = logging.getLogger(__name__)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    app_settings: Settings | None = None,
    sign_in_verifier: SignInVerifier | None = None,
) -> FastAPI:
    """
    Build the API.

    Args:
        app_settings: Settings to run with, defaults to the environment
        sign_in_verifier: Verifier for sign-in messages. When omitted the
            Farcaster verifier is created on the first sign-in request.

    Raises:
        ConfigurationError: If production runs without a session secret
    """
    app_settings = app_settings or settings
    logging.basicConfig(level=app_settings.LOG_LEVEL.upper())

    app = FastAPI(
        title="Streme Auth API",
        description="Sign In With Farcaster sessions for Streme",
        version="0.1.0",
    )

    # Resolved once; the secret never changes while the process runs
    app.state.settings = app_settings
    app.state.session_tokens = SessionTokenService(app_settings.get_session_secret())
    app.state.sign_in_verifier = sign_in_verifier

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(auth_router, prefix="/api")
    app.include_router(checkin_router, prefix="/api")

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"message": "Streme Auth API is running"}

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
