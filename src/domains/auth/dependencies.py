# src/domains/auth/dependencies.py
import logging

from fastapi import Header, Request

from src.core.settings import Settings
from src.core.settings import settings as default_settings
from src.shared.exceptions import AuthenticationRequiredError, InvalidTokenError
from src.shared.farcaster import (
    FarcasterConfig,
    FarcasterSignInVerifier,
    SignInVerifier,
)

from .models import Identity
from .tokens import SessionTokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return getattr(request.app.state, "settings", default_settings)


def get_session_tokens(request: Request) -> SessionTokenService:
    """Token service holding the secret resolved at startup."""
    return request.app.state.session_tokens


def get_sign_in_verifier(request: Request) -> SignInVerifier:
    """
    Sign-in verifier for this app.

    Uses the verifier injected at app creation. Without one, a single
    FarcasterSignInVerifier is built on first use and kept on app.state.
    """
    verifier = getattr(request.app.state, "sign_in_verifier", None)
    if verifier is None:
        config = FarcasterConfig.from_settings(get_settings(request))
        verifier = FarcasterSignInVerifier(config)
        request.app.state.sign_in_verifier = verifier
        logger.info(f"Initialized Farcaster sign-in verifier ({config.rpc_url})")
    return verifier


def extract_bearer_token(authorization: str | None) -> str | None:
    """Token part of a `Bearer <token>` header, or None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


def authenticate_bearer(request: Request, authorization: str | None) -> Identity:
    """
    Resolve the caller's identity from an Authorization header.

    Raises:
        AuthenticationRequiredError: If no bearer token is present
        InvalidTokenError: If the token is malformed, tampered or expired
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationRequiredError()

    identity = get_session_tokens(request).verify(token)
    if identity is None:
        raise InvalidTokenError()
    return identity


def get_session_identity(
    request: Request, authorization: str | None = Header(None)
) -> Identity:
    """
    Extracts and validates the session token from the Authorization header.
    Returns the signed-in Farcaster identity.
    """
    return authenticate_bearer(request, authorization)
