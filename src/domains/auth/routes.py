# src/domains/auth/routes.py
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from src.core.settings import Settings
from src.shared.exceptions import InternalServerError, InvalidDataError
from src.shared.farcaster import SignInVerifier, VerificationRequest

from .dependencies import (
    get_session_identity,
    get_session_tokens,
    get_settings,
    get_sign_in_verifier,
)
from .domain import resolve_sign_in_domain
from .models import Identity, SessionResponse, SessionUser, SignInRequest
from .service import SignInService
from .tokens import SessionTokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/verify-siwf",
    response_model=SessionResponse,
    operation_id="verifySignIn",
)
async def verify_sign_in(
    request: Request,
    verifier: SignInVerifier = Depends(get_sign_in_verifier),
    tokens: SessionTokenService = Depends(get_session_tokens),
    app_settings: Settings = Depends(get_settings),
) -> SessionResponse:
    """
    Exchange a signed Sign In With Farcaster message for a session token.

    The body is read by hand so a malformed JSON body maps to a 500 and a
    missing field to a 400, instead of FastAPI's generic 422.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.error("Sign-in request body is not valid JSON")
        raise InternalServerError()

    try:
        sign_in = SignInRequest.model_validate(body)
    except ValidationError:
        sign_in = None

    if sign_in is None or not sign_in.is_complete():
        raise InvalidDataError("Missing required fields: message, signature, and nonce")

    domain = resolve_sign_in_domain(
        app_settings.is_production,
        request.headers.get("host"),
        request.headers.get("origin"),
        production_domain=app_settings.PRODUCTION_DOMAIN,
        default_domain=app_settings.DEFAULT_DOMAIN,
    )
    logger.info(f"SIWF verification using domain: {domain}")

    service = SignInService(
        verifier, tokens, accept_auth_address=app_settings.ACCEPT_AUTH_ADDRESS
    )
    return await service.sign_in(
        VerificationRequest(
            message=sign_in.message,
            signature=sign_in.signature,
            nonce=sign_in.nonce,
            domain=domain,
        )
    )


@router.get("/session", response_model=SessionUser, operation_id="getSession")
async def get_session(
    identity: Identity = Depends(get_session_identity),
) -> SessionUser:
    return SessionUser(fid=identity.fid, address=identity.address)
