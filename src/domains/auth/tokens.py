# src/domains/auth/tokens.py
import logging
import time

import jwt
from jwt.utils import base64url_decode, base64url_encode
from pydantic import ValidationError

from .models import Identity
from .types import SessionTokenHeader, SessionTokenPayload

logger = logging.getLogger(__name__)

SESSION_TOKEN_ALGORITHM = "HS256"
SESSION_TOKEN_TTL_SECONDS = 24 * 60 * 60


def _now_epoch() -> int:
    return int(time.time())


def _is_canonical_segment(segment: str) -> bool:
    # urlsafe_b64decode ignores stray characters and unused trailing bits,
    # so re-encode and require the exact same text back.
    return base64url_encode(base64url_decode(segment)).decode("ascii") == segment


class SessionTokenService:
    """
    Issues and verifies HS256 session tokens for signed-in Farcaster users.

    The secret is fixed at construction and never changes for the lifetime
    of the service. Tokens live for 24 hours and cannot be renewed; a client
    holding an expired token has to sign in again.
    """

    def __init__(
        self, secret: str, ttl_seconds: int = SESSION_TOKEN_TTL_SECONDS
    ) -> None:
        if not secret:
            raise ValueError("Session token secret cannot be empty")
        self._secret = secret
        self.ttl_seconds = ttl_seconds

    def issue(self, identity: Identity, now: int | None = None) -> str:
        """
        Mint a session token for a verified identity.

        Args:
            identity: Identity confirmed by the sign-in verifier
            now: Issue time in unix seconds, defaults to the current time

        Returns:
            Token in header.payload.signature form
        """
        issued_at = _now_epoch() if now is None else now
        payload = SessionTokenPayload(
            fid=identity.fid,
            address=identity.address.lower(),
            iat=issued_at,
            exp=issued_at + self.ttl_seconds,
        )
        return jwt.encode(
            payload.model_dump(),
            self._secret,
            algorithm=SESSION_TOKEN_ALGORITHM,
            headers=SessionTokenHeader().model_dump(),
        )

    def verify(self, token: str, now: int | None = None) -> Identity | None:
        """
        Check a session token and return the identity it carries.

        Fails closed: any malformed, tampered, or expired token yields None.
        This method never raises.

        Args:
            token: Token presented by the client
            now: Reference time in unix seconds, defaults to the current time

        Returns:
            The embedded Identity, or None if the token is not valid
        """
        if not isinstance(token, str) or token.count(".") != 2:
            return None

        signature_segment = token.rsplit(".", 1)[1]
        try:
            if not _is_canonical_segment(signature_segment):
                return None
            SessionTokenHeader.model_validate(jwt.get_unverified_header(token))
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[SESSION_TOKEN_ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
            payload = SessionTokenPayload.model_validate(claims)
        except (jwt.PyJWTError, ValidationError, ValueError, TypeError) as e:
            logger.debug(f"Rejected session token: {type(e).__name__}")
            return None

        current = _now_epoch() if now is None else now
        if payload.exp is not None and payload.exp < current:
            logger.debug(f"Rejected expired session token for fid {payload.fid}")
            return None

        return Identity(fid=payload.fid, address=payload.address)
