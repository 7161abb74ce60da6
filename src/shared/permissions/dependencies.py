import re
from typing import Awaitable, Callable

from fastapi import Header, Request

from src.domains.auth.dependencies import authenticate_bearer
from src.domains.auth.models import Identity
from src.shared.exceptions import AccessDeniedError, InvalidDataError

from .services import can_access_account

FID_PATTERN = re.compile(r"[0-9]+")


def parse_fid(fid: str) -> int:
    """Account id from a path parameter, or 400 if it is not an integer."""
    if not FID_PATTERN.fullmatch(fid):
        raise InvalidDataError("Invalid FID")
    return int(fid)


def require_account_access() -> Callable[..., Awaitable[Identity]]:
    """
    Dependency factory for identity-scoped resources.

    Creates a dependency that checks, in order, that the `fid` path parameter
    is an integer (400), that a valid session token is presented (401), and
    that the token belongs to that account (403).

    Returns:
        Async dependency function that returns the caller's Identity
    """

    async def check_account_access(
        fid: str,
        request: Request,
        authorization: str | None = Header(None),
    ) -> Identity:
        """
        Validate the caller owns the requested account.

        Args:
            fid: Account id from path parameter
            request: Incoming request, used to reach the token service
            authorization: Authorization header value

        Returns:
            Identity of the caller

        Raises:
            HTTPException: 400, 401 or 403 as described above
        """
        requested_fid = parse_fid(fid)
        identity = authenticate_bearer(request, authorization)

        if not can_access_account(identity, requested_fid):
            raise AccessDeniedError()

        return identity

    return check_account_access
