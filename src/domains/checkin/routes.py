# src/domains/checkin/routes.py
from fastapi import APIRouter, Depends, Header

from src.core.settings import Settings
from src.domains.auth.dependencies import (
    extract_bearer_token,
    get_session_identity,
    get_settings,
)
from src.domains.auth.models import Identity
from src.shared.permissions import require_account_access

from .models import CheckinResult, CheckinStatus
from .service import CheckinService

router = APIRouter(prefix="/checkin", tags=["Checkin"])


def get_checkin_service(
    app_settings: Settings = Depends(get_settings),
) -> CheckinService:
    return CheckinService(
        app_settings.CHECKIN_API_URL, timeout=app_settings.CHECKIN_API_TIMEOUT
    )


@router.get("", response_model=CheckinStatus, operation_id="getOwnCheckinStatus")
async def get_own_checkin_status(
    identity: Identity = Depends(get_session_identity),
    authorization: str | None = Header(None),
    service: CheckinService = Depends(get_checkin_service),
) -> CheckinStatus:
    """Check-in status of the token holder, resolved upstream from the token."""
    token = extract_bearer_token(authorization) or ""
    return await service.get_own_status(token)


@router.get(
    "/{fid}",
    response_model=CheckinStatus,
    operation_id="getCheckinStatus",
)
async def get_checkin_status(
    identity: Identity = Depends(require_account_access()),
    service: CheckinService = Depends(get_checkin_service),
) -> CheckinStatus:
    """
    Check-in status of the caller's own account.

    Only reachable with a session token issued for the same fid.
    """
    return await service.get_status(identity.fid)


@router.post("", response_model=CheckinResult, operation_id="submitCheckin")
async def submit_checkin(
    identity: Identity = Depends(get_session_identity),
    authorization: str | None = Header(None),
    service: CheckinService = Depends(get_checkin_service),
) -> CheckinResult:
    # get_session_identity already rejected a missing or invalid token
    token = extract_bearer_token(authorization) or ""
    return await service.submit_checkin(token)
