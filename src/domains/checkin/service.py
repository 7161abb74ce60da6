import logging

import httpx
from fastapi import status
from pydantic import ValidationError

from src.shared.exceptions import InternalServerError, UpstreamServiceError

from .models import CheckinResult, CheckinStatus

logger = logging.getLogger(__name__)

USER_AGENT = "Streme-Fun-App/1.0"


def _status_error_code(upstream_status: int) -> int:
    # Only server-side failures are passed through as-is
    if upstream_status >= 500:
        return upstream_status
    return status.HTTP_502_BAD_GATEWAY


class CheckinService:
    """Client for the upstream daily check-in API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def get_status(self, fid: int) -> CheckinStatus:
        """
        Fetch the check-in status of an account.

        Args:
            fid: Account id, already authorized for the caller

        Returns:
            CheckinStatus reported upstream

        Raises:
            UpstreamServiceError: If the check-in API answers with an error
            InternalServerError: If the check-in API cannot be reached
        """
        return await self._fetch_status(
            f"{self.base_url}/{fid}",
            {"Content-Type": "application/json"},
            f"FID {fid}",
        )

    async def get_own_status(self, token: str) -> CheckinStatus:
        """
        Fetch the check-in status of the token holder.

        The upstream API resolves the account from the forwarded token.

        Raises:
            UpstreamServiceError: If the check-in API answers with an error
            InternalServerError: If the check-in API cannot be reached
        """
        return await self._fetch_status(
            self.base_url,
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            "the session holder",
        )

    async def _fetch_status(
        self, url: str, headers: dict[str, str], subject: str
    ) -> CheckinStatus:
        async with httpx.AsyncClient(
            transport=self._transport, timeout=self.timeout
        ) as client:
            try:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
                return CheckinStatus.model_validate(response.json())
            except httpx.HTTPStatusError as e:
                logger.error(
                    f"Checkin status API error for {subject}: "
                    f"{e.response.status_code} {e.response.text}"
                )
                raise UpstreamServiceError(
                    "Failed to fetch checkin status",
                    _status_error_code(e.response.status_code),
                )
            except httpx.RequestError as e:
                logger.error(f"Checkin status request failed for {subject}: {e}")
                raise InternalServerError()
            except (ValidationError, ValueError) as e:
                logger.error(f"Invalid checkin status payload for {subject}: {e}")
                raise UpstreamServiceError("Failed to fetch checkin status")

    async def submit_checkin(self, token: str) -> CheckinResult:
        """
        Perform today's check-in on behalf of the token holder.

        Args:
            token: Session token of the caller, forwarded upstream

        Returns:
            CheckinResult reported upstream

        Raises:
            UpstreamServiceError: If the check-in API rejects the check-in
            InternalServerError: If the check-in API cannot be reached
        """
        async with httpx.AsyncClient(
            transport=self._transport, timeout=self.timeout
        ) as client:
            try:
                response = await client.post(
                    self.base_url,
                    headers={
                        "Authorization": f"Bearer {token}",
                        "Content-Type": "application/json",
                        "User-Agent": USER_AGENT,
                    },
                )
                response.raise_for_status()
                return CheckinResult.model_validate(response.json())
            except httpx.HTTPStatusError as e:
                logger.error(
                    f"Checkin API rejected check-in: "
                    f"{e.response.status_code} {e.response.text}"
                )
                raise UpstreamServiceError("Check-in failed", e.response.status_code)
            except httpx.RequestError as e:
                logger.error(f"Checkin request failed: {e}")
                raise InternalServerError()
            except (ValidationError, ValueError) as e:
                logger.error(f"Invalid check-in payload: {e}")
                raise UpstreamServiceError("Check-in failed")
