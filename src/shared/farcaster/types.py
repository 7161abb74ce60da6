"""Type definitions for Farcaster sign-in verification."""

from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict


class VerificationRequest(BaseModel):
    """A sign-in attempt, bound to the domain resolved for the request."""

    model_config = ConfigDict(frozen=True)

    message: str
    signature: str
    nonce: str
    domain: str


class SignInVerification(BaseModel):
    """Outcome of verifying a sign-in message."""

    success: bool
    fid: Optional[int] = None
    address: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "SignInVerification":
        return cls(success=False, error=error)


class SignInVerifier(Protocol):
    """Anything able to confirm a signed sign-in message."""

    async def verify(
        self, request: VerificationRequest, accept_auth_address: bool = False
    ) -> SignInVerification: ...
