# src/domains/auth/models.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Identity(BaseModel):
    """A verified Farcaster account and the address it signed in with."""

    model_config = ConfigDict(frozen=True)

    fid: int
    address: str

    @field_validator("address")
    @classmethod
    def lowercase_address(cls, value: str) -> str:
        return value.lower()


class SignInRequest(BaseModel):
    """Body of POST /auth/verify-siwf. Presence is checked by the route."""

    message: Optional[str] = None
    signature: Optional[str] = None
    nonce: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.message and self.signature and self.nonce)


class SessionUser(BaseModel):
    fid: int
    address: str


class SessionResponse(BaseModel):
    token: str
    user: SessionUser
