"""Auth domain type definitions for type safety."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionTokenHeader(BaseModel):
    """Fixed JOSE header of a session token."""

    alg: Literal["HS256"] = "HS256"
    typ: Literal["JWT"] = "JWT"


class SessionTokenPayload(BaseModel):
    """
    Session token payload, version 1.

    Unknown claims are rejected so an extra field can never change how a
    token is interpreted.
    """

    fid: int = Field(..., description="Farcaster account id")
    address: str = Field(..., description="Lowercase signer address")
    iat: Optional[int] = Field(None, description="Issued at (unix seconds)")
    exp: Optional[int] = Field(None, description="Expires at (unix seconds)")

    model_config = ConfigDict(extra="forbid", strict=True)
