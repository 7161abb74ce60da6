"""
Farcaster sign-in verification.

Usage:
    from src.shared.farcaster import FarcasterSignInVerifier, VerificationRequest

    verifier = FarcasterSignInVerifier()
    result = await verifier.verify(
        VerificationRequest(
            message=message, signature=signature, nonce=nonce, domain=domain
        ),
        accept_auth_address=True,
    )
"""

from .client import FarcasterSignInVerifier
from .config import FarcasterConfig
from .exceptions import FarcasterException, FarcasterRpcException, SignInMessageError
from .message import SiweMessage
from .types import SignInVerification, SignInVerifier, VerificationRequest

__all__ = [
    "FarcasterConfig",
    "FarcasterException",
    "FarcasterRpcException",
    "FarcasterSignInVerifier",
    "SignInMessageError",
    "SignInVerification",
    "SignInVerifier",
    "SiweMessage",
    "VerificationRequest",
]
