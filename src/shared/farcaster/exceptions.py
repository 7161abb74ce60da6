"""
Farcaster sign-in related exceptions.
"""


class FarcasterException(Exception):
    """Base exception for Farcaster sign-in errors."""

    pass


class SignInMessageError(FarcasterException):
    """Raised when a sign-in message cannot be parsed."""

    pass


class FarcasterRpcException(FarcasterException):
    """Raised when the chain RPC endpoint cannot answer a registry lookup."""

    pass
