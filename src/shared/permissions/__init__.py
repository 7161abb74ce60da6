"""
Shared access control for identity-scoped resources.

A signed-in caller may only reach resources that belong to their own
Farcaster account.

Usage:
    from src.shared.permissions import require_account_access

    @router.get("/{fid}")
    async def get_resource(
        identity: Identity = Depends(require_account_access()),
    ):
        pass
"""

from .dependencies import parse_fid, require_account_access
from .services import can_access_account

__all__ = [
    "can_access_account",
    "parse_fid",
    "require_account_access",
]
