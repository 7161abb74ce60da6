from src.domains.auth.models import Identity


def can_access_account(identity: Identity, requested_fid: int) -> bool:
    """
    Check if a signed-in identity may reach resources of an account.

    Args:
        identity: Identity taken from a verified session token
        requested_fid: Account id the resource belongs to

    Returns:
        True if the account is the caller's own, False otherwise
    """
    return identity.fid == requested_fid
