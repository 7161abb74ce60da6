"""
Farcaster verification settings and contract constants.
"""

from dataclasses import dataclass

from src.core.settings import Settings, settings

# Farcaster registries deployed on OP Mainnet
ID_REGISTRY_ADDRESS = "0x00000000Fc6c5F01Fc30151999387Bb99A9f489b"
KEY_REGISTRY_ADDRESS = "0x00000000Fc1237824fb747aBDE0FF18990E59b7e"

OPTIMISM_CHAIN_ID = 10
SIGN_IN_STATEMENT = "Farcaster Auth"


@dataclass
class FarcasterConfig:
    """Configuration for verifying Sign In With Farcaster messages."""

    rpc_url: str = "https://mainnet.optimism.io"
    rpc_timeout: float = 10.0
    id_registry_address: str = ID_REGISTRY_ADDRESS
    key_registry_address: str = KEY_REGISTRY_ADDRESS
    chain_id: int = OPTIMISM_CHAIN_ID
    statement: str = SIGN_IN_STATEMENT

    @classmethod
    def from_settings(cls, app_settings: Settings | None = None) -> "FarcasterConfig":
        """Create FarcasterConfig from application settings."""
        source = app_settings or settings
        return cls(
            rpc_url=source.FARCASTER_RPC_URL,
            rpc_timeout=source.FARCASTER_RPC_TIMEOUT,
        )
