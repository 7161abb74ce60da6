"""
Sign In With Farcaster verification against the on-chain registries.
"""

import logging
from datetime import datetime, timezone

import httpx
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import function_signature_to_4byte_selector, to_bytes, to_hex

from .config import FarcasterConfig
from .exceptions import FarcasterRpcException, SignInMessageError
from .message import SiweMessage
from .types import SignInVerification, VerificationRequest

logger = logging.getLogger(__name__)

KEY_STATE_ADDED = 1
AUTH_ADDRESS_KEY_TYPE = 2

CUSTODY_OF_SELECTOR = function_signature_to_4byte_selector("custodyOf(uint256)")
KEY_DATA_OF_SELECTOR = function_signature_to_4byte_selector("keyDataOf(uint256,bytes)")


def recover_signer(message: str, signature: str) -> str | None:
    """Recover the EIP-191 signer of a text message, or None if unrecoverable."""
    try:
        return Account.recover_message(
            encode_defunct(text=message), signature=signature
        )
    except Exception as e:
        logger.debug(f"Could not recover sign-in signer: {e}")
        return None


class FarcasterSignInVerifier:
    """
    Verifies Sign In With Farcaster messages.

    The message must be bound to the requested domain and nonce and signed
    by the fid's custody address, or by one of its registered auth addresses
    when those are accepted. Registry lookups go through JSON-RPC eth_call.
    """

    def __init__(
        self,
        config: FarcasterConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or FarcasterConfig.from_settings()
        self._transport = transport

    async def verify(
        self, request: VerificationRequest, accept_auth_address: bool = False
    ) -> SignInVerification:
        """
        Verify a signed sign-in message.

        Args:
            request: Message, signature, nonce and expected domain
            accept_auth_address: Also accept signers registered as auth addresses

        Returns:
            SignInVerification with fid and address on success

        Raises:
            FarcasterRpcException: If the registry lookup fails
        """
        try:
            message = SiweMessage.parse(request.message)
        except SignInMessageError as e:
            return SignInVerification.failure(f"Invalid sign-in message: {e}")

        problem = self._check_message(message, request)
        if problem:
            return SignInVerification.failure(problem)

        signer = recover_signer(request.message, request.signature)
        if signer is None or signer.lower() != message.address.lower():
            return SignInVerification.failure("Signature does not match address")

        fid = message.fid
        if fid is None:
            return SignInVerification.failure("Message has no fid resource")

        custody_address = await self.get_custody_address(fid)
        if custody_address.lower() == signer.lower():
            return SignInVerification(success=True, fid=fid, address=message.address)

        if accept_auth_address and await self.is_auth_address(fid, signer):
            return SignInVerification(success=True, fid=fid, address=message.address)

        return SignInVerification.failure(f"Signer is not authorized for fid {fid}")

    def _check_message(
        self, message: SiweMessage, request: VerificationRequest
    ) -> str | None:
        now = datetime.now(timezone.utc)

        if message.domain != request.domain:
            return f"Domain mismatch: expected {request.domain}"
        if message.nonce != request.nonce:
            return "Nonce mismatch"
        if message.statement != self.config.statement:
            return "Unexpected statement"
        if message.chain_id != self.config.chain_id:
            return f"Unexpected chain id {message.chain_id}"
        if message.expiration_time and message.expiration_time < now:
            return "Sign-in message expired"
        if message.not_before and message.not_before > now:
            return "Sign-in message not yet valid"
        return None

    async def get_custody_address(self, fid: int) -> str:
        """Custody address of a fid in the IdRegistry."""
        data = CUSTODY_OF_SELECTOR + encode(["uint256"], [fid])
        result = await self._eth_call(self.config.id_registry_address, data)
        try:
            (address,) = decode(["address"], result)
        except DecodingError as e:
            raise FarcasterRpcException(f"Invalid custodyOf response: {e}")
        return address

    async def is_auth_address(self, fid: int, address: str) -> bool:
        """Whether an address is an active auth address key of a fid."""
        data = KEY_DATA_OF_SELECTOR + encode(
            ["uint256", "bytes"], [fid, to_bytes(hexstr=address)]
        )
        result = await self._eth_call(self.config.key_registry_address, data)
        try:
            state, key_type = decode(["uint8", "uint32"], result)
        except DecodingError as e:
            raise FarcasterRpcException(f"Invalid keyDataOf response: {e}")
        return state == KEY_STATE_ADDED and key_type == AUTH_ADDRESS_KEY_TYPE

    async def _eth_call(self, to: str, data: bytes) -> bytes:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "eth_call",
            "params": [{"to": to, "data": to_hex(data)}, "latest"],
        }

        async with httpx.AsyncClient(
            transport=self._transport, timeout=self.config.rpc_timeout
        ) as client:
            try:
                response = await client.post(self.config.rpc_url, json=payload)
                response.raise_for_status()
                body = response.json()
            except httpx.HTTPStatusError as e:
                raise FarcasterRpcException(
                    f"RPC request failed with status {e.response.status_code}"
                )
            except httpx.RequestError as e:
                raise FarcasterRpcException(f"RPC request failed: {e}")
            except ValueError:
                raise FarcasterRpcException("RPC returned invalid JSON")

        if not isinstance(body, dict) or "error" in body:
            error = body.get("error") if isinstance(body, dict) else body
            raise FarcasterRpcException(f"RPC error: {error}")

        result = body.get("result")
        if not isinstance(result, str):
            raise FarcasterRpcException("RPC response has no result")
        return to_bytes(hexstr=result)
