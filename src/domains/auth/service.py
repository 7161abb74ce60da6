import logging

from src.shared.exceptions import SignInFailedError
from src.shared.farcaster import SignInVerifier, VerificationRequest

from .models import Identity, SessionResponse, SessionUser
from .tokens import SessionTokenService

logger = logging.getLogger(__name__)


class SignInService:
    """Service turning a verified sign-in message into a session token"""

    def __init__(
        self,
        verifier: SignInVerifier,
        tokens: SessionTokenService,
        accept_auth_address: bool = True,
    ):
        self.verifier = verifier
        self.tokens = tokens
        self.accept_auth_address = accept_auth_address

    async def sign_in(self, request: VerificationRequest) -> SessionResponse:
        """
        Verify a sign-in message and issue a session token for its signer

        Args:
            request: Message, signature and nonce bound to the resolved domain

        Returns:
            SessionResponse with the token and the signed-in user

        Raises:
            SignInFailedError: If verification fails for any reason. The cause
                is only logged, the client always gets the same response.
        """
        try:
            result = await self.verifier.verify(
                request, accept_auth_address=self.accept_auth_address
            )
        except Exception as e:
            logger.error(f"SIWF verification error: {e}", exc_info=True)
            raise SignInFailedError()

        if not result.success:
            logger.warning(f"SIWF verification failed: {result.error}")
            raise SignInFailedError()

        if result.fid is None:
            logger.warning("SIWF verification succeeded but returned no fid")
            raise SignInFailedError()

        if not result.address:
            logger.warning(
                f"SIWF verification for fid {result.fid} returned no address"
            )
            raise SignInFailedError()

        identity = Identity(fid=result.fid, address=result.address)
        token = self.tokens.issue(identity)
        logger.info(f"Issued session token for fid {identity.fid}")

        # The response echoes the address exactly as the verifier returned it
        return SessionResponse(
            token=token,
            user=SessionUser(fid=result.fid, address=result.address),
        )
