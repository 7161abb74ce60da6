import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Only ever used outside production; see Settings.get_session_secret
DEFAULT_DEVELOPMENT_SECRET = "streme-auth-secret-change-in-production"


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start with the current configuration."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Session credential signing
    JWT_SECRET: str | None = None
    NEXTAUTH_SECRET: str | None = None

    # Sign-in domain binding
    PRODUCTION_DOMAIN: str = "streme.fun"
    DEFAULT_DOMAIN: str = "localhost:3000"

    # Farcaster sign-in verification
    FARCASTER_RPC_URL: str = "https://mainnet.optimism.io"
    FARCASTER_RPC_TIMEOUT: float = 10.0
    ACCEPT_AUTH_ADDRESS: bool = True

    # Upstream check-in API
    CHECKIN_API_URL: str = "https://api.streme.fun/api/checkin"
    CHECKIN_API_TIMEOUT: float = 15.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    def get_session_secret(self) -> str:
        """
        Resolve the secret used to sign session tokens.

        JWT_SECRET wins over NEXTAUTH_SECRET. Without either, development
        falls back to a well-known default and production refuses to start.

        Raises:
            ConfigurationError: If running in production without a secret
        """
        secret = self.JWT_SECRET or self.NEXTAUTH_SECRET
        if secret:
            return secret

        if self.is_production:
            raise ConfigurationError(
                "JWT_SECRET (or NEXTAUTH_SECRET) must be set in production"
            )

        logger.warning(
            "No JWT_SECRET configured; using the development default secret. "
            "Tokens issued by this process are forgeable."
        )
        return DEFAULT_DEVELOPMENT_SECRET


settings = Settings()
