"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Webhook authentication (FASTSPRING_HMAC_SECRET); empty disables verification
    hmac_secret: str = ""

    # FastSpring API credentials
    username: str = ""
    password: str = ""
    api_base_url: str = "https://api.fastspring.com"
    api_timeout: float = 10.0

    # Raw webhook bodies are written here for debugging; empty disables it
    payload_audit_dir: str = "storage/payloads"

    # Database holding the billable owners
    database_url: str = "sqlite+aiosqlite:///cashier_fastspring.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    json_logs: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "FASTSPRING_",
    }

    @property
    def verification_enabled(self) -> bool:
        """Return True when incoming webhooks must carry a valid signature."""
        return bool(self.hmac_secret)


settings = Settings()
