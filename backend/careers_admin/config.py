from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class AdminSettings(BaseSettings):
    """Admin client settings loaded from CAREERS_ADMIN_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="CAREERS_ADMIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    api_url: str = "http://localhost:8000"

    # Where the access token is persisted between runs
    token_path: Path = Path.home() / ".careers_admin" / "token.json"

    # Pages
    dashboard_refresh_seconds: float = 300
    success_message_seconds: float = 3

    def get_api_url(self) -> str:
        return self.api_url.rstrip("/")


settings = AdminSettings()
