from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./careers.db"

    # Email
    email_mode: str = "dev"  # dev | prod

    # Auth
    secret_key: str = "dev-secret-key"
    magic_link_ttl_minutes: int = 30
    access_token_ttl_hours: int = 24 * 7

    # Frontend (admin console) used to build magic links
    frontend_url: str = "http://localhost:3000"

    # Comma-separated extra CORS origins
    allowed_origins: str = ""

    # Outbound ATS feeds (Greenhouse / Ashby)
    ats_timeout_seconds: int = 15

    # App
    debug: bool = False
    log_level: str = "INFO"

    def get_frontend_url(self) -> str:
        return self.frontend_url.rstrip("/")


settings = Settings()
