"""Workflow catalog configuration — loaded from environment / .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="WORKFLOW_CATALOG_", extra="ignore"
    )

    env: str = "production"
    database_url: str = "sqlite+aiosqlite:///./workflow_templates.db"
    database_timeout: float = 30.0  # seconds to wait on a locked SQLite file

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Write-path attribution: every template resolves to this user unless
    # trust_payload_username is on, in which case workflow.user.username wins.
    default_username: str = "Default API User"
    trust_payload_username: bool = False

    # Search pagination
    default_page_size: int = 20
    max_page_size: int = 100


settings = Settings()
