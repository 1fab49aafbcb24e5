"""Application configuration via environment variables."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "RNRSVP"
    debug: bool = False
    log_dir: Path = Path.home() / ".logs" / "rnrsvp"

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 3000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all
    admin_path: str = "/admin"

    # Database
    database_url: str = "sqlite:///./rnrsvp.db"
    db_connect_attempts: int = 10
    db_connect_delay_seconds: float = 2.0

    # Outbound webhooks (empty disables the notification)
    invite_webhook_url: str = ""
    contact_webhook_url: str = ""
    quarterly_webhook_url: str = ""

    # Calendar export
    event_title: str = "CTO Lunch"
    ical_filename_prefix: str = "cto-lunch"


settings = Settings()
