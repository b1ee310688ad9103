"""Configuration module centralizing environment access.

Only the HTTP surface and the database wiring read settings; the command
core is handed a repository and never looks at the environment.
"""
import os
from typing import Optional


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings:
    def __init__(self) -> None:
        # Core
        inferred_testing = (
            os.getenv("PYTEST_CURRENT_TEST")
            or os.getenv("PYTEST_RUNNING") == "1"
            or os.getenv("ENVIRONMENT") == "testing"
            or os.getenv("TESTING") == "1"
        )
        self.environment: str = "testing" if inferred_testing else os.getenv("ENVIRONMENT", "development")
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "5010"))

        # Database
        # SQLite: sqlite:///./statusbot.sqlite3
        # Postgres: postgresql://<username>:<password>@<host>:<port>/<database>
        self.database_url: str = os.getenv("DATABASE_URL") or "sqlite:///./statusbot.sqlite3"
        self.skip_migrations: bool = _flag("SKIP_MIGRATIONS")

        # Slack
        self.slack_bot_token: Optional[str] = os.getenv("SLACK_BOT_TOKEN")
        self.slack_verification_token: Optional[str] = os.getenv("SLACK_VERIFICATION_TOKEN") or os.getenv("SLACK_APP_TOKEN")
        self.status_channel: Optional[str] = os.getenv("STATUS_CHANNEL") or None
        self.bot_name: str = os.getenv("BOT_NAME", "statusbot")

    def __repr__(self) -> str:
        return (f"Settings(environment={self.environment}, host={self.host}, port={self.port}, "
                f"backend={self.database_url.split('://')[0]})")


_SETTINGS_CACHE: Optional[Settings] = None


def get_settings(refresh: bool = False) -> Settings:
    """Return a (possibly cached) Settings instance.

    Pass refresh=True in tests after modifying environment variables to
    force re-evaluation.
    """
    global _SETTINGS_CACHE
    if refresh or _SETTINGS_CACHE is None:
        _SETTINGS_CACHE = Settings()
    return _SETTINGS_CACHE
