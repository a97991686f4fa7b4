"""
Application settings, loaded from environment variables (prefix ``LABBOOK_``)
or a local ``.env`` file.
"""
import os
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

_BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Settings(BaseSettings):
    """Runtime configuration for the lab notebook."""

    model_config = SettingsConfigDict(
        env_prefix="LABBOOK_", env_file=".env", extra="ignore")

    app_name: str = "Lab Notebook"

    # Storage
    data_dir: str = os.path.join(_BASE_DIR, 'data')

    # Logging
    log_level: str = "INFO"
    log_path: Optional[str] = None

    # Sign this user in automatically (single-user installs)
    default_user: Optional[str] = None

    # Dashboard / list behaviour
    dashboard_recent_limit: int = 5
    recent_days: int = 7


settings = Settings()
