"""
Runtime settings for the DevConnector API.

Every field of ``Settings`` comes from an environment variable of the
same name in upper case.  Defaults are provided for all fields so the
API starts against a local MongoDB without any setup.  In a
production deployment you should at least override ``SECRET_KEY``,
``MONGO_URL`` and ``GITHUB_TOKEN``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "DevConnector API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    # 360000 seconds, the lifetime the web client has always been issued
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(6000)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # MongoDB connection.  ``mongo_db_name`` selects the database holding
    # the ``users``, ``profiles`` and ``posts`` collections.
    mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "devconnector")

    # GitHub repository lookup.  When ``github_token`` is empty the
    # request is sent unauthenticated and is subject to GitHub's
    # anonymous rate limit.
    github_api_url: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    github_token: str = os.getenv("GITHUB_TOKEN", "")
    github_timeout: int = int(os.getenv("GITHUB_TIMEOUT", "10"))


# Defaults are evaluated when this module is first imported; set
# MONGO_URL, SECRET_KEY and friends before importing the application.
settings = Settings()
