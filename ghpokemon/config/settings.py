from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import DEV_VERSION, TOKEN_ENV, VERSION_FILE

# Load .env once, early
load_dotenv()


class Settings(BaseSettings):
    """Application config (env or .env)."""

    model_config = SettingsConfigDict(env_prefix="", env_file=None, extra="ignore")

    github_token: str | None = Field(default_factory=lambda: os.getenv(TOKEN_ENV) or None)


def get_settings() -> Settings:
    return Settings()


def read_version(path: str = VERSION_FILE) -> str:
    """Version string from path (relative to the cwd), or the dev placeholder."""
    try:
        with open(path, encoding="utf-8") as f:
            version = f.read().strip()
    except OSError:
        return DEV_VERSION
    return version or DEV_VERSION
