from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from . import __version__
from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"
DEFAULT_TIMEOUT = 20.0

REQUIRED_VARS = ("CLIENT_ID", "CLIENT_SECRET", "USERNAME", "PASSWORD")


@dataclass(frozen=True)
class RedditConfig:
    client_id: str
    client_secret: str
    username: str
    password: str
    user_agent: str
    timeout: Optional[float] = DEFAULT_TIMEOUT


def _getenv(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def default_user_agent() -> str:
    return _getenv("USER_AGENT") or f"script:reddit-reader:v{__version__}"


def load_env(path: Union[str, Path] = DEFAULT_ENV_FILE) -> Path:
    env_path = Path(path)
    if not env_path.is_file():
        raise ConfigError(f"Error loading .env file: {env_path} not found")
    load_dotenv(env_path)
    logger.debug("Loaded environment from %s", env_path)
    return env_path


def load_config(timeout: Optional[float] = DEFAULT_TIMEOUT) -> RedditConfig:
    values = {name: _getenv(name) for name in REQUIRED_VARS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigError(f"Missing required env vars: {', '.join(missing)}")

    return RedditConfig(
        client_id=values["CLIENT_ID"],
        client_secret=values["CLIENT_SECRET"],
        username=values["USERNAME"],
        password=values["PASSWORD"],
        user_agent=default_user_agent(),
        timeout=timeout or None,
    )
