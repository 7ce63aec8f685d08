from __future__ import annotations

import logging

import requests
from requests.auth import HTTPBasicAuth

from .config import RedditConfig
from .errors import AuthError
from .models import Token

logger = logging.getLogger(__name__)

AUTH_URL = "https://www.reddit.com/api/v1/access_token"


def request_token(session: requests.Session, config: RedditConfig) -> Token:
    resp = session.post(
        AUTH_URL,
        data={
            "grant_type": "password",
            "username": config.username,
            "password": config.password,
        },
        auth=HTTPBasicAuth(config.client_id, config.client_secret),
        headers={"User-Agent": config.user_agent},
        timeout=config.timeout,
    )
    logger.debug("Token endpoint answered %s", resp.status_code)

    try:
        payload = resp.json()
    except ValueError:
        body = resp.text[:200].replace("\n", " ")
        logger.warning("Token response is not JSON (status %s): %s", resp.status_code, body)
        return Token()

    if isinstance(payload, dict) and "error" in payload:
        logger.warning("Token endpoint returned error: %s", payload["error"])

    return Token.from_data(payload)


def get_access_token(session: requests.Session, config: RedditConfig) -> str:
    return request_token(session, config).access_token


def require_access_token(session: requests.Session, config: RedditConfig) -> str:
    token = get_access_token(session, config)
    if not token:
        raise AuthError("Failed to obtain access token")
    return token
