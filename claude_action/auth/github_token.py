"""GitHub token acquisition for the action."""

from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

import httpx

from claude_action.actions import set_secret
from claude_action.core.config import Settings

_logger = logging.getLogger(__name__)

OIDC_AUDIENCE = "claude-code-github-action"
TOKEN_EXCHANGE_URL = "https://api.anthropic.com/api/github/github-app-token-exchange"

T = TypeVar("T")


def retry_with_backoff(
    operation: Callable[[], T],
    *,
    max_attempts: int = 3,
    initial_delay: float = 5.0,
    backoff_factor: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    delay = initial_delay
    for attempt in range(1, max_attempts + 1):
        try:
            return operation()
        except Exception as exc:
            _logger.warning("Attempt %d/%d failed: %s", attempt, max_attempts, exc)
            if attempt == max_attempts:
                raise
            sleep(delay)
            delay *= backoff_factor
    raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")


def get_oidc_token(settings: Settings, *, transport: httpx.BaseTransport | None = None) -> str:
    request_url = settings.actions_id_token_request_url
    request_token = settings.actions_id_token_request_token
    if not request_url or not request_token:
        raise RuntimeError(
            "Unable to get OIDC token: ACTIONS_ID_TOKEN_REQUEST_URL is not set. "
            "Did you remember to add `id-token: write` to your workflow permissions?"
        )
    with httpx.Client(timeout=30.0, transport=transport) as client:
        response = client.get(
            httpx.URL(request_url).copy_merge_params({"audience": OIDC_AUDIENCE}),
            headers={"Authorization": f"Bearer {request_token}"},
        )
    response.raise_for_status()
    value = response.json().get("value")
    if not value:
        raise RuntimeError("OIDC token response did not include a value")
    return value


def exchange_for_app_token(oidc_token: str, *, transport: httpx.BaseTransport | None = None) -> str:
    with httpx.Client(timeout=30.0, transport=transport) as client:
        response = client.post(TOKEN_EXCHANGE_URL, headers={"Authorization": f"Bearer {oidc_token}"})
    if not response.is_success:
        try:
            detail = response.json().get("error", {}).get("message") or response.text
        except ValueError:
            detail = response.text
        raise RuntimeError(f"App token exchange failed: {response.status_code} {response.reason_phrase} - {detail}")
    token = response.json().get("token")
    if not token:
        raise RuntimeError("App token exchange response did not include a token")
    return token


def setup_github_token(
    settings: Settings,
    *,
    transport: httpx.BaseTransport | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    if settings.override_github_token:
        _logger.info("Using provided GITHUB_TOKEN for authentication")
        set_secret(settings.override_github_token)
        return settings.override_github_token

    _logger.info("Requesting OIDC token...")
    oidc_token = retry_with_backoff(lambda: get_oidc_token(settings, transport=transport), sleep=sleep)
    _logger.info("Exchanging OIDC token for app token...")
    app_token = exchange_for_app_token(oidc_token, transport=transport)
    set_secret(app_token)
    _logger.info("App token successfully obtained")
    return app_token
