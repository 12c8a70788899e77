"""Claude OAuth credential refresh and persistence."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path

import httpx

from claude_action.core.config import Settings
from claude_action.models.domain import OAuthCredentials
from claude_action.telemetry import increment_oauth_refresh

_logger = logging.getLogger(__name__)

TOKEN_URL = "https://api.anthropic.com/oauth/token"
REFRESH_MARGIN_MS = 5 * 60 * 1000
CREDENTIALS_DIRNAME = ".claude"
CREDENTIALS_FILENAME = "credentials.json"
CLI_CREDENTIALS_FILENAME = ".credentials.json"


class OAuthRefreshError(RuntimeError):
    """Raised when the token endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Failed to refresh token: {status_code} {body}")
        self.status_code = status_code
        self.body = body


@dataclass
class RefreshedToken:
    access_token: str
    expires_at: int
    refresh_token: str | None = None


def _now_ms() -> int:
    return int(time.time() * 1000)


def should_refresh(access_token: str | None, expires_at: int | None, now_ms: int) -> bool:
    """True when the token is missing or expires within the refresh margin."""
    if not access_token or expires_at is None:
        return True
    return expires_at <= now_ms + REFRESH_MARGIN_MS


def refresh_oauth_token(
    refresh_token: str,
    *,
    client_id: str | None = None,
    client_secret: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> RefreshedToken:
    _logger.info("Refreshing OAuth token...")
    data = {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    }
    if client_id:
        data["client_id"] = client_id
    if client_secret:
        data["client_secret"] = client_secret

    with httpx.Client(timeout=30.0, transport=transport) as client:
        response = client.post(
            TOKEN_URL,
            data=data,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
    if not response.is_success:
        increment_oauth_refresh("failed")
        raise OAuthRefreshError(response.status_code, response.text)

    payload = response.json()
    access = payload.get("access_token")
    expires_in = payload.get("expires_in")
    if not access or not isinstance(expires_in, (int, float)):
        increment_oauth_refresh("failed")
        raise RuntimeError("Token refresh response missing fields")

    increment_oauth_refresh("refreshed")
    _logger.info("OAuth token successfully refreshed")
    return RefreshedToken(
        access_token=access,
        expires_at=_now_ms() + int(expires_in * 1000),
        refresh_token=payload.get("refresh_token") or None,
    )


def credentials_dir() -> Path:
    return Path.home() / CREDENTIALS_DIRNAME


def _write_private_json(path: Path, payload: dict) -> None:
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    os.chmod(path, 0o600)


def write_credentials_file(credentials: OAuthCredentials, directory: Path | None = None) -> Path:
    """Write the credential record to ``credentials.json``.

    The Claude CLI reads ``.credentials.json`` with the same record nested
    under ``claudeAiOauth``, so that copy is written alongside it.
    """
    target_dir = directory or credentials_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    record = credentials.model_dump(by_alias=True)
    path = target_dir / CREDENTIALS_FILENAME
    _write_private_json(path, record)
    _write_private_json(target_dir / CLI_CREDENTIALS_FILENAME, {"claudeAiOauth": record})
    return path


def _parse_expires_at(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(
            f"Invalid CLAUDE_EXPIRES_AT {value!r}: expected epoch milliseconds as an integer"
        ) from exc


def setup_oauth_credentials(
    settings: Settings,
    *,
    directory: Path | None = None,
    transport: httpx.BaseTransport | None = None,
) -> OAuthCredentials:
    """Make sure a valid token is on disk for the inference step."""
    refresh_token = settings.claude_oauth_refresh_token
    if not refresh_token:
        raise ValueError("OAuth credentials are incomplete: CLAUDE_OAUTH_REFRESH_TOKEN is not set")

    parsed_expiry = _parse_expires_at(settings.claude_expires_at)
    access_token = settings.claude_access_token or ""
    expires_at = parsed_expiry or 0

    if should_refresh(settings.claude_access_token, parsed_expiry, _now_ms()):
        _logger.info("OAuth token missing, expired or expiring soon, refreshing...")
        refreshed = refresh_oauth_token(
            refresh_token,
            client_id=settings.claude_oauth_client_id,
            client_secret=settings.claude_oauth_client_secret,
            transport=transport,
        )
        access_token = refreshed.access_token
        expires_at = refreshed.expires_at
        refresh_token = refreshed.refresh_token or refresh_token
    else:
        increment_oauth_refresh("skipped")
        _logger.info("OAuth token is still valid")

    credentials = OAuthCredentials(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=expires_at,
    )
    path = write_credentials_file(credentials, directory)
    _logger.info("OAuth credentials written to %s", path)
    return credentials
