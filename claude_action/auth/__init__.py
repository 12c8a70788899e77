"""Credential handling for the prepare step."""

from .github_token import setup_github_token
from .oauth import OAuthRefreshError, setup_oauth_credentials

__all__ = [
    "OAuthRefreshError",
    "setup_github_token",
    "setup_oauth_credentials",
]
