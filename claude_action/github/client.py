"""PyGithub client construction."""

from __future__ import annotations

from github import Github
from github.Auth import Token

DEFAULT_API_URL = "https://api.github.com"


def create_github_client(token: str, base_url: str | None = None) -> Github:
    auth = Token(token)
    if base_url and base_url.rstrip("/") != DEFAULT_API_URL:
        return Github(auth=auth, base_url=base_url.rstrip("/"))
    return Github(auth=auth)
