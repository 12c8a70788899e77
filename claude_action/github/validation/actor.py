"""Reject runs started by bots or other non-human accounts."""

from __future__ import annotations

import logging

from github import Github

from claude_action.models.domain import GitHubContext

_logger = logging.getLogger(__name__)


def check_human_actor(client: Github, context: GitHubContext) -> None:
    user = client.get_user(context.actor)
    actor_type = getattr(user, "type", None)
    _logger.info("Actor type: %s", actor_type)
    if actor_type != "User":
        raise RuntimeError(f"Workflow initiated by non-human actor: {context.actor} (type: {actor_type}).")
    _logger.info("Verified human actor: %s", context.actor)
