"""Repository permission checks."""

from __future__ import annotations

import logging

from github import Github

from claude_action.models.domain import GitHubContext

_logger = logging.getLogger(__name__)

WRITE_PERMISSIONS = {"admin", "write"}


def check_write_permissions(client: Github, context: GitHubContext) -> bool:
    actor = context.actor
    _logger.info("Checking permissions for actor: %s", actor)
    repo = client.get_repo(context.repository.full_name)
    permission = repo.get_collaborator_permission(actor)
    _logger.info("Permission level retrieved: %s", permission)
    if permission in WRITE_PERMISSIONS:
        _logger.info("Actor has write access: %s", permission)
        return True
    _logger.warning("Actor has insufficient permissions: %s", permission)
    return False
