"""Tracking comment creation and updates."""

from __future__ import annotations

import logging

from github.Repository import Repository as GithubRepository

from claude_action.core.config import Settings
from claude_action.models.domain import EventName, GitHubContext

_logger = logging.getLogger(__name__)

SPINNER_HTML = (
    '<img src="https://github.com/user-attachments/assets/5ac382c7-e004-429b-8e35-7feb3e8f9c6f" '
    'width="14px" height="14px" style="vertical-align: middle; margin-left: 4px;" />'
)


def job_run_url(context: GitHubContext, settings: Settings) -> str:
    return f"{settings.github_server_url}/{context.repository.full_name}/actions/runs/{context.run_id}"


def branch_url(context: GitHubContext, branch: str, settings: Settings) -> str:
    return f"{settings.github_server_url}/{context.repository.full_name}/tree/{branch}"


def tracking_comment_body(job_run_link: str, branch_link: str | None = None) -> str:
    body = f"Claude Code is working… {SPINNER_HTML}\n\nI'll analyze this and get back to you.\n\n[View job run]({job_run_link})"
    if branch_link:
        body += f"\n[View branch]({branch_link})"
    return body


def _is_review_comment(context: GitHubContext) -> bool:
    return context.event_name is EventName.PULL_REQUEST_REVIEW_COMMENT


def create_initial_comment(repo: GithubRepository, context: GitHubContext, settings: Settings) -> int:
    body = tracking_comment_body(job_run_url(context, settings))
    if _is_review_comment(context):
        pull = repo.get_pull(context.entity_number)
        comment = pull.create_review_comment_reply(int(context.payload["comment"]["id"]), body)
    else:
        comment = repo.get_issue(context.entity_number).create_comment(body)
    _logger.info("Created initial comment with ID: %s", comment.id)
    return int(comment.id)


def update_tracking_comment(
    repo: GithubRepository,
    context: GitHubContext,
    comment_id: int,
    branch: str,
    settings: Settings,
) -> None:
    body = tracking_comment_body(job_run_url(context, settings), branch_url(context, branch, settings))
    if _is_review_comment(context):
        comment = repo.get_pull(context.entity_number).get_review_comment(comment_id)
    else:
        comment = repo.get_issue(context.entity_number).get_comment(comment_id)
    comment.edit(body)
    _logger.info("Updated comment %s with branch link", comment_id)
