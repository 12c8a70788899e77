"""Fetch the issue or pull request data used for branch setup and the prompt."""

from __future__ import annotations

import logging
from datetime import datetime

from github.Repository import Repository as GithubRepository

from claude_action.models.domain import (
    ChangedFile,
    CommentData,
    EntityData,
    GitHubContext,
    GitHubData,
    ReviewCommentData,
    ReviewData,
)

_logger = logging.getLogger(__name__)


def _coerce_iso(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _login(user) -> str:
    return getattr(user, "login", "") or ""


def _serialize_comment(comment) -> CommentData:
    return CommentData(
        id=comment.id,
        body=comment.body or "",
        author=_login(comment.user),
        created_at=_coerce_iso(getattr(comment, "created_at", None)),
    )


def _fetch_pull_request(repo: GithubRepository, number: int) -> GitHubData:
    pull = repo.get_pull(number)
    entity = EntityData(
        title=pull.title or "",
        body=pull.body or "",
        author=_login(pull.user),
        state=pull.state or "",
        created_at=_coerce_iso(pull.created_at),
        base_ref=pull.base.ref,
        head_ref=pull.head.ref,
        head_sha=pull.head.sha,
        additions=pull.additions or 0,
        deletions=pull.deletions or 0,
        commit_count=pull.commits or 0,
    )
    comments = [_serialize_comment(comment) for comment in pull.get_issue_comments()]
    changed_files = [
        ChangedFile(
            path=f.filename,
            change_type=(f.status or "modified").upper(),
            additions=f.additions or 0,
            deletions=f.deletions or 0,
        )
        for f in pull.get_files()
    ]

    inline_by_review: dict[int, list[ReviewCommentData]] = {}
    for comment in pull.get_review_comments():
        review_id = getattr(comment, "pull_request_review_id", None)
        if review_id is None:
            continue
        inline_by_review.setdefault(review_id, []).append(
            ReviewCommentData(
                id=comment.id,
                body=comment.body or "",
                author=_login(comment.user),
                path=comment.path or "",
                line=getattr(comment, "line", None),
                created_at=_coerce_iso(getattr(comment, "created_at", None)),
            )
        )
    reviews = [
        ReviewData(
            id=review.id,
            author=_login(review.user),
            body=review.body or "",
            state=review.state or "",
            submitted_at=_coerce_iso(getattr(review, "submitted_at", None)),
            comments=inline_by_review.get(review.id, []),
        )
        for review in pull.get_reviews()
    ]
    return GitHubData(context_data=entity, comments=comments, changed_files=changed_files, reviews=reviews)


def _fetch_issue(repo: GithubRepository, number: int) -> GitHubData:
    issue = repo.get_issue(number)
    entity = EntityData(
        title=issue.title or "",
        body=issue.body or "",
        author=_login(issue.user),
        state=issue.state or "",
        created_at=_coerce_iso(issue.created_at),
    )
    comments = [_serialize_comment(comment) for comment in issue.get_comments()]
    return GitHubData(context_data=entity, comments=comments)


def fetch_github_data(repo: GithubRepository, context: GitHubContext) -> GitHubData:
    if context.is_pr:
        data = _fetch_pull_request(repo, context.entity_number)
    else:
        data = _fetch_issue(repo, context.entity_number)
    _logger.info(
        "Fetched %s #%s: %d comments, %d changed files, %d reviews",
        "PR" if context.is_pr else "issue",
        context.entity_number,
        len(data.comments),
        len(data.changed_files),
        len(data.reviews),
    )
    return data
