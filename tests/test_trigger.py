from __future__ import annotations

import pytest

from claude_action.github.validation.trigger import check_trigger_action, contains_trigger_phrase
from claude_action.models.domain import ActionInputs, EventName, GitHubContext, Repository


def _context(event_name: EventName, payload: dict, *, action: str | None = None, **inputs) -> GitHubContext:
    return GitHubContext(
        run_id="1",
        event_name=event_name,
        event_action=action,
        repository=Repository(owner="acme", repo="widgets"),
        actor="octocat",
        payload=payload,
        entity_number=1,
        is_pr=event_name not in (EventName.ISSUES, EventName.ISSUE_COMMENT),
        inputs=ActionInputs(**inputs),
    )


@pytest.mark.parametrize(
    "text, expected",
    [
        ("@claude fix this", True),
        ("please help @claude", True),
        ("hey @claude, can you look?", True),
        ("@claude.", True),
        ("email me at someone@claude.ai", False),
        ("@claudebot do it", False),
        ("", False),
        (None, False),
    ],
)
def test_contains_trigger_phrase(text, expected):
    assert contains_trigger_phrase(text, "@claude") is expected


def test_comment_with_trigger_phrase():
    context = _context(EventName.ISSUE_COMMENT, {"comment": {"body": "@claude please fix"}}, action="created")
    assert check_trigger_action(context) is True


def test_comment_without_trigger_phrase():
    context = _context(EventName.ISSUE_COMMENT, {"comment": {"body": "looks fine"}}, action="created")
    assert check_trigger_action(context) is False


def test_review_comment_uses_custom_phrase():
    context = _context(
        EventName.PULL_REQUEST_REVIEW_COMMENT,
        {"comment": {"body": "/bot rename this"}},
        action="created",
        trigger_phrase="/bot",
    )
    assert check_trigger_action(context) is True


def test_direct_prompt_always_triggers():
    context = _context(EventName.PULL_REQUEST, {"pull_request": {"body": "", "title": ""}}, direct_prompt="Review it")
    assert check_trigger_action(context) is True


def test_issue_opened_title_trigger():
    payload = {"issue": {"title": "@claude add dark mode", "body": "details"}}
    assert check_trigger_action(_context(EventName.ISSUES, payload, action="opened")) is True


def test_issue_closed_is_ignored_even_with_phrase():
    payload = {"issue": {"title": "@claude add dark mode", "body": ""}}
    assert check_trigger_action(_context(EventName.ISSUES, payload, action="closed")) is False


def test_issue_assigned_to_trigger_user():
    payload = {"issue": {"title": "t", "body": ""}, "assignee": {"login": "claude-bot"}}
    context = _context(EventName.ISSUES, payload, action="assigned", assignee_trigger="@claude-bot")
    assert check_trigger_action(context) is True


def test_issue_assigned_to_someone_else():
    payload = {"issue": {"title": "t", "body": ""}, "assignee": {"login": "someone"}}
    context = _context(EventName.ISSUES, payload, action="assigned", assignee_trigger="claude-bot")
    assert check_trigger_action(context) is False


def test_issue_labeled_with_trigger_label():
    payload = {"issue": {"title": "t", "body": ""}, "label": {"name": "claude"}}
    context = _context(EventName.ISSUES, payload, action="labeled", label_trigger="claude")
    assert check_trigger_action(context) is True


def test_pull_request_body_trigger():
    payload = {"pull_request": {"title": "Refactor", "body": "@claude review please"}}
    assert check_trigger_action(_context(EventName.PULL_REQUEST, payload, action="opened")) is True


def test_review_submitted_with_trigger():
    payload = {"review": {"body": "@claude address these"}}
    context = _context(EventName.PULL_REQUEST_REVIEW, payload, action="submitted")
    assert check_trigger_action(context) is True


def test_review_dismissed_is_ignored():
    payload = {"review": {"body": "@claude address these"}}
    context = _context(EventName.PULL_REQUEST_REVIEW, payload, action="dismissed")
    assert check_trigger_action(context) is False
