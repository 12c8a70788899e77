from __future__ import annotations

from types import SimpleNamespace

import pytest
from github import GithubException

from claude_action.github.validation import check_human_actor, check_write_permissions
from claude_action.models.domain import EventName, GitHubContext, Repository


def _context(actor: str = "octocat") -> GitHubContext:
    return GitHubContext(
        run_id="1",
        event_name=EventName.ISSUE_COMMENT,
        repository=Repository(owner="acme", repo="widgets"),
        actor=actor,
        payload={},
        entity_number=1,
        is_pr=False,
    )


def _client_with_permission(permission: str, seen: list | None = None):
    def get_collaborator_permission(actor):
        if seen is not None:
            seen.append(actor)
        return permission

    repo = SimpleNamespace(get_collaborator_permission=get_collaborator_permission)
    return SimpleNamespace(get_repo=lambda name: repo)


@pytest.mark.parametrize("permission", ["admin", "write"])
def test_writers_are_allowed(permission):
    seen: list = []
    assert check_write_permissions(_client_with_permission(permission, seen), _context()) is True
    assert seen == ["octocat"]


@pytest.mark.parametrize("permission", ["read", "triage", "none"])
def test_readers_are_rejected(permission):
    assert check_write_permissions(_client_with_permission(permission), _context()) is False


def test_permission_lookup_errors_propagate():
    def boom(actor):
        raise GithubException(404, {"message": "Not Found"}, None)

    client = SimpleNamespace(get_repo=lambda name: SimpleNamespace(get_collaborator_permission=boom))
    with pytest.raises(GithubException):
        check_write_permissions(client, _context())


def test_human_actor_passes():
    client = SimpleNamespace(get_user=lambda login: SimpleNamespace(login=login, type="User"))
    check_human_actor(client, _context())


def test_bot_actor_is_rejected():
    client = SimpleNamespace(get_user=lambda login: SimpleNamespace(login=login, type="Bot"))
    with pytest.raises(RuntimeError, match=r"non-human actor: dependabot\[bot\] \(type: Bot\)"):
        check_human_actor(client, _context("dependabot[bot]"))
