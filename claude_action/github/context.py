"""Parse the GitHub Actions event into a GitHubContext."""

from __future__ import annotations

import json
from pathlib import Path

from claude_action.core.config import Settings
from claude_action.models.domain import ActionInputs, EventName, GitHubContext, Repository


def _split_tools(value: str) -> list[str]:
    return [tool.strip() for tool in value.split(",") if tool.strip()]


def _load_payload(path: str | None) -> dict:
    if not path:
        raise ValueError("GITHUB_EVENT_PATH is not set")
    return json.loads(Path(path).read_text(encoding="utf-8"))


def parse_github_context(settings: Settings, payload: dict | None = None) -> GitHubContext:
    if payload is None:
        payload = _load_payload(settings.github_event_path)

    try:
        event_name = EventName(settings.github_event_name)
    except ValueError:
        raise ValueError(f"Unsupported event type: {settings.github_event_name}") from None

    owner, _, repo = settings.github_repository.partition("/")
    if not owner or not repo:
        raise ValueError(f"Invalid GITHUB_REPOSITORY: {settings.github_repository!r}")

    if event_name in (EventName.ISSUES, EventName.ISSUE_COMMENT):
        issue = payload["issue"]
        entity_number = int(issue["number"])
        is_pr = event_name is EventName.ISSUE_COMMENT and bool(issue.get("pull_request"))
    else:
        entity_number = int(payload["pull_request"]["number"])
        is_pr = True

    inputs = ActionInputs(
        trigger_phrase=settings.trigger_phrase,
        assignee_trigger=settings.assignee_trigger,
        label_trigger=settings.label_trigger,
        base_branch=settings.base_branch,
        branch_prefix=settings.branch_prefix,
        allowed_tools=_split_tools(settings.allowed_tools),
        disallowed_tools=_split_tools(settings.disallowed_tools),
        custom_instructions=settings.custom_instructions,
        direct_prompt=settings.direct_prompt,
    )
    return GitHubContext(
        run_id=settings.github_run_id,
        event_name=event_name,
        event_action=payload.get("action"),
        repository=Repository(owner=owner, repo=repo),
        actor=settings.github_actor,
        payload=payload,
        entity_number=entity_number,
        is_pr=is_pr,
        inputs=inputs,
    )
