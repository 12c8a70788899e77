from __future__ import annotations

import os
from pathlib import Path

from claude_action.core.config import Settings
from claude_action.models.domain import (
    ActionInputs,
    ChangedFile,
    CommentData,
    EntityData,
    EventName,
    GitHubContext,
    GitHubData,
    Repository,
    ReviewCommentData,
    ReviewData,
)
from claude_action.prompt import build_allowed_tools, build_disallowed_tools, create_prompt


def _context(is_pr: bool, **inputs) -> GitHubContext:
    return GitHubContext(
        run_id="1",
        event_name=EventName.ISSUE_COMMENT,
        event_action="created",
        repository=Repository(owner="acme", repo="widgets"),
        actor="octocat",
        payload={"comment": {"body": "@claude please add tests"}},
        entity_number=17,
        is_pr=is_pr,
        inputs=ActionInputs(**inputs),
    )


def test_issue_prompt_is_written_and_tools_exported(tmp_path: Path, monkeypatch):
    env_file = tmp_path / "github_env"
    monkeypatch.setenv("GITHUB_ENV", str(env_file))
    monkeypatch.setenv("ALLOWED_TOOLS", "")
    monkeypatch.setenv("DISALLOWED_TOOLS", "")
    data = GitHubData(
        context_data=EntityData(title="Add tests", body="We need tests", author="alice", state="open"),
        comments=[CommentData(id=1, body="@claude please add tests", author="octocat", created_at="2025-01-01")],
    )
    context = _context(is_pr=False, custom_instructions="Use pytest.", allowed_tools=["Bash(pytest)"])

    path = create_prompt(42, "main", "claude/issue-17-20250101_0000", data, context, Settings(runner_temp=str(tmp_path)))

    assert path == tmp_path / "claude-prompts" / "claude-prompt.txt"
    prompt = path.read_text(encoding="utf-8")
    assert "Issue Title: Add tests" in prompt
    assert "<pr_or_issue_body>\nWe need tests\n</pr_or_issue_body>" in prompt
    assert "[octocat at 2025-01-01]: @claude please add tests" in prompt
    assert "<claude_comment_id>42</claude_comment_id>" in prompt
    assert "<issue_number>17</issue_number>" in prompt
    assert "claude/issue-17-20250101_0000" in prompt
    assert "CUSTOM INSTRUCTIONS:\nUse pytest." in prompt
    assert "<changed_files>" not in prompt

    exported = env_file.read_text(encoding="utf-8")
    assert "ALLOWED_TOOLS=" in exported
    assert "Bash(pytest)" in os.environ["ALLOWED_TOOLS"]
    assert os.environ["DISALLOWED_TOOLS"] == "WebSearch,WebFetch"


def test_pr_prompt_includes_reviews_and_files(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GITHUB_ENV", str(tmp_path / "github_env"))
    monkeypatch.setenv("ALLOWED_TOOLS", "")
    monkeypatch.setenv("DISALLOWED_TOOLS", "")
    data = GitHubData(
        context_data=EntityData(
            title="Cache layer",
            body="",
            author="bob",
            state="open",
            base_ref="main",
            head_ref="feature/cache",
            commit_count=2,
        ),
        changed_files=[ChangedFile(path="cache.py", change_type="ADDED", additions=10)],
        reviews=[
            ReviewData(
                id=1,
                author="carol",
                state="CHANGES_REQUESTED",
                comments=[ReviewCommentData(id=2, body="rename", path="cache.py", line=3)],
            )
        ],
    )

    path = create_prompt(7, "main", None, data, _context(is_pr=True), Settings(runner_temp=str(tmp_path)))

    prompt = path.read_text(encoding="utf-8")
    assert "PR Branch: feature/cache -> main" in prompt
    assert "No description provided" in prompt
    assert "- cache.py (ADDED) +10/-0" in prompt
    assert "[Comment on cache.py:3]: rename" in prompt
    assert "existing pull request branch" in prompt


def test_allowed_tools_are_deduplicated():
    tools = build_allowed_tools(["Read", "Bash(git status)"]).split(",")
    assert tools.count("Read") == 1
    assert tools[-1] == "Bash(git status)"


def test_allowed_web_tool_is_not_disallowed():
    assert build_disallowed_tools(["Bash"], ["WebFetch"]) == "WebSearch,Bash"
