"""Prompt file generation for the inference step."""

from __future__ import annotations

import logging
from pathlib import Path

from claude_action.actions import export_variable
from claude_action.core.config import Settings
from claude_action.models.domain import EventName, GitHubContext, GitHubData

_logger = logging.getLogger(__name__)

BASE_ALLOWED_TOOLS = [
    "Edit",
    "Glob",
    "Grep",
    "LS",
    "Read",
    "Write",
    "mcp__github__add_issue_comment",
    "mcp__github__create_or_update_file",
    "mcp__github__push_files",
]
DISALLOWED_TOOLS = ["WebSearch", "WebFetch"]
PROMPT_DIRNAME = "claude-prompts"
PROMPT_FILENAME = "claude-prompt.txt"


def build_allowed_tools(custom: list[str]) -> str:
    tools = list(BASE_ALLOWED_TOOLS)
    tools.extend(tool for tool in custom if tool not in tools)
    return ",".join(tools)


def build_disallowed_tools(custom_disallowed: list[str], custom_allowed: list[str]) -> str:
    tools = [tool for tool in DISALLOWED_TOOLS if tool not in custom_allowed]
    tools.extend(tool for tool in custom_disallowed if tool not in tools)
    return ",".join(tools)


def _format_context(data: GitHubData, context: GitHubContext) -> str:
    entity = data.context_data
    if context.is_pr:
        return (
            f"PR Title: {entity.title}\n"
            f"PR Author: {entity.author}\n"
            f"PR Branch: {entity.head_ref} -> {entity.base_ref}\n"
            f"PR State: {entity.state.upper()}\n"
            f"PR Additions: {entity.additions}\n"
            f"PR Deletions: {entity.deletions}\n"
            f"Total Commits: {entity.commit_count}\n"
            f"Changed Files: {len(data.changed_files)} files"
        )
    return (
        f"Issue Title: {entity.title}\n"
        f"Issue Author: {entity.author}\n"
        f"Issue State: {entity.state.upper()}"
    )


def _format_comments(data: GitHubData) -> str:
    if not data.comments:
        return "No comments"
    return "\n\n".join(f"[{c.author} at {c.created_at}]: {c.body}" for c in data.comments)


def _format_reviews(data: GitHubData) -> str:
    if not data.reviews:
        return "No review comments"
    blocks = []
    for review in data.reviews:
        lines = [f"[Review by {review.author} at {review.submitted_at}]: {review.state}"]
        if review.body:
            lines.append(review.body)
        for comment in review.comments:
            location = f"{comment.path}:{comment.line}" if comment.line else comment.path
            lines.append(f"  [Comment on {location}]: {comment.body}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def _format_changed_files(data: GitHubData) -> str:
    if not data.changed_files:
        return "No files changed"
    return "\n".join(
        f"- {f.path} ({f.change_type}) +{f.additions}/-{f.deletions}" for f in data.changed_files
    )


def _trigger_context(context: GitHubContext) -> str:
    payload = context.payload
    if context.inputs.direct_prompt:
        return "direct prompt provided in the workflow"
    if context.event_name in (EventName.ISSUE_COMMENT, EventName.PULL_REQUEST_REVIEW_COMMENT):
        return f"comment containing '{context.inputs.trigger_phrase}'"
    if context.event_name is EventName.PULL_REQUEST_REVIEW:
        return f"review containing '{context.inputs.trigger_phrase}'"
    if context.event_name is EventName.ISSUES and context.event_action == "assigned":
        assignee = (payload.get("assignee") or {}).get("login", "")
        return f"issue assigned to '{assignee}'"
    if context.event_name is EventName.ISSUES and context.event_action == "labeled":
        label = (payload.get("label") or {}).get("name", "")
        return f"issue labeled with '{label}'"
    entity = "pull request" if context.is_pr else "issue"
    return f"{entity} body or title containing '{context.inputs.trigger_phrase}'"


def _trigger_comment(context: GitHubContext) -> str | None:
    payload = context.payload
    if context.event_name is EventName.PULL_REQUEST_REVIEW:
        return (payload.get("review") or {}).get("body")
    return (payload.get("comment") or {}).get("body")


def generate_prompt(
    comment_id: int,
    base_branch: str,
    claude_branch: str | None,
    github_data: GitHubData,
    context: GitHubContext,
) -> str:
    entity = github_data.context_data
    kind = "PR" if context.is_pr else "issue"
    sections = [
        "You are Claude, an AI assistant designed to help with GitHub issues and pull requests. "
        "Think carefully as you analyze the context and respond appropriately. "
        "Here's the context for your current task:",
        f"<formatted_context>\n{_format_context(github_data, context)}\n</formatted_context>",
        f"<pr_or_issue_body>\n{entity.body or 'No description provided'}\n</pr_or_issue_body>",
        f"<comments>\n{_format_comments(github_data)}\n</comments>",
    ]
    if context.is_pr:
        sections.append(f"<review_comments>\n{_format_reviews(github_data)}\n</review_comments>")
        sections.append(f"<changed_files>\n{_format_changed_files(github_data)}\n</changed_files>")

    sections.append(
        f"<event_type>{context.event_name.value}</event_type>\n"
        f"<is_pr>{str(context.is_pr).lower()}</is_pr>\n"
        f"<trigger_context>{_trigger_context(context)}</trigger_context>\n"
        f"<repository>{context.repository.full_name}</repository>\n"
        f"<{kind.lower()}_number>{context.entity_number}</{kind.lower()}_number>\n"
        f"<claude_comment_id>{comment_id}</claude_comment_id>\n"
        f"<trigger_username>{context.actor}</trigger_username>\n"
        f"<trigger_phrase>{context.inputs.trigger_phrase}</trigger_phrase>"
    )
    trigger_comment = _trigger_comment(context)
    if trigger_comment:
        sections.append(f"<trigger_comment>\n{trigger_comment}\n</trigger_comment>")
    if context.inputs.direct_prompt:
        sections.append(f"<direct_prompt>\n{context.inputs.direct_prompt}\n</direct_prompt>")

    branch_line = (
        f"You are working on branch '{claude_branch}', created from '{base_branch}'. "
        f"Commit your changes to this branch; do not open a pull request."
        if claude_branch
        else f"You are working on the existing pull request branch, which targets '{base_branch}'."
    )
    sections.append(
        "Your task is to analyze the context above, understand the request, and respond. "
        f"Keep the tracking comment (ID {comment_id}) updated with a checklist of your progress "
        "and replace it with your final answer when you are done.\n\n"
        f"{branch_line}"
    )
    if context.inputs.custom_instructions:
        sections.append(f"CUSTOM INSTRUCTIONS:\n{context.inputs.custom_instructions}")
    return "\n\n".join(sections) + "\n"


def create_prompt(
    comment_id: int,
    base_branch: str,
    claude_branch: str | None,
    github_data: GitHubData,
    context: GitHubContext,
    settings: Settings,
) -> Path:
    prompt_dir = Path(settings.runner_temp) / PROMPT_DIRNAME
    prompt_dir.mkdir(parents=True, exist_ok=True)
    prompt_path = prompt_dir / PROMPT_FILENAME
    prompt_path.write_text(
        generate_prompt(comment_id, base_branch, claude_branch, github_data, context),
        encoding="utf-8",
    )
    _logger.info("Prompt written to %s", prompt_path)

    export_variable("ALLOWED_TOOLS", build_allowed_tools(context.inputs.allowed_tools))
    export_variable(
        "DISALLOWED_TOOLS",
        build_disallowed_tools(context.inputs.disallowed_tools, context.inputs.allowed_tools),
    )
    return prompt_path
