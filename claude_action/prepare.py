"""Prepare an assistant run: validate the event, post the tracking comment,
provision a branch, write the prompt and hand credentials to the next step."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from claude_action.actions import set_failed, set_output
from claude_action.auth import setup_github_token, setup_oauth_credentials
from claude_action.core.config import Settings
from claude_action.github.client import create_github_client
from claude_action.github.context import parse_github_context
from claude_action.github.data import fetch_github_data
from claude_action.github.operations import create_initial_comment, setup_branch, update_tracking_comment
from claude_action.github.validation import check_human_actor, check_trigger_action, check_write_permissions
from claude_action.mcp import prepare_mcp_config
from claude_action.prompt import create_prompt
from claude_action.telemetry import configure_metrics, record_step_duration, shutdown_metrics

_logger = logging.getLogger(__name__)


@contextmanager
def _step(name: str) -> Iterator[None]:
    started = time.perf_counter()
    try:
        yield
    finally:
        record_step_duration(name, time.perf_counter() - started)


def run(settings: Settings) -> None:
    with _step("authenticate"):
        github_token = setup_github_token(settings)
        client = create_github_client(github_token, settings.github_api_url)

    context = parse_github_context(settings)

    with _step("check_permissions"):
        if not check_write_permissions(client, context):
            raise RuntimeError("Actor does not have write permissions to the repository")

    with _step("check_trigger"):
        contains_trigger = check_trigger_action(context)
    set_output("contains_trigger", str(contains_trigger).lower())
    if not contains_trigger:
        _logger.info("No trigger found, skipping remaining steps")
        return

    with _step("check_human_actor"):
        check_human_actor(client, context)

    repo = client.get_repo(context.repository.full_name)

    with _step("create_comment"):
        comment_id = create_initial_comment(repo, context, settings)

    with _step("fetch_data"):
        github_data = fetch_github_data(repo, context)

    with _step("setup_branch"):
        branch_info = setup_branch(repo, github_data, context)

    if branch_info.claude_branch:
        with _step("update_comment"):
            update_tracking_comment(repo, context, comment_id, branch_info.claude_branch, settings)

    with _step("create_prompt"):
        create_prompt(
            comment_id,
            branch_info.base_branch,
            branch_info.claude_branch,
            github_data,
            context,
            settings,
        )

    mcp_config = prepare_mcp_config(
        github_token,
        context.repository.owner,
        context.repository.repo,
        branch_info.current_branch,
        settings,
    )

    if settings.oauth_enabled:
        with _step("oauth"):
            setup_oauth_credentials(settings)

    set_output("mcp_config", mcp_config)
    set_output("github_token", github_token)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        settings = Settings()
        logging.getLogger().setLevel(settings.log_level.upper())
        configure_metrics(settings)
        run(settings)
    except Exception as exc:
        _logger.exception("Prepare step failed")
        set_failed(f"Prepare step failed with error: {exc}")
        raise SystemExit(1)
    finally:
        shutdown_metrics()


if __name__ == "__main__":
    main()
