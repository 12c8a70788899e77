"""Working branch provisioning."""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime, timezone
from pathlib import Path

from github.Repository import Repository as GithubRepository

from claude_action.models.domain import BranchInfo, GitHubContext, GitHubData

_logger = logging.getLogger(__name__)


def _git(*args: str, cwd: Path | None = None) -> str:
    cmd = ["git", *args]
    result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, check=False)
    if result.returncode != 0:
        raise RuntimeError(f"{' '.join(cmd)} failed: {result.stderr.strip()}")
    return result.stdout


def new_branch_name(context: GitHubContext, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    entity_type = "pr" if context.is_pr else "issue"
    return f"{context.inputs.branch_prefix}{entity_type}-{context.entity_number}-{now.strftime('%Y%m%d_%H%M')}"


def setup_branch(repo: GithubRepository, github_data: GitHubData, context: GitHubContext) -> BranchInfo:
    entity = github_data.context_data

    if context.is_pr:
        state = entity.state.upper()
        if state == "OPEN" and entity.head_ref:
            branch = entity.head_ref
            depth = max(entity.commit_count, 1) + 1
            _logger.info("PR #%s is open, checking out branch %s", context.entity_number, branch)
            _git("fetch", "origin", f"--depth={depth}", branch)
            _git("checkout", branch)
            return BranchInfo(base_branch=entity.base_ref or branch, current_branch=branch)
        _logger.info("PR #%s is %s, creating a new branch", context.entity_number, state.lower() or "closed")

    source_branch = context.inputs.base_branch or repo.default_branch
    branch = new_branch_name(context)
    sha = repo.get_branch(source_branch).commit.sha
    _logger.info("Creating branch %s from %s (%s)", branch, source_branch, sha)
    repo.create_git_ref(ref=f"refs/heads/{branch}", sha=sha)

    _git("fetch", "origin", "--depth=1", branch)
    _git("checkout", branch)
    _logger.info("Successfully checked out new branch: %s", branch)
    return BranchInfo(base_branch=source_branch, claude_branch=branch, current_branch=branch)
