"""MCP server configuration handed to the inference step."""

from __future__ import annotations

import json
import logging

from claude_action.core.config import Settings

_logger = logging.getLogger(__name__)


def _github_server(github_token: str, image: str) -> dict:
    return {
        "command": "docker",
        "args": [
            "run",
            "-i",
            "--rm",
            "-e",
            "GITHUB_PERSONAL_ACCESS_TOKEN",
            image,
        ],
        "env": {"GITHUB_PERSONAL_ACCESS_TOKEN": github_token},
    }


def _additional_servers(raw: str | None) -> dict:
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid MCP_CONFIG JSON: {exc}") from exc
    if not isinstance(parsed, dict) or not isinstance(parsed.get("mcpServers", {}), dict):
        raise ValueError("MCP_CONFIG must be an object with an 'mcpServers' mapping")
    return parsed.get("mcpServers", {})


def prepare_mcp_config(
    github_token: str,
    owner: str,
    repo: str,
    branch: str,
    settings: Settings,
) -> str:
    servers = {"github": _github_server(github_token, settings.github_mcp_image)}
    servers["github"]["env"].update(
        {
            "REPO_OWNER": owner,
            "REPO_NAME": repo,
            "BRANCH_NAME": branch,
        }
    )
    extra = _additional_servers(settings.mcp_config)
    if extra:
        _logger.info("Merging %d additional MCP server(s): %s", len(extra), ", ".join(sorted(extra)))
        servers.update(extra)
    return json.dumps({"mcpServers": servers}, indent=2)
