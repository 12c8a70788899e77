"""Action configuration via environment variables."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Inputs and runner environment for the prepare step."""

    # Runner environment
    github_event_name: str = ""
    github_event_path: str | None = None
    github_repository: str = ""
    github_actor: str = ""
    github_run_id: str = ""
    github_server_url: str = "https://github.com"
    github_api_url: str = "https://api.github.com"
    runner_temp: str = "/tmp"
    actions_id_token_request_url: str | None = None
    actions_id_token_request_token: str | None = None

    # Action inputs
    override_github_token: str | None = None
    trigger_phrase: str = "@claude"
    assignee_trigger: str | None = None
    label_trigger: str | None = None
    base_branch: str | None = None
    branch_prefix: str = "claude/"
    allowed_tools: str = ""
    disallowed_tools: str = ""
    custom_instructions: str = ""
    direct_prompt: str = ""
    mcp_config: str | None = None
    github_mcp_image: str = "ghcr.io/github/github-mcp-server:sha-6d69797"

    # Claude OAuth
    use_oauth: str = ""
    claude_access_token: str | None = None
    claude_oauth_refresh_token: str | None = Field(
        None,
        validation_alias=AliasChoices("claude_oauth_refresh_token", "claude_refresh_token"),
    )
    claude_expires_at: str | None = None
    claude_oauth_client_id: str | None = None
    claude_oauth_client_secret: str | None = None

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_exporter: str = "console"
    otel_otlp_endpoint: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_ignore_empty=True)

    @property
    def oauth_enabled(self) -> bool:
        return self.use_oauth == "true"
