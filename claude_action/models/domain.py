"""Domain data models for the prepare step."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

OAUTH_SCOPES = ["user:inference", "user:profile"]


class EventName(str, Enum):
    """GitHub events the action knows how to respond to."""

    ISSUES = "issues"
    ISSUE_COMMENT = "issue_comment"
    PULL_REQUEST = "pull_request"
    PULL_REQUEST_REVIEW = "pull_request_review"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"


class OAuthCredentials(BaseModel):
    """Credential record persisted for the downstream CLI."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")
    expires_at: int = Field(..., alias="expiresAt", description="Expiry as epoch milliseconds.")
    scopes: list[str] = Field(default_factory=lambda: list(OAUTH_SCOPES))


class Repository(BaseModel):
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class ActionInputs(BaseModel):
    """User-facing inputs of the action."""

    trigger_phrase: str = "@claude"
    assignee_trigger: Optional[str] = None
    label_trigger: Optional[str] = None
    base_branch: Optional[str] = None
    branch_prefix: str = "claude/"
    allowed_tools: list[str] = Field(default_factory=list)
    disallowed_tools: list[str] = Field(default_factory=list)
    custom_instructions: str = ""
    direct_prompt: str = ""


class GitHubContext(BaseModel):
    """Everything the pipeline needs to know about the triggering event."""

    run_id: str
    event_name: EventName
    event_action: Optional[str] = None
    repository: Repository
    actor: str
    payload: dict[str, Any]
    entity_number: int
    is_pr: bool
    inputs: ActionInputs = Field(default_factory=ActionInputs)


class CommentData(BaseModel):
    id: int
    body: str = ""
    author: str = ""
    created_at: Optional[str] = None


class ReviewCommentData(BaseModel):
    id: int
    body: str = ""
    author: str = ""
    path: str = ""
    line: Optional[int] = None
    created_at: Optional[str] = None


class ReviewData(BaseModel):
    id: int
    author: str = ""
    body: str = ""
    state: str = ""
    submitted_at: Optional[str] = None
    comments: list[ReviewCommentData] = Field(default_factory=list)


class ChangedFile(BaseModel):
    path: str
    change_type: str
    additions: int = 0
    deletions: int = 0


class EntityData(BaseModel):
    """Summary of the issue or pull request that triggered the run."""

    title: str = ""
    body: str = ""
    author: str = ""
    state: str = ""
    created_at: Optional[str] = None
    base_ref: Optional[str] = None
    head_ref: Optional[str] = None
    head_sha: Optional[str] = None
    additions: int = 0
    deletions: int = 0
    commit_count: int = 0


class GitHubData(BaseModel):
    context_data: EntityData
    comments: list[CommentData] = Field(default_factory=list)
    changed_files: list[ChangedFile] = Field(default_factory=list)
    reviews: list[ReviewData] = Field(default_factory=list)


class BranchInfo(BaseModel):
    base_branch: str
    claude_branch: Optional[str] = None
    current_branch: str
