"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

DEFAULT_PROVIDERS = ("github", "gitlab", "yml_remote")


class CredentialConfig(BaseModel):
    username: str | None = None
    token: str


class RepoSyncConfig(BaseModel):
    providers: list[str] = Field(default_factory=lambda: list(DEFAULT_PROVIDERS))
    dry_run: bool = False
    auth: str = "env"
    credentials: dict[str, CredentialConfig] = Field(default_factory=dict)
    store_path: Path = Path("repositories.json")
    declarations_path: Path = Path("declarations.json")
    request_timeout: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=2, ge=0, le=5)
    max_concurrent: int = Field(default=4, ge=1, le=16)
    cache_tag: str = "reposync"
    github_api_url: str = "https://api.github.com"
    gitlab_api_url: str = "https://gitlab.com/api/v4"

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_auth_credentials(self) -> RepoSyncConfig:
        if self.auth not in {"env", "token"}:
            raise ValueError("auth must be one of: env, token")
        if self.auth == "env" and self.credentials:
            raise ValueError("credentials must be unset when auth is not 'token'")
        return self
