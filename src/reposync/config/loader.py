"""Config loading and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from reposync.contracts.config import RepoSyncConfig
from reposync.contracts.exceptions import ConfigError
from reposync.providers.registry import registered_ids


def _resolve_path(value: Path, *, base_dir: Path) -> Path:
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def _validate_providers(config: RepoSyncConfig) -> None:
    known = set(registered_ids())
    unknown = [provider_id for provider_id in config.providers if provider_id.strip() and provider_id not in known]
    if unknown:
        raise ConfigError(f"unknown providers in config: {', '.join(unknown)}")
    if config.auth == "token":
        missing = [
            provider_id
            for provider_id in config.providers
            if provider_id in {"github", "gitlab"} and provider_id not in config.credentials
        ]
        if missing:
            raise ConfigError(f"token auth requires credentials for: {', '.join(missing)}")


def load_config(path: str | Path) -> RepoSyncConfig:
    """Load config JSON, resolving relative paths against the config file's directory."""
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = RepoSyncConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"config file is not valid UTF-8: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    resolved_config = parsed.model_copy(
        update={
            "store_path": _resolve_path(parsed.store_path, base_dir=config_dir),
            "declarations_path": _resolve_path(parsed.declarations_path, base_dir=config_dir),
        }
    )
    _validate_providers(resolved_config)
    return resolved_config
