"""Configuration management for Repo Reader."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "repo-reader.config.json"


class RepoReaderConfig(BaseModel):
    """Partial configuration as written in ``repo-reader.config.json``.

    Every field is optional; missing values fall back to lower-precedence
    sources during resolution.
    """

    name: Optional[str] = Field(
        default=None, min_length=1, description="Repository name used for tool names"
    )
    files: Optional[List[str]] = Field(
        default=None,
        min_length=1,
        description="Glob patterns surfacing the files agents may browse",
    )
    depth: Optional[int] = Field(
        default=None, description="Default menu depth (-1 or unset for unlimited)"
    )

    @field_validator("files")
    @classmethod
    def reject_empty_patterns(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is not None and any(not p for p in v):
            raise ValueError("glob patterns must be non-empty strings")
        return v


class ResolvedRepoReaderConfig(BaseModel):
    """Fully resolved configuration handed to the query tools."""

    name: str
    files: List[str]
    depth: Optional[int] = None


DEFAULT_CONFIG = ResolvedRepoReaderConfig(name="repo", files=["**/*"], depth=-1)


def clean_glob_patterns(patterns: List[Any]) -> List[str]:
    """Trim, drop blanks, use forward slashes and de-duplicate in order."""
    cleaned: List[str] = []
    for p in patterns:
        s = p.strip() if isinstance(p, str) else ""
        if not s:
            continue
        s = s.replace("\\", "/")
        if s not in cleaned:
            cleaned.append(s)
    return cleaned


def resolve_repo_reader_config(
    default_name: str,
    config_json: Optional[Any] = None,
    overrides: Optional[RepoReaderConfig] = None,
) -> ResolvedRepoReaderConfig:
    """Merge built-in defaults, the repository's config file and caller overrides.

    Precedence is caller overrides > repository file > built-in defaults. A
    repository file that does not validate is ignored as a whole.

    Args:
        default_name: Name used when neither source provides one
        config_json: Parsed JSON of the repository config file, if any
        overrides: Values supplied explicitly by the caller

    Returns:
        ResolvedRepoReaderConfig
    """
    resolved = DEFAULT_CONFIG.model_copy(update={"name": default_name}, deep=True)

    if config_json:
        try:
            parsed = RepoReaderConfig.model_validate(config_json)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid {CONFIG_FILE_NAME}: {e}")
        else:
            resolved = ResolvedRepoReaderConfig(
                name=parsed.name or default_name,
                files=clean_glob_patterns(parsed.files or DEFAULT_CONFIG.files),
                depth=DEFAULT_CONFIG.depth if parsed.depth is None else parsed.depth,
            )

    if overrides is not None:
        update: dict = {}
        if overrides.name:
            update["name"] = overrides.name
        if overrides.files:
            files = clean_glob_patterns(overrides.files)
            if files:
                update["files"] = files
        if overrides.depth is not None:
            update["depth"] = overrides.depth
        resolved = resolved.model_copy(update=update)

    return resolved


def load_config_json(project_dir: Path) -> Optional[Any]:
    """Read the repository config file, ``None`` when missing or malformed."""
    config_path = project_dir / CONFIG_FILE_NAME
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read {config_path}: {e}")
        return None


def load_config_file(config_path: Path) -> RepoReaderConfig:
    """Load an explicitly requested config file, failing loudly."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return RepoReaderConfig.model_validate(data)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file: {config_path}", str(e)) from e
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}", str(e)) from e
