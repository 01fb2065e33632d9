"""
Local directory references.

Turns a directory on disk into the project location plus resolved
configuration that the query tools operate on.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .config import (
    RepoReaderConfig,
    ResolvedRepoReaderConfig,
    load_config_file,
    load_config_json,
    resolve_repo_reader_config,
)
from .exceptions import RootNotADirectoryError, RootNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class LocalReference:
    """A project directory together with its resolved configuration."""

    project_clone_location: Path
    config: ResolvedRepoReaderConfig


def create_local_reference(
    local_path: Union[str, Path],
    name: Optional[str] = None,
    files_override: Optional[List[str]] = None,
    depth_override: Optional[int] = None,
    config_path: Optional[Path] = None,
) -> LocalReference:
    """Create a reference to a local project directory.

    Args:
        local_path: Directory to expose
        name: Name overriding the config file and the directory name
        files_override: Include globs overriding the config file
        depth_override: Menu depth overriding the config file
        config_path: Explicit config file used instead of the one at the root

    Returns:
        LocalReference

    Raises:
        RootNotFoundError: If the path does not exist
        RootNotADirectoryError: If the path is not a directory
        ConfigError: If ``config_path`` is given but unusable
    """
    project_clone_location = Path(local_path).expanduser().resolve()

    if not project_clone_location.exists():
        raise RootNotFoundError(f"Local path not found: {local_path}")
    if not project_clone_location.is_dir():
        raise RootNotADirectoryError(f"Local path is not a directory: {local_path}")

    if config_path is not None:
        config_json = load_config_file(config_path).model_dump(exclude_none=True)
    else:
        config_json = load_config_json(project_clone_location)

    overrides = RepoReaderConfig.model_construct(
        name=name or None, files=files_override or None, depth=depth_override
    )
    config = resolve_repo_reader_config(
        default_name=project_clone_location.name,
        config_json=config_json,
        overrides=overrides,
    )
    logger.debug(f"Resolved configuration for {project_clone_location}: {config}")

    return LocalReference(project_clone_location=project_clone_location, config=config)
