"""
Per-project configuration file.

Optional `.nextlens.yaml` at the project root:

    exclude_dirs: [storybook-static]
    thresholds:
      srp_critical_lines: 250

A missing file means defaults. A corrupt or invalid file is fatal.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nextlens.analysis.domain.thresholds import HeuristicThresholds
from nextlens.shared.domain.exceptions import ProjectConfigError
from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_NAME = ".nextlens.yaml"


class ProjectConfig(BaseModel):
    """Validated project config; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    exclude_dirs: List[str] = Field(default_factory=list)
    thresholds: HeuristicThresholds = Field(default_factory=HeuristicThresholds)


def load_project_config(
    root_path: Union[str, Path],
    config_name: str = DEFAULT_CONFIG_NAME,
) -> ProjectConfig:
    """
    Load the project config file from the project root.

    Args:
        root_path: Project root directory
        config_name: File name to look for

    Returns:
        ProjectConfig (defaults when the file does not exist)

    Raises:
        ProjectConfigError: File unreadable, not YAML, or fails validation
    """
    config_path = Path(root_path) / config_name
    if not config_path.is_file():
        return ProjectConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProjectConfigError(
            f"Invalid YAML in {config_path}: {e}", context={"path": str(config_path)}
        ) from e
    except OSError as e:
        raise ProjectConfigError(
            f"Cannot read {config_path}: {e}", context={"path": str(config_path)}
        ) from e

    if not isinstance(data, dict):
        raise ProjectConfigError(
            f"{config_path} must contain a mapping, got {type(data).__name__}",
            context={"path": str(config_path)},
        )

    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ProjectConfigError(
            f"Invalid project config {config_path}: {e.error_count()} error(s)",
            context={"path": str(config_path), "errors": e.errors(include_url=False)},
        ) from e

    logger.info(
        "project_config_loaded",
        path=str(config_path),
        exclude_dirs=config.exclude_dirs,
    )
    return config
