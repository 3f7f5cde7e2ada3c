# config.py
# Job configuration as written by the job author in
#   /var/vcap/jobs/<job>/config/crucible.yml
#
# Example:
#   process:
#     executable: /var/vcap/packages/ambien/bin/ambien
#     args: ["--port", "8080"]
#     env: ["RAVE=true"]
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .paths import join_under


CONFIG_DIR = "config"
CONFIG_FILENAME = "crucible.yml"


class ProcessConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    executable: str
    args: List[str] = Field(default_factory=list)
    env: List[str] = Field(default_factory=list)  # "KEY=VALUE" entries, passed through as-is


class CrucibleConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    process: Optional[ProcessConfig] = None


def config_path(job_name: str, jobs_root: str | Path) -> Path:
    """Conventional location of a job's crucible config."""
    return Path(join_under(str(jobs_root), job_name, CONFIG_DIR, CONFIG_FILENAME))


def load(path: str | Path) -> CrucibleConfig:
    """
    Load and validate a crucible config file.

    An empty file is a valid config without a process; it is the builder's
    job to reject that.

    Raises:
        ConfigError: if the file is unreadable, not YAML, not a mapping,
            or does not match the schema.
    """
    cfg_path = Path(path)
    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"could not read config {cfg_path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {cfg_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"config {cfg_path} must be a mapping, got {type(data).__name__}"
        )

    try:
        return CrucibleConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config {cfg_path}: {e}") from e
