from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from kurobako.core.errors import RunnerConfigError
from kurobako.runtime.channel import DEFAULT_MAX_LINE_LENGTH

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "KUROBAKO_RUNNER_CONFIG"
CONFIG_FILENAMES = ("kurobako.yaml", "kurobako.yml")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RunnerSettings(BaseModel):
    """
    Settings of a runner process.

    Example:
      runner:
        max_line_length: 1048576
        log_level: INFO
        log_file: /tmp/solver.log   # omitted/null -> stderr
    """

    model_config = ConfigDict(extra="forbid")

    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @field_validator("max_line_length")
    @classmethod
    def _validate_max_line_length(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_line_length must be a positive integer")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}; got {value!r}")
        return level


@dataclass(frozen=True)
class RunnerConfig:
    """
    Parsed kurobako.yaml content.

    runner: validated runner settings
    path: file that produced this config, or None when running on defaults
    """

    runner: RunnerSettings
    path: Optional[Path] = None


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """
    Search upwards from ``start`` (default: the working directory) for kurobako.yaml/yml.

    The first match encountered while walking towards the filesystem root is used.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


def parse_runner_config_dict(data: Any, *, path: Optional[Union[str, Path]] = None) -> RunnerConfig:
    """
    Parse a loaded YAML object into a RunnerConfig.

    Raises:
        RunnerConfigError on any validation/shape error.
    """
    p = Path(path) if path is not None else None
    where = str(p) if p is not None else "<config>"

    top = data or {}
    if not isinstance(top, Mapping):
        raise RunnerConfigError(f"{where}: top-level must be a YAML mapping/object")

    unknown = set(top) - {"runner"}
    if unknown:
        raise RunnerConfigError(f"{where}: unknown top-level keys: {sorted(map(str, unknown))}")

    runner_raw = top.get("runner")
    if runner_raw is None:
        return RunnerConfig(runner=RunnerSettings(), path=p)
    if not isinstance(runner_raw, Mapping):
        raise RunnerConfigError(f"{where}: 'runner' must be a YAML mapping/object")

    try:
        runner = RunnerSettings.model_validate(dict(runner_raw))
    except ValidationError as exc:
        raise RunnerConfigError(f"{where}: invalid 'runner' section: {exc}") from exc

    return RunnerConfig(runner=runner, path=p)


def load_runner_config(path: Optional[Union[str, Path]] = None) -> RunnerConfig:
    """
    Load runner settings.

    Resolution rules:

    * If ``path`` is provided, only that file is used and it must exist.
    * Otherwise ``$KUROBAKO_RUNNER_CONFIG`` is used if set (it must exist too).
    * Otherwise kurobako.yaml/kurobako.yml is searched for by walking upwards
      from the working directory.
    * If nothing is found, defaults are returned.

    Raises:
        RunnerConfigError
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = env_path

    if path is not None:
        p = Path(path)
        if not p.is_file():
            raise RunnerConfigError(f"{p}: file not found")
    else:
        found = find_config_file()
        if found is None:
            logger.debug("No kurobako.yaml found; using default runner settings")
            return RunnerConfig(runner=RunnerSettings())
        p = found

    try:
        text = p.read_text()
    except OSError as exc:
        raise RunnerConfigError(f"{p}: failed to read file: {exc}") from exc

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise RunnerConfigError(f"{p}: failed to parse YAML: {exc}") from exc

    logger.debug("Loaded runner settings from %s", p)
    return parse_runner_config_dict(data, path=p)
