from __future__ import annotations

from .settings import (
    CONFIG_ENV_VAR,
    RunnerConfig,
    RunnerSettings,
    find_config_file,
    load_runner_config,
    parse_runner_config_dict,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "RunnerConfig",
    "RunnerSettings",
    "find_config_file",
    "load_runner_config",
    "parse_runner_config_dict",
]
