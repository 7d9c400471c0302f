"""Configuration system for the engine.

Provides configuration loading, merging, and validation with precedence:
1. Environment variables (highest)
2. Project config (.anchoredit/config.json)
3. User profile (~/.anchoredit/profiles/<name>.json)
4. Defaults (lowest)
"""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from anchoredit.core.exceptions import ConfigurationError
from anchoredit.engine.fragments import DEFAULT_TARGET_DEPTH


@dataclass
class EngineConfig:
    """Settings for snippet resolution and the edit tool.

    parallel_threshold is a snippet length; snippets at least that long are
    matched on a thread pool. 0 disables threading.
    """

    target_depth: int = DEFAULT_TARGET_DEPTH
    parallel_threshold: int = 0
    max_workers: int = 4
    write_backup: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.target_depth < 0:
            raise ConfigurationError(
                f"target_depth must be >= 0, got {self.target_depth}", key="target_depth"
            )
        if self.parallel_threshold < 0:
            raise ConfigurationError(
                f"parallel_threshold must be >= 0, got {self.parallel_threshold}",
                key="parallel_threshold",
            )
        if self.max_workers < 1:
            raise ConfigurationError(
                f"max_workers must be >= 1, got {self.max_workers}", key="max_workers"
            )

    def workers_for(self, snippet_length: int) -> int | None:
        """Thread count to use for a snippet of the given length, None for sequential."""
        if self.parallel_threshold and snippet_length >= self.parallel_threshold:
            return self.max_workers
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineConfig":
        """Create config from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def load_user_config(profile_name: str = "default") -> EngineConfig:
    """Load user configuration from ~/.anchoredit/profiles/<name>.json.

    Returns:
        EngineConfig loaded from profile, or default config if not found

    Raises:
        ConfigurationError: If profile file is invalid JSON
    """
    profile_path = Path.home() / ".anchoredit" / "profiles" / f"{profile_name}.json"

    if not profile_path.exists():
        return EngineConfig()

    try:
        with profile_path.open() as f:
            data = json.load(f)
        return EngineConfig.from_dict(data)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in profile {profile_name}: {e}") from e
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load profile {profile_name}: {e}") from e


def load_project_config(project_root: Path | None = None) -> EngineConfig | None:
    """Load project-specific configuration from .anchoredit/config.json.

    Args:
        project_root: Directory holding .anchoredit/config.json (default: cwd)

    Returns:
        EngineConfig if config file exists, None otherwise

    Raises:
        ConfigurationError: If config file is invalid JSON
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / ".anchoredit" / "config.json"

    if not config_path.exists():
        return None

    try:
        with config_path.open() as f:
            data = json.load(f)
        return EngineConfig.from_dict(data)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in project config: {e}") from e
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load project config: {e}") from e


_ENV_INT_KEYS = {
    "ANCHOREDIT_TARGET_DEPTH": "target_depth",
    "ANCHOREDIT_PARALLEL_THRESHOLD": "parallel_threshold",
    "ANCHOREDIT_MAX_WORKERS": "max_workers",
}


def load_env_overrides() -> dict[str, Any]:
    """Load configuration overrides from environment variables.

    Supported environment variables:
    - ANCHOREDIT_TARGET_DEPTH: Maximum fragment tree depth
    - ANCHOREDIT_PARALLEL_THRESHOLD: Snippet length from which matching is threaded
    - ANCHOREDIT_MAX_WORKERS: Thread pool size for matching

    Returns:
        Dictionary of configuration overrides
    """
    overrides: dict[str, Any] = {}

    for env_name, key in _ENV_INT_KEYS.items():
        if value := os.getenv(env_name):
            try:
                overrides[key] = int(value)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {env_name}: {value}", key=key) from e

    return overrides


def merge_configs(
    base: EngineConfig,
    project: EngineConfig | None = None,
    env_overrides: dict[str, Any] | None = None,
) -> EngineConfig:
    """Merge configurations with precedence: env > project > base.

    Project values only override the base when they differ from the defaults.
    """
    merged = base.to_dict()
    defaults = EngineConfig().to_dict()

    if project:
        for key, value in project.to_dict().items():
            if value != defaults.get(key):
                merged[key] = value

    if env_overrides:
        merged.update(env_overrides)

    return EngineConfig.from_dict(merged)


def load_config(profile_name: str = "default", project_root: Path | None = None) -> EngineConfig:
    """Load and merge all configuration sources.

    Raises:
        ConfigurationError: If any config source is invalid
    """
    base_config = load_user_config(profile_name)
    project_config = load_project_config(project_root)
    env_overrides = load_env_overrides()

    return merge_configs(base_config, project_config, env_overrides)
