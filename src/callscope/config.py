"""Configuration management for callscope."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from callscope.exceptions import ConfigError

CALLSCOPE_DIR = ".callscope"
CONFIG_FILE = "config.json"


class CameraConfig(BaseModel):
    """Pan/zoom limits and defaults."""

    min_zoom: float = Field(default=0.1, gt=0)
    max_zoom: float | None = 5.0  # None = unbounded
    wheel_in_factor: float = Field(default=1.1, gt=0)
    wheel_out_factor: float = Field(default=0.9, gt=0)
    zoom_step: float = Field(default=1.2, gt=0)
    scale: float = Field(default=1.0, gt=0)
    translate_x: float = 0.0
    translate_y: float = 0.0

    @model_validator(mode="after")
    def _check_zoom_range(self) -> CameraConfig:
        if self.max_zoom is not None and self.max_zoom < self.min_zoom:
            raise ValueError(
                f"max_zoom ({self.max_zoom}) must not be below min_zoom ({self.min_zoom})"
            )
        return self

    @classmethod
    def fit_to_window(cls) -> CameraConfig:
        """Zoom floor at 1.0 with no ceiling, as used by the editor webview."""
        return cls(min_zoom=1.0, max_zoom=None)


class SearchConfig(BaseModel):
    """Label search behavior."""

    case_sensitive: bool = False
    max_results: int = 50


class SelectionConfig(BaseModel):
    """Selection behavior."""

    auto_center: bool = True


class ViewerConfig(BaseModel):
    """Full viewer configuration."""

    name: str = ""
    root_path: str = "."
    camera: CameraConfig = Field(default_factory=CameraConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .callscope directory."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / CALLSCOPE_DIR).is_dir():
            return current
        current = current.parent
    if (current / CALLSCOPE_DIR).is_dir():
        return current
    return None


def get_callscope_dir(root: Path) -> Path:
    """Get the .callscope directory for a project root."""
    return root / CALLSCOPE_DIR


def load_config(root: Path) -> ViewerConfig:
    """Load configuration from .callscope/config.json."""
    config_path = get_callscope_dir(root) / CONFIG_FILE
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
            return ViewerConfig(**data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e
    return ViewerConfig(name=root.name, root_path=str(root))


def save_config(root: Path, config: ViewerConfig) -> None:
    """Save configuration to .callscope/config.json."""
    cs_dir = get_callscope_dir(root)
    cs_dir.mkdir(parents=True, exist_ok=True)
    config_path = cs_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def set_config_value(config: ViewerConfig, key: str, value: Any) -> ViewerConfig:
    """Set a nested config value using dot notation (e.g., 'camera.min_zoom')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ViewerConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {e}") from e
