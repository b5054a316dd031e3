"""
Client configuration management.

Loads configuration from client_config.yml with environment variable overrides.
Uses Pydantic for validation and type safety.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from common.src.constants import SCREEN_WIDTH, SCREEN_HEIGHT

DEFAULT_CONFIG_PATH = Path(__file__).parent / "client_config.yml"


class StreamingConfig(BaseModel):
    """Chunk manifest settings."""
    manifest_path: Optional[str] = Field(default=None, description="Path to the chunk manifest JSON file")


class DisplayConfig(BaseModel):
    """Display and window settings."""
    width: int = Field(default=SCREEN_WIDTH, description="Viewport width in pixels")
    height: int = Field(default=SCREEN_HEIGHT, description="Viewport height in pixels")


class CameraConfig(BaseModel):
    """Camera movement settings."""
    follow_speed: float = Field(default=10.0, description="Smooth follow speed (higher = snappier)")


class DebugConfig(BaseModel):
    """Debug and development settings."""
    enabled: bool = Field(default=False, description="Enable debug mode")
    log_chunk_updates: bool = Field(default=False, description="Log every recomputed chunk set")
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")


class ClientConfig(BaseModel):
    """Complete client configuration."""
    streaming: StreamingConfig = Field(default_factory=StreamingConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> "ClientConfig":
        """Load configuration from YAML file."""
        path = path or DEFAULT_CONFIG_PATH

        if not path.exists():
            # Write defaults so there is a file to edit next time
            config = cls(**cls._apply_env_overrides({}))
            cls()._save_default(path)
            return config

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        data = cls._apply_env_overrides(data)

        return cls(**data)

    @staticmethod
    def _apply_env_overrides(data: dict) -> dict:
        """Apply environment variable overrides to config data."""
        env_mappings = {
            "MANIFEST_PATH": ("streaming", "manifest_path"),
            "DISPLAY_WIDTH": ("display", "width"),
            "DISPLAY_HEIGHT": ("display", "height"),
            "CAMERA_FOLLOW_SPEED": ("camera", "follow_speed"),
            "DEBUG_ENABLED": ("debug", "enabled"),
            "LOG_LEVEL": ("debug", "log_level"),
        }

        for env_var, (section, key) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                if section not in data or data[section] is None:
                    data[section] = {}

                # Convert types based on default
                if key in ("width", "height"):
                    data[section][key] = int(value)
                elif key == "follow_speed":
                    data[section][key] = float(value)
                elif key == "enabled":
                    data[section][key] = value.lower() in ("true", "1", "yes")
                else:
                    data[section][key] = value

        return data

    def _save_default(self, path: Path) -> None:
        """Save default configuration to file."""
        data = self.model_dump()
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def get_config() -> ClientConfig:
    """Get the singleton configuration instance."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = ClientConfig.from_yaml()
    return get_config._instance


def reload_config() -> ClientConfig:
    """Reload configuration from file."""
    get_config._instance = ClientConfig.from_yaml()
    return get_config._instance
