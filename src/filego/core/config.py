import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Library defaults, overridable per invocation
CHUNK_SIZE_DEFAULT = 2 * 1024 * 1024
BUFFER_CAPACITY_MAX_DEFAULT = 10 * 1024 * 1024


class Settings(BaseSettings):
    # Split / merge defaults used by the CLI
    FILEGO_CHUNK_SIZE: int = Field(default=CHUNK_SIZE_DEFAULT, gt=0)
    FILEGO_MAX_BUFFER_CAPACITY: int = Field(
        default=BUFFER_CAPACITY_MAX_DEFAULT, gt=0
    )

    # Observability
    LOG_FORMAT: str = "auto"  # json|plain|auto
    NO_COLOR: bool = False  # Disable colored output

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        config_path: Optional[Path]
        if config_file:
            config_path = Path(config_file)
        else:
            # Auto-discover .filego.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".filego.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Environment variables and .env entries win over file values
        overridden = {key.upper() for key in os.environ}
        env_file = cls.model_config.get("env_file")
        if isinstance(env_file, str) and Path(env_file).is_file():
            overridden.update(key.upper() for key in dotenv_values(env_file))
        config_data = {
            key: value
            for key, value in config_data.items()
            if key.upper() not in overridden
        }
        return cls(**config_data)


# Default settings - replaced by load_config() during CLI startup
SETTINGS = Settings()
