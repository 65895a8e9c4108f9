# src/parakontra/config/settings.py
"""
Project-level configuration.

Resolution order (later wins):
  1) Built-in defaults
  2) .parakontra/config.yml (or an explicit path)
  3) PARAKONTRA_* environment variables
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from parakontra.errors import SettingsError

DEFAULT_CONFIG_PATH = Path(".parakontra") / "config.yml"

_ENV_PREFIX = "PARAKONTRA_"


class ParakontraConfig(BaseModel):
    log_level: str = Field("WARNING", description="Level for the 'parakontra' logger.")
    on_fail: Literal["return_result", "raise"] = Field(
        "return_result", description="Default failure mode of @operation."
    )
    output_format: Literal["rich", "json"] = Field("rich", description="Default CLI output format.")

    @field_validator("log_level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()


def load_config(path: Optional[Union[str, Path]] = None) -> ParakontraConfig:
    """Build the effective configuration."""
    data = {}
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if cfg_path.is_file():
        try:
            loaded = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"{cfg_path}: invalid YAML: {e}") from e
        if not isinstance(loaded, dict):
            raise SettingsError(f"{cfg_path}: top level must be a mapping")
        data.update(loaded)
    elif path is not None:
        raise SettingsError(f"{cfg_path}: config file not found")

    for field_name in ParakontraConfig.model_fields:
        env_val = os.environ.get(_ENV_PREFIX + field_name.upper())
        if env_val:
            data[field_name] = env_val

    try:
        return ParakontraConfig(**data)
    except PydanticValidationError as e:
        raise SettingsError(f"invalid configuration: {e}") from e
