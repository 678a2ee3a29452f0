"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDPREP_"


class Settings(BaseModel):
    app_name:               str  = "mdprep"
    db_url:                 str  = "sqlite:///mdprep.db"
    parser_config:          str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    words_per_minute:       int  = Field(default=200, ge=1, description="Reading speed for reading-time estimates")
    include_code_in_search: bool = Field(default=True, description="Include fenced code text in search_text")
    strip_esm_before_parse: bool = Field(default=True, description="Drop top-level import/export lines before parsing")
    fix_code_fences:        bool = Field(default=False, description="Label bare opening fences at render time")
    default_code_language:  str  = Field(default="javascript", description="Language applied by fix_code_fences")
    cache_ttl_seconds:      int  = Field(default=300, ge=0, description="Render cache TTL; 0 caches forever")
    log_level:              str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDPREP_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
