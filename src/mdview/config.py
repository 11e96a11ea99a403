"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"

# markdown-it-py preset names; table/strikethrough/linkify are enabled on top of any of them.
PARSER_PRESETS = ("commonmark", "default", "gfm-like", "js-default", "zero")
PARSER_PRESETS_RE = f"^({'|'.join(PARSER_PRESETS)})$"


class Settings(BaseModel):
    app_name:          str  = "mdview"
    parser_config:     str  = Field(default="gfm-like", pattern=PARSER_PRESETS_RE, description="MarkdownIt parser preset name")
    task_lists:        bool = Field(default=True,          description="Render GFM task-list items as checkboxes")
    light_theme:       str  = Field(default="default",     description="Pygments style for the light rendering")
    dark_theme:        str  = Field(default="github-dark", description="Pygments style for the dark rendering")
    highlight_workers: int  = Field(default=4, ge=1,       description="Threads used to highlight one document's code blocks")
    output_dir:        str  = Field(default="dist",        description="Directory for rendered HTML files")
    standalone:        bool = Field(default=False,         description="Wrap rendered fragments in a full HTML page")
    log_level:         str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDVIEW_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDVIEW_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
