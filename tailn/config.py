from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from tailn.ring import MAX_LINE_LENGTH


class InputConfig(BaseModel):
    encoding: str = "utf-8"
    errors: str = "strict"
    max_line_length: int = Field(default=MAX_LINE_LENGTH, gt=0)


class OutputConfig(BaseModel):
    line_count: int = 10


class TailConfig(BaseModel):
    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    verbosity: int = 0


def load_config(path: Path | None) -> TailConfig:
    if path is None:
        return TailConfig()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(content) or {}
    else:
        data = json.loads(content)
    return _validate(data)


def merge_config(base: TailConfig, overrides: dict[str, Any]) -> TailConfig:
    payload = base.model_dump(mode="python")
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(payload.get(key), dict):
            payload[key].update({k: v for k, v in value.items() if v is not None})
            continue
        payload[key] = value
    return _validate(payload)


def _validate(data: Any) -> TailConfig:
    try:
        return TailConfig.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid config: {exc}") from exc
