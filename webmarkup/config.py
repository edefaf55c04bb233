"""Configuration loading for render settings."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from .models import RenderSettings

_LOGGER = logging.getLogger(__name__)

_ENV_OVERRIDES = {
    "WEBMARKUP_CURRENT_CLASS": "current_class",
    "WEBMARKUP_ITEM_CLASS": "item_class",
    "WEBMARKUP_LIST_TYPE": "list_type",
    "WEBMARKUP_TRIM": "trim",
    "WEBMARKUP_LOG_LEVEL": "log_level",
    "WEBMARKUP_COMPONENTS_DIR": "components_dir",
}

_TRUTHY = {"1", "true", "yes", "on"}


def load_render_settings(path: Path | None = None) -> RenderSettings:
    """Load settings from an optional JSON file, then apply environment overrides."""

    data: Dict[str, Any] = {}

    if path is not None and path.exists():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            _LOGGER.warning("Unable to decode render settings at %s: %s", path, exc)
        else:
            if isinstance(loaded, dict):
                data = loaded
            else:
                _LOGGER.warning("Ignoring render settings at %s: not a JSON object", path)

    for env_name, field_name in _ENV_OVERRIDES.items():
        env_value = os.environ.get(env_name)
        if env_value is None:
            continue
        if field_name == "trim":
            data[field_name] = env_value.strip().lower() in _TRUTHY
        else:
            data[field_name] = env_value

    filtered = {key: value for key, value in data.items() if key in RenderSettings.model_fields}
    return RenderSettings(**filtered)


__all__ = ["load_render_settings"]
