from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from casecal.app.list_query import normalize_sort_key, normalize_status_filter

_APP_SETTINGS_DIRNAME = "casecal"
_SETTINGS_FILE_NAME = "settings.json"
_SETTINGS_PATH_ENV = "CASECAL_SETTINGS_PATH"
_DEFAULT_VIEW_KEY = "defaultView"
_LIST_SORT_KEY = "listSortKey"
_LIST_STATUS_FILTER_KEY = "listStatusFilter"
DEFAULT_VIEW = "weekly"
SUPPORTED_VIEWS: tuple[str, ...] = ("weekly", "list")


def settings_path() -> Path:
    env = os.environ
    override = str(env.get(_SETTINGS_PATH_ENV, "") or "").strip()
    if override:
        return Path(override).expanduser()
    if os.name == "nt":
        appdata = str(env.get("APPDATA", "") or "").strip()
        if appdata:
            return Path(appdata) / _APP_SETTINGS_DIRNAME / "config" / _SETTINGS_FILE_NAME
        localappdata = str(env.get("LOCALAPPDATA", "") or "").strip()
        if localappdata:
            return Path(localappdata) / _APP_SETTINGS_DIRNAME / "config" / _SETTINGS_FILE_NAME
    else:
        xdg_config_home = str(env.get("XDG_CONFIG_HOME", "") or "").strip()
        if xdg_config_home:
            return Path(xdg_config_home) / _APP_SETTINGS_DIRNAME / _SETTINGS_FILE_NAME
    return Path.home() / ".config" / _APP_SETTINGS_DIRNAME / _SETTINGS_FILE_NAME


def load_settings() -> dict[str, Any]:
    path = settings_path()
    if not path.exists():
        return {}
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except Exception:
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def save_settings(settings: dict[str, Any]) -> None:
    path = settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2), encoding="utf-8")


def normalize_view(value: str | None, *, default: str = DEFAULT_VIEW) -> str:
    fallback = str(default or DEFAULT_VIEW).strip().lower()
    if fallback not in SUPPORTED_VIEWS:
        fallback = DEFAULT_VIEW
    normalized = str(value or "").strip().lower()
    if normalized in SUPPORTED_VIEWS:
        return normalized
    return fallback


def load_default_view(default: str = DEFAULT_VIEW) -> str:
    settings = load_settings()
    value = settings.get(_DEFAULT_VIEW_KEY)
    return normalize_view(value if isinstance(value, str) else None, default=default)


def save_default_view(value: str) -> str:
    resolved = normalize_view(value)
    settings = load_settings()
    settings[_DEFAULT_VIEW_KEY] = resolved
    save_settings(settings)
    return resolved


def load_list_sort_key() -> str:
    value = load_settings().get(_LIST_SORT_KEY)
    return normalize_sort_key(value if isinstance(value, str) else None)


def save_list_sort_key(value: str) -> str:
    resolved = normalize_sort_key(value)
    settings = load_settings()
    settings[_LIST_SORT_KEY] = resolved
    save_settings(settings)
    return resolved


def load_list_status_filter() -> str:
    value = load_settings().get(_LIST_STATUS_FILTER_KEY)
    return normalize_status_filter(value if isinstance(value, str) else None)


def save_list_status_filter(value: str) -> str:
    resolved = normalize_status_filter(value)
    settings = load_settings()
    settings[_LIST_STATUS_FILTER_KEY] = resolved
    save_settings(settings)
    return resolved
