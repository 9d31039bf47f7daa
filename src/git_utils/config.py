"""YAML-based configuration for git-utils.

Stored at $XDG_CONFIG_HOME/git-utils/config.yaml (default
~/.config/git-utils/config.yaml). Missing or unreadable files fall back to
DEFAULT_CONFIG; stored values are deep-merged over it.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "debug": False,
    "editor": {
        "path": None,
        "args": [],
    },
    "ui": {
        "max_visible_rows": None,
        "commit_limit": 1000,
    },
}


def get_config_dir() -> Path:
    """Get the git-utils config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "git-utils"


def get_config_path() -> Path:
    return get_config_dir() / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config() -> dict[str, Any]:
    """Load config.yaml merged over the defaults."""
    try:
        with open(get_config_path()) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)
    except (yaml.YAMLError, OSError):
        return copy.deepcopy(DEFAULT_CONFIG)
    if not isinstance(data, dict):
        return copy.deepcopy(DEFAULT_CONFIG)
    return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), data)


def save_config(cfg: dict[str, Any]) -> None:
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(cfg, f, default_flow_style=False, sort_keys=False)


def update_config(patch: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge a partial config into the stored one and save it."""
    cfg = _deep_merge(load_config(), patch)
    save_config(cfg)
    return cfg


def is_debug(cfg: dict[str, Any] | None = None) -> bool:
    """Debug logging requested via GIT_UTILS_DEBUG or the config file."""
    if os.environ.get("GIT_UTILS_DEBUG", "").lower() in ("1", "true", "yes"):
        return True
    if cfg is None:
        cfg = load_config()
    return bool(cfg.get("debug"))


def get_editor_config(cfg: dict[str, Any] | None = None) -> dict[str, Any] | None:
    """Configured editor as {"path", "args"}, or None when unset."""
    if cfg is None:
        cfg = load_config()
    editor = cfg.get("editor") or {}
    if not editor.get("path"):
        return None
    return {"path": editor["path"], "args": list(editor.get("args") or [])}


def set_editor_config(path: str, args: list[str] | None = None) -> dict[str, Any]:
    """Store the editor launcher. Surrounding quotes are stripped from path."""
    clean = path.strip().strip("\"'")
    editor = {"path": os.path.abspath(os.path.expanduser(clean)), "args": list(args or [])}
    update_config({"editor": editor})
    return editor


def get_ui_setting(key: str, cfg: dict[str, Any] | None = None) -> Any:
    if cfg is None:
        cfg = load_config()
    ui = cfg.get("ui") or {}
    return ui.get(key, DEFAULT_CONFIG["ui"].get(key))
