"""Settings file location and JSON I/O for edgebar-groups.

The file at XDG_CONFIG_HOME/edgebar-groups/settings.json (or
EDGEBAR_GROUPS_CONFIG) holds the group configuration; edgebar_groups.config
owns its meaning. Nothing here persists runtime selection.

Import as: import edgebar_groups.settings
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional


def get_config_path() -> Path:
    explicit = os.environ.get("EDGEBAR_GROUPS_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "edgebar-groups" / "settings.json"


def read_settings_file(path: Path) -> Optional[dict]:
    """Parse the settings file, or None when it does not exist.

    Corrupt JSON raises json.JSONDecodeError; a non-object top level raises
    ValueError. load_config turns both into ConfigError.
    """
    if not path.exists():
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top-level settings must be a JSON object")
    return data


def save_settings(data: dict, path: Optional[Path] = None) -> Path:
    """Write ``data`` as JSON through a temp file in the same directory."""
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        Path(tmp_path).unlink(missing_ok=True)
        raise
    return path
