"""Settings and config persistence for sevenseg.

Config is stored at ~/.config/sevenseg/config.json (XDG-compliant)::

    {
      "shape": {"horizontalSegment": {"width": 6, "height": 2}, ...},
      "style": {"on_class": "seven-seg--on", "on_color": "#ff2a00", ...}
    }

Usage:
    from sevenseg.conf import get_shape_params, get_style

    params = get_shape_params()     # SegmentShapeParams (defaults if unset)
    style = get_style()             # StyleSettings
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

from .controller import DEFAULT_OFF_CLASS, DEFAULT_ON_CLASS
from .core.models import DEFAULT_SHAPE_PARAMS, SegmentShapeParams

log = logging.getLogger(__name__)

# =========================================================================
# Config file location (XDG-compliant)
# =========================================================================

_XDG_CONFIG = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
CONFIG_DIR = os.path.join(_XDG_CONFIG, 'sevenseg')
CONFIG_PATH = os.path.join(CONFIG_DIR, 'config.json')


# =========================================================================
# Low-level config persistence
# =========================================================================

def load_config() -> dict:
    """Load user config from disk. Returns empty dict on missing/corrupt file."""
    try:
        with open(CONFIG_PATH, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    if not isinstance(config, dict):
        log.warning("Ignoring config %s: top level is not an object", CONFIG_PATH)
        return {}
    return config


def save_config(config: dict):
    """Save user config to disk."""
    os.makedirs(os.path.dirname(CONFIG_PATH), exist_ok=True)
    with open(CONFIG_PATH, 'w') as f:
        json.dump(config, f, indent=2)


def reset_config():
    """Delete the config file, restoring all defaults."""
    try:
        os.remove(CONFIG_PATH)
        log.info("Removed %s", CONFIG_PATH)
    except FileNotFoundError:
        pass


def set_config_value(key: str, raw_value: str) -> dict:
    """Set a dotted key (e.g. ``shape.gap``) from a CLI string and save.

    The value is parsed as JSON when possible (numbers, booleans, objects),
    otherwise stored as a plain string.

    Returns:
        The updated config.

    Raises:
        ValueError: Empty key, or a path component is not an object.
    """
    parts = [p for p in key.split('.') if p]
    if not parts:
        raise ValueError(f"Invalid config key: {key!r}")
    try:
        value: Any = json.loads(raw_value)
    except json.JSONDecodeError:
        value = raw_value

    config = load_config()
    node = config
    for part in parts[:-1]:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise ValueError(f"Config key {part!r} is not an object")
        node = child
    node[parts[-1]] = value

    # Validate before persisting
    shape = config.get('shape', {})
    style = config.get('style', {})
    if not isinstance(shape, dict) or not isinstance(style, dict):
        raise ValueError("'shape' and 'style' must be objects")
    SegmentShapeParams.from_dict(shape)
    StyleSettings.from_dict(style)

    save_config(config)
    return config


# =========================================================================
# Shape parameters
# =========================================================================

def get_shape_params() -> SegmentShapeParams:
    """Saved digit geometry, falling back to the defaults key by key.

    A malformed saved value is logged and the defaults are used instead.
    """
    shape = load_config().get('shape', {})
    if not isinstance(shape, dict):
        return DEFAULT_SHAPE_PARAMS
    try:
        return SegmentShapeParams.from_dict(shape)
    except ValueError as e:
        log.warning("Invalid shape config, using defaults: %s", e)
        return DEFAULT_SHAPE_PARAMS


def save_shape_params(params: SegmentShapeParams):
    """Persist digit geometry."""
    config = load_config()
    config['shape'] = params.to_dict()
    save_config(config)


# =========================================================================
# Style (on/off markers and colors)
# =========================================================================

@dataclass
class StyleSettings:
    """How lit and unlit segments are marked and painted."""
    on_class: str = DEFAULT_ON_CLASS
    off_class: str = DEFAULT_OFF_CLASS
    on_color: str = "#ff2a00"
    off_color: str = "#2a0a05"
    background: str = "#00000000"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StyleSettings':
        """Build from a partial dict; unknown keys are ignored.

        Raises:
            ValueError: A known key holds a non-string value.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                continue
            if not isinstance(value, str):
                raise ValueError(f"style.{key}: expected a string, got {value!r}")
            values[key] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def get_style() -> StyleSettings:
    """Saved style, defaults for anything missing or malformed."""
    style = load_config().get('style', {})
    if not isinstance(style, dict):
        return StyleSettings()
    try:
        return StyleSettings.from_dict(style)
    except ValueError as e:
        log.warning("Invalid style config, using defaults: %s", e)
        return StyleSettings()


def save_style(style: StyleSettings):
    """Persist style settings."""
    config = load_config()
    config['style'] = style.to_dict()
    save_config(config)
