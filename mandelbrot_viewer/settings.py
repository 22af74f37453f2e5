"""
Viewer settings loaded from settings.json next to this module.

Missing keys fall back to DEFAULTS; a missing or unreadable file means
all defaults.
"""

import os
import json
import logging

logger = logging.getLogger(__name__)


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

DEFAULTS = {
    'window_width': 1280,
    'window_height': 720,
    'target_fps': 60,
    'preview_downsample': 2,
    'render_threads': 0,   # 0 = hardware parallelism
    'log_level': 'INFO',
}


def load_settings(path=None):
    """
    Load settings from a JSON file, merged over DEFAULTS.

    Args:
        path: File to read (default: the package's settings.json)

    Returns:
        dict with every key of DEFAULTS
    """
    settings = dict(DEFAULTS)
    settings_path = path or SETTINGS_PATH
    try:
        with open(settings_path, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s", settings_path, e)
        return settings

    if not isinstance(loaded, dict):
        logger.warning("Ignoring %s: expected a JSON object", settings_path)
        return settings

    for key, value in loaded.items():
        if key in DEFAULTS:
            settings[key] = value
        else:
            logger.warning("Ignoring unknown setting %r", key)

    try:
        downsample = int(settings['preview_downsample'])
    except (TypeError, ValueError):
        logger.warning("Invalid preview_downsample %r, using %d",
                       settings['preview_downsample'], DEFAULTS['preview_downsample'])
        downsample = DEFAULTS['preview_downsample']
    # The preview must actually be smaller than the display
    settings['preview_downsample'] = max(2, downsample)
    return settings
