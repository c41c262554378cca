"""
Verifier configuration
Reads the "verifier" section of config.json (path overridable from the environment)
"""

import json
import os
from pathlib import Path

from dotenv import load_dotenv

from utils import log

CONFIG_ENV_VAR = 'EXTENSION_VERIFIER_CONFIG'

DEFAULTS = {
    'max_description_length': 150,
    'show_progress': False,
    'report_dir': 'reports',
}


def load_config(config_path=None):
    """
    Load verifier settings

    Args:
        config_path (Path or str): Explicit config file; falls back to
            $EXTENSION_VERIFIER_CONFIG, then ./config.json

    Returns:
        dict: DEFAULTS overlaid with the file's "verifier" section
    """
    load_dotenv()
    settings = dict(DEFAULTS)

    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR, 'config.json')
    config_path = Path(config_path)

    if not config_path.exists():
        return settings

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        log(f"Error loading config {config_path}: {e}. Using defaults.", 'warning')
        return settings

    section = config.get('verifier', {}) if isinstance(config, dict) else {}
    for key in DEFAULTS:
        if key in section:
            settings[key] = section[key]

    return settings
