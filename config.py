"""Shared constants and path configuration for sip-validate."""

import json
import os

_SETTINGS_FILE = os.path.expanduser("~/.config/sip-validate/settings.json")
_DEFAULT_SIP_DIR = "sips"
_DEFAULT_PORT = 4250


def _read_setting(*keys, default=None):
    """Read a nested setting from the global settings file."""
    try:
        with open(_SETTINGS_FILE) as f:
            data = json.load(f)
        for k in keys:
            data = data[k]
        return data
    except (FileNotFoundError, json.JSONDecodeError, KeyError, TypeError):
        return default


def get_sip_dir() -> str:
    """Resolve the directory holding SIP documents (relative paths are taken from cwd)."""
    return os.path.abspath(_read_setting("sip_dir", default=_DEFAULT_SIP_DIR))


SIP_DIR = get_sip_dir()
PORT = _read_setting("server", "port", default=_DEFAULT_PORT)
