"""Application configuration. Zero imports from the rest of the app.

Config lives in ~/.budgetwise/config.json. Values missing from the file
fall back to DEFAULTS, so a fresh install works without one.
"""
import json
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".budgetwise"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULTS = {
    "export_dir": str(Path.home() / "BudgetWise" / "exports"),
    "snapshot_path": str(CONFIG_DIR / "offline_data.json"),
    "date_format": "MM/DD/YYYY",
    "log_level": "INFO",
    "smtp": {
        "host": "",
        "port": 587,
        "username": "",
        "password": "",
        "use_tls": True,
        "sender": "",
        "default_recipient": "",
    },
}


def load_config(path: Path = CONFIG_FILE) -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict, path: Path = CONFIG_FILE) -> None:
    """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, path)
    except Exception:
        try:
            tmp.unlink(missing_ok=True)
        except Exception:
            pass


def get_setting(key: str, config: dict | None = None):
    """Return config[key], or the default for that key."""
    cfg = load_config() if config is None else config
    value = cfg.get(key)
    if value is None:
        return DEFAULTS.get(key)
    return value


def get_smtp_settings(config: dict | None = None) -> dict:
    """SMTP settings merged over the defaults."""
    cfg = load_config() if config is None else config
    smtp = dict(DEFAULTS["smtp"])
    smtp.update(cfg.get("smtp") or {})
    smtp["port"] = coerce_port(smtp.get("port"))
    return smtp


def coerce_port(value, default: int = 587) -> int:
    """A usable TCP port, or the default for blanks and garbage."""
    try:
        port = int(value)
    except (TypeError, ValueError):
        return default
    return port if 0 < port < 65536 else default
