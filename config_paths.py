import json
import logging
import os

log = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "tabstream")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
MAX_WIDTH_DEFAULT = 80
HEADER_INTERVAL_DEFAULT = 100
SHOW_HEADER_DEFAULT = True
BATCH_SIZE_DEFAULT = None
CARRY_HEADER_BASELINE_DEFAULT = True
MAX_COLUMN_WIDTH_DEFAULT = 70
ACCENT_COLOR_DEFAULT = "cyan"
NULL_VALUE_DEFAULT = "NULL"
COLOR_DEFAULT = True


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


# key in config.json -> (cfg key, validator)
_TABLE_KEYS = {
    "max_width": ("MAX_WIDTH", lambda v: _is_int(v) and v >= 0),
    "header_interval": ("HEADER_INTERVAL", lambda v: _is_int(v) and v >= 0),
    "show_header": ("SHOW_HEADER", lambda v: isinstance(v, bool)),
    "batch_size": ("BATCH_SIZE", lambda v: v is None or (_is_int(v) and v >= 1)),
    "carry_header_baseline": (
        "CARRY_HEADER_BASELINE",
        lambda v: isinstance(v, bool),
    ),
    "max_column_width": (
        "MAX_COLUMN_WIDTH",
        lambda v: v is None or (_is_int(v) and v >= 0),
    ),
    "accent_color": ("ACCENT_COLOR", lambda v: isinstance(v, str)),
    "null_value": ("NULL_VALUE", lambda v: isinstance(v, str)),
    "color": ("COLOR", lambda v: isinstance(v, bool)),
}


def default_config():
    return {
        "MAX_WIDTH": MAX_WIDTH_DEFAULT,
        "HEADER_INTERVAL": HEADER_INTERVAL_DEFAULT,
        "SHOW_HEADER": SHOW_HEADER_DEFAULT,
        "BATCH_SIZE": BATCH_SIZE_DEFAULT,
        "CARRY_HEADER_BASELINE": CARRY_HEADER_BASELINE_DEFAULT,
        "MAX_COLUMN_WIDTH": MAX_COLUMN_WIDTH_DEFAULT,
        "ACCENT_COLOR": ACCENT_COLOR_DEFAULT,
        "NULL_VALUE": NULL_VALUE_DEFAULT,
        "COLOR": COLOR_DEFAULT,
    }


def load_config():
    cfg = default_config()

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        log.warning("Ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    table = data.get("table") if isinstance(data, dict) else None
    if not isinstance(table, dict):
        return cfg

    for name, value in table.items():
        entry = _TABLE_KEYS.get(name)
        if entry is None:
            log.warning("Unknown table setting %r in %s", name, CONFIG_JSON)
            continue
        key, valid = entry
        if not valid(value):
            log.warning("Ignoring invalid value %r for %r", value, name)
            continue
        cfg[key] = value

    return cfg
