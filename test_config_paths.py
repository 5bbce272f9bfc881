import json
import tempfile
from pathlib import Path

import config_paths


def _load_with(cfg_path: Path):
    orig_dir = config_paths.CONFIG_DIR
    orig_json = config_paths.CONFIG_JSON
    try:
        config_paths.CONFIG_DIR = str(cfg_path.parent)
        config_paths.CONFIG_JSON = str(cfg_path)
        return config_paths.load_config()
    finally:
        config_paths.CONFIG_DIR = orig_dir
        config_paths.CONFIG_JSON = orig_json


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load_with(Path(tmp) / "tabstream" / "config.json")

        assert cfg == config_paths.default_config()
        assert cfg["MAX_WIDTH"] == 80
        assert cfg["HEADER_INTERVAL"] == 100
        assert cfg["MAX_COLUMN_WIDTH"] == 70
        assert cfg["BATCH_SIZE"] is None


def test_load_config_reads_json_overrides():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "tabstream"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        cfg_path = cfg_dir / "config.json"
        cfg_path.write_text(
            json.dumps(
                {
                    "table": {
                        "max_width": 120,
                        "header_interval": 0,
                        "show_header": False,
                        "batch_size": 25,
                        "carry_header_baseline": False,
                        "max_column_width": None,
                        "accent_color": "green",
                        "null_value": "",
                    }
                }
            )
        )

        cfg = _load_with(cfg_path)

        assert cfg["MAX_WIDTH"] == 120
        assert cfg["HEADER_INTERVAL"] == 0
        assert cfg["SHOW_HEADER"] is False
        assert cfg["BATCH_SIZE"] == 25
        assert cfg["CARRY_HEADER_BASELINE"] is False
        assert cfg["MAX_COLUMN_WIDTH"] is None
        assert cfg["ACCENT_COLOR"] == "green"
        assert cfg["NULL_VALUE"] == ""
        assert cfg["COLOR"] is True


def test_load_config_skips_invalid_values(caplog):
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text(
            json.dumps(
                {
                    "table": {
                        "max_width": "wide",
                        "header_interval": -3,
                        "show_header": 1,
                        "batch_size": 0,
                        "mystery": True,
                        "null_value": "-",
                    }
                }
            )
        )

        with caplog.at_level("WARNING", logger="config_paths"):
            cfg = _load_with(cfg_path)

        assert cfg["MAX_WIDTH"] == 80
        assert cfg["HEADER_INTERVAL"] == 100
        assert cfg["SHOW_HEADER"] is True
        assert cfg["BATCH_SIZE"] is None
        assert cfg["NULL_VALUE"] == "-"
        assert "mystery" in caplog.text


def test_load_config_falls_back_on_malformed_json(caplog):
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text("{not json")

        with caplog.at_level("WARNING", logger="config_paths"):
            cfg = _load_with(cfg_path)

        assert cfg == config_paths.default_config()
        assert "Ignoring unreadable config" in caplog.text

