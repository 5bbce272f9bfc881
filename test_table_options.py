import pytest

import config_paths
from table_options import TableOptions


@pytest.mark.parametrize(
    "header_interval, batch_size, expected",
    [
        (100, None, 100),
        (0, None, 50),
        (3, None, 3),
        (0, 7, 7),
        (100, 10, 10),
    ],
)
def test_resolved_batch_size(header_interval, batch_size, expected):
    opts = TableOptions(header_interval=header_interval, batch_size=batch_size)

    assert opts.resolved_batch_size() == expected


def test_line_width_reserves_borders():
    assert TableOptions(max_width=80).line_width == 76


@pytest.mark.parametrize("max_width, expected", [(0, None), (3, 0), (4, 0), (5, 1)])
def test_line_width_on_narrow_terminals(max_width, expected):
    assert TableOptions(max_width=max_width).line_width == expected


def test_from_config_defaults_match_dataclass():
    assert TableOptions.from_config(config_paths.default_config()) == TableOptions()


def test_from_config_overrides_win_unless_none():
    cfg = config_paths.default_config()
    cfg["MAX_WIDTH"] = 120
    cfg["ACCENT_COLOR"] = "blue"

    opts = TableOptions.from_config(cfg, max_width=None, accent_color="green", color=False)

    assert opts.max_width == 120
    assert opts.accent_color == "green"
    assert opts.color is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_width": -1},
        {"header_interval": -1},
        {"batch_size": 0},
        {"max_column_width": -5},
        {"accent_color": "chartreuse"},
    ],
)
def test_invalid_options_raise(kwargs):
    with pytest.raises(ValueError):
        TableOptions(**kwargs)


def test_unknown_override_raises():
    with pytest.raises(TypeError):
        TableOptions.from_config({}, colour=True)
