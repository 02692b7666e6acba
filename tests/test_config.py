import pytest

from src.sandworm.config import CFG, Config


def test_default_window_matches_grid():
    assert CFG.window_size == (800, 600)
    assert (CFG.grid_w, CFG.grid_h, CFG.cell_px) == (40, 30, 20)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"grid_w": 3},
        {"grid_h": 3},
        {"cell_px": 0},
        {"frames_per_tick": 0},
        {"frame_delay_ms": -1},
        {"game_over_delay_s": -0.5},
    ],
)
def test_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)


def test_default_pace_is_200ms_per_tick():
    cfg = Config()
    assert cfg.frames_per_tick * cfg.frame_delay_ms == 200
    assert cfg.frame_delay_ms <= 50
