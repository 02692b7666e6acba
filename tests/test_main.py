from collections import deque

import pygame  # type: ignore
import pytest

from src.sandworm import main as main_mod
from src.sandworm.config import Config, OVER_BG
from src.sandworm.game import Coord, Direction, GameState, new_world
from src.sandworm.render import Clear, SceneRenderer
from src.sandworm.surface import SurfaceInitError


class RecordingSurface:
    def __init__(self):
        self.frames = []

    def execute(self, commands):
        self.frames.append(list(commands))


class ScriptedPoll:
    """Hands out one batch of events per frame, then a quit."""

    def __init__(self, batches):
        self.batches = deque(batches)

    def __call__(self):
        if self.batches:
            return self.batches.popleft()
        return [pygame.event.Event(pygame.QUIT)]


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


@pytest.fixture
def sleeps():
    return []


def test_quit_before_first_frame(sleeps):
    cfg = Config(seed=0)
    world = new_world(cfg)
    surface = RecordingSurface()
    code = main_mod.run_loop(world, SceneRenderer(cfg.cell_px), surface, ScriptedPoll([]), cfg, sleeps.append)
    assert code == 0
    assert surface.frames == []
    assert sleeps == []


def test_simulation_advances_every_nth_frame(sleeps):
    cfg = Config(seed=0, frames_per_tick=3, frame_delay_ms=50)
    world = new_world(cfg)
    surface = RecordingSurface()
    poll = ScriptedPoll([[key(pygame.K_ESCAPE)]] + [[] for _ in range(6)])
    code = main_mod.run_loop(world, SceneRenderer(cfg.cell_px), surface, poll, cfg, sleeps.append)
    assert code == 0
    # frames 0, 3 and 6 tick
    assert len(surface.frames) == 7
    assert world.head == (6, 1)
    assert sleeps == [0.05] * 7


def test_paused_game_is_rendered_but_not_advanced(sleeps):
    cfg = Config(seed=0, frames_per_tick=1)
    world = new_world(cfg)
    surface = RecordingSurface()
    main_mod.run_loop(world, SceneRenderer(cfg.cell_px), surface, ScriptedPoll([[], [], []]), cfg, sleeps.append)
    assert len(surface.frames) == 3
    assert list(world.worm) == [(3, 1), (2, 1), (1, 1)]


def doomed_world(cfg):
    world = new_world(cfg)
    world.state = GameState.PLAYING
    world.worm = deque([Coord(0, 5), Coord(1, 5), Coord(2, 5)])
    world.direction = world.pending = Direction.LEFT
    return world


def test_game_over_holds_last_frame_then_exits(sleeps):
    cfg = Config(seed=0, frames_per_tick=1, frame_delay_ms=200, game_over_delay_s=1)
    world = doomed_world(cfg)
    surface = RecordingSurface()
    poll = ScriptedPoll([[] for _ in range(10)])

    code = main_mod.run_loop(world, SceneRenderer(cfg.cell_px), surface, poll, cfg, sleeps.append)

    assert code == 0
    assert world.state is GameState.OVER
    assert len(surface.frames) == 1
    assert surface.frames[-1][0] == Clear(OVER_BG)
    # one frame, then the hold in 200 ms slices
    assert sleeps == [0.2] * 6
    assert len(poll.batches) == 10 - 6


def test_quit_during_game_over_hold_ends_it(sleeps):
    cfg = Config(seed=0, frames_per_tick=1, frame_delay_ms=200, game_over_delay_s=10)
    world = doomed_world(cfg)
    surface = RecordingSurface()
    # crash frame, two quiet hold slices, then the window is closed
    poll = ScriptedPoll([[], [], [], [pygame.event.Event(pygame.QUIT)]])

    code = main_mod.run_loop(world, SceneRenderer(cfg.cell_px), surface, poll, cfg, sleeps.append)

    assert code == 0
    assert sleeps == [0.2, 0.2, 0.2]
    assert sum(sleeps) < cfg.game_over_delay_s


def test_hold_without_frame_delay_sleeps_once(sleeps):
    cfg = Config(seed=0, frame_delay_ms=0, game_over_delay_s=3)
    assert main_mod.hold_final_frame(ScriptedPoll([[]]), cfg, sleeps.append) == 0
    assert sleeps == [3]


def test_default_pace_is_one_tick_per_200ms(sleeps):
    cfg = Config(seed=0)
    world = new_world(cfg)
    world.state = GameState.PLAYING
    poll = ScriptedPoll([[] for _ in range(20)])
    main_mod.run_loop(world, SceneRenderer(cfg.cell_px), RecordingSurface(), poll, cfg, sleeps.append)
    # 20 frames at the default pace -> two ticks
    assert world.head == (5, 1)
    assert sum(sleeps) / 2 == pytest.approx(0.2)


def test_parse_args_builds_config():
    cfg = main_mod.config_from_args(main_mod.parse_args(
        ["--grid-w", "20", "--grid-h", "15", "--cell-px", "8", "--seed", "3", "--strict-bounds"]
    ))
    assert (cfg.grid_w, cfg.grid_h, cfg.cell_px, cfg.seed) == (20, 15, 8, 3)
    assert cfg.strict_bounds is True
    assert cfg.window_size == (160, 120)


def test_defaults_match_config():
    cfg = main_mod.config_from_args(main_mod.parse_args([]))
    assert cfg == Config()


def test_invalid_config_exit_code(capsys):
    assert main_mod.main(["--grid-w", "2"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_init_failure_exit_code(monkeypatch, capsys):
    def broken(cfg):
        raise SurfaceInitError("no display")

    monkeypatch.setattr(main_mod, "open_window", broken)
    assert main_mod.main([]) == 1
    assert "no display" in capsys.readouterr().err
