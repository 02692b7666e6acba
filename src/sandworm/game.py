# game.py
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, NamedTuple, Optional, Protocol

import numpy as np  # type: ignore

from .config import CFG, Config, SPAWN_INVADER, SPAWN_WORM


# ---------- Value types ----------
class Coord(NamedTuple):
    x: int
    y: int

    def __add__(self, other):  # vector addition, not tuple concatenation
        return Coord(self.x + other[0], self.y + other[1])


class Direction(Enum):
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def delta(self) -> Coord:
        return Coord(*self.value)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class GameState(Enum):
    PAUSED = "paused"
    PLAYING = "playing"
    OVER = "over"


class RandomSource(Protocol):
    """The slice of numpy.random.Generator the engine uses."""

    def integers(self, low: int, high: int): ...


def make_rng(seed: Optional[int] = None) -> RandomSource:
    return np.random.default_rng(seed)


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b


def in_grid(c: Coord, grid_w: int, grid_h: int) -> bool:
    return 0 <= c.x < grid_w and 0 <= c.y < grid_h


# ---------- State ----------
@dataclass
class World:
    worm: Deque[Coord]      # head at index 0
    direction: Direction    # direction of the last committed move
    pending: Direction      # committed at the next tick
    invader: Coord
    state: GameState
    rng: RandomSource = field(repr=False)
    grid_w: int
    grid_h: int
    strict_bounds: bool = False
    score: int = 0          # invaders eaten

    @property
    def head(self) -> Coord:
        return self.worm[0]


def new_world(cfg: Config = CFG, rng: Optional[RandomSource] = None) -> World:
    """
    Fresh paused game: three-segment worm on row 1 heading right and the
    invader at a fixed cell. No randomness is drawn here.
    """
    return World(
        worm=deque(Coord(x, y) for x, y in SPAWN_WORM),
        direction=Direction.RIGHT,
        pending=Direction.RIGHT,
        invader=Coord(*SPAWN_INVADER),
        state=GameState.PAUSED,
        rng=rng if rng is not None else make_rng(cfg.seed),
        grid_w=cfg.grid_w,
        grid_h=cfg.grid_h,
        strict_bounds=cfg.strict_bounds,
    )


# ---------- Helpers ----------
def is_in_bounds(world: World, c: Coord) -> bool:
    """
    Where the head may move. Unless strict_bounds is set, a coordinate equal
    to grid_w / grid_h still counts as inside, so the head can travel one
    column (or row) past the drawn field before the game ends.
    """
    if world.strict_bounds:
        return in_grid(c, world.grid_w, world.grid_h)
    return 0 <= c.x <= world.grid_w and 0 <= c.y <= world.grid_h


def spawn_invader(world: World) -> Coord:
    """
    Rejection-sample a free cell uniformly over the grid.

    Every draw hits a free cell with probability (cells - len(worm)) / cells,
    so as long as one free cell exists the loop ends with probability 1.
    With no free cell it would never return; tick() ends the game before
    calling it in that case (see grid_full).
    """
    while True:
        c = Coord(int(world.rng.integers(0, world.grid_w)), int(world.rng.integers(0, world.grid_h)))
        if c not in world.worm:
            return c


def grid_full(world: World) -> bool:
    """True when the worm covers every cell the invader could be placed on."""
    inside = {s for s in world.worm if in_grid(s, world.grid_w, world.grid_h)}
    return len(inside) >= world.grid_w * world.grid_h


def grow_worm(world: World, vacated: Coord) -> None:
    """
    Add one tail segment, extending the last two segments in a straight line.
    If that cell is off the grid or already part of the worm, the cell the
    tail just left is reused instead; it is always free.
    """
    if len(world.worm) < 2:
        raise ValueError("worm needs at least two segments to grow")
    last, before = world.worm[-1], world.worm[-2]
    candidate = Coord(2 * last.x - before.x, 2 * last.y - before.y)
    if in_grid(candidate, world.grid_w, world.grid_h) and candidate not in world.worm:
        world.worm.append(candidate)
    else:
        world.worm.append(vacated)


# ---------- Intents ----------
def set_direction(world: World, d: Direction) -> bool:
    """Buffer a turn for the next tick. Returns False if it was rejected (180° turn, or game over)."""
    if world.state is GameState.OVER:
        return False
    if is_opposite(d, world.direction):
        return False
    world.pending = d
    return True


def toggle_pause(world: World) -> None:
    if world.state is GameState.PAUSED:
        world.state = GameState.PLAYING
    elif world.state is GameState.PLAYING:
        world.state = GameState.PAUSED


# ---------- Update ----------
def tick(world: World) -> None:
    """
    Advance the worm one cell. Walls and the worm's own body end the game
    (worm left untouched); reaching the invader grows the worm by one and
    relocates the invader. Does nothing unless the game is playing.
    """
    if world.state is not GameState.PLAYING:
        return

    # Commit direction once per tick
    world.direction = world.pending
    next_head = world.head + world.direction.delta

    # Wall collision
    if not is_in_bounds(world, next_head):
        world.state = GameState.OVER
        return

    # Self collision (the current tail counts)
    if next_head in world.worm:
        world.state = GameState.OVER
        return

    vacated = world.worm.pop()
    world.worm.appendleft(next_head)

    if next_head == world.invader:
        grow_worm(world, vacated)
        world.score += 1
        # worm covers the whole grid: nowhere left to put an invader
        if grid_full(world):
            world.state = GameState.OVER
            return
        world.invader = spawn_invader(world)
