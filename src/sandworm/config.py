from dataclasses import dataclass
from typing import Optional, Tuple

# ----- Grid (how many worm segments fit per x / y) -----
GRID_W, GRID_H = 40, 30
CELL_SIZE = 20

# ----- Pacing -----
FRAMES_PER_TICK = 10
FRAME_DELAY_MS = 20        # 50 fps render, one tick every 200 ms
GAME_OVER_DELAY_S = 10.0

# ----- Spawn -----
SPAWN_WORM = [(3, 1), (2, 1), (1, 1)]   # head first
SPAWN_INVADER = (3, 3)

# ----- Colors -----
PAUSED_BG  = (30, 30, 30)
PLAYING_BG = (194, 154, 92)   # spice sand
OVER_BG    = (0, 0, 0)
WORM       = (0, 0, 255)
INVADER    = (128, 128, 128)

# ----- Sprite atlas (x, y) offsets -----
SPRITE_BODY_HORIZONTAL = (0, 0)
SPRITE_INVADER = (0, 0)
SPRITE_SAND = (0, 20)          # background tile while playing

WINDOW_TITLE = "~~~~~ SANDWORM ~~~~~"


# ----- Tunables (everything the CLI can override) -----
@dataclass
class Config:
    grid_w: int = GRID_W
    grid_h: int = GRID_H
    cell_px: int = CELL_SIZE
    frames_per_tick: int = FRAMES_PER_TICK
    frame_delay_ms: int = FRAME_DELAY_MS
    game_over_delay_s: float = GAME_OVER_DELAY_S
    seed: Optional[int] = None
    strict_bounds: bool = False    # True: the head may not sit on x == grid_w / y == grid_h
    sprites: Optional[str] = None  # path to a sprite sheet, None -> flat colors

    def __post_init__(self):
        # spawn worm spans x 1..3 on row 1, spawn invader sits at (3, 3)
        if self.grid_w < 4 or self.grid_h < 4:
            raise ValueError(f"grid must be at least 4x4, got {self.grid_w}x{self.grid_h}")
        if self.cell_px <= 0:
            raise ValueError(f"cell_px must be positive, got {self.cell_px}")
        if self.frames_per_tick <= 0:
            raise ValueError(f"frames_per_tick must be positive, got {self.frames_per_tick}")
        if self.frame_delay_ms < 0 or self.game_over_delay_s < 0:
            raise ValueError("delays cannot be negative")

    @property
    def window_size(self) -> Tuple[int, int]:
        return self.grid_w * self.cell_px, self.grid_h * self.cell_px


CFG = Config()
