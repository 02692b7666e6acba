# render.py
# Order of a frame: background, worm segments (head -> tail), invader, present.
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from .config import (
    PAUSED_BG, PLAYING_BG, OVER_BG, WORM, INVADER,
    SPRITE_BODY_HORIZONTAL, SPRITE_INVADER, SPRITE_SAND,
)
from .game import Coord, GameState, World

Color = Tuple[int, int, int]


# ---------- Draw commands ----------
@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class Clear:
    color: Color


@dataclass(frozen=True)
class FillRect:
    dst: Rect
    color: Color


@dataclass(frozen=True)
class CopyTexture:
    src: Rect   # region of the sprite sheet
    dst: Rect


@dataclass(frozen=True)
class Present:
    pass


DrawCommand = Union[Clear, FillRect, CopyTexture, Present]

# One background per game state
BACKGROUNDS: Dict[GameState, Color] = {
    GameState.PAUSED: PAUSED_BG,
    GameState.PLAYING: PLAYING_BG,
    GameState.OVER: OVER_BG,
}


def background_for(state: GameState) -> Clear:
    return Clear(BACKGROUNDS[state])


# ---------- Renderer ----------
class SceneRenderer:
    def __init__(self, cell_px: int, use_sprites: bool = False):
        if cell_px <= 0:
            raise ValueError(f"cell_px must be positive, got {cell_px}")
        self.cell_px = cell_px
        self.use_sprites = use_sprites

    def cell_rect(self, c: Coord) -> Rect:
        """Grid cell -> destination pixel rectangle."""
        return Rect(c.x * self.cell_px, c.y * self.cell_px, self.cell_px, self.cell_px)

    def _sprite_rect(self, offset: Tuple[int, int]) -> Rect:
        return Rect(offset[0], offset[1], self.cell_px, self.cell_px)

    def _cell(self, c: Coord, color: Color, sprite: Tuple[int, int]) -> DrawCommand:
        if self.use_sprites:
            return CopyTexture(self._sprite_rect(sprite), self.cell_rect(c))
        return FillRect(self.cell_rect(c), color)

    def sand_tiles(self, world: World) -> List[DrawCommand]:
        """One sand tile per drawn grid cell, row by row."""
        src = self._sprite_rect(SPRITE_SAND)
        return [
            CopyTexture(src, self.cell_rect(Coord(x, y)))
            for y in range(world.grid_h)
            for x in range(world.grid_w)
        ]

    def render(self, world: World) -> List[DrawCommand]:
        commands: List[DrawCommand] = [background_for(world.state)]
        # with a sprite sheet the playing field is tiled with sand
        if self.use_sprites and world.state is GameState.PLAYING:
            commands.extend(self.sand_tiles(world))
        for segment in world.worm:
            commands.append(self._cell(segment, WORM, SPRITE_BODY_HORIZONTAL))
        commands.append(self._cell(world.invader, INVADER, SPRITE_INVADER))
        commands.append(Present())
        return commands
