# surface.py
from typing import Callable, Iterable, Optional

import pygame  # type: ignore

from .config import Config, WINDOW_TITLE
from .render import Clear, CopyTexture, DrawCommand, FillRect, Present, Rect


class SurfaceInitError(RuntimeError):
    """Window, display or asset setup failed; the game cannot start."""


def _to_pygame(r: Rect) -> pygame.Rect:
    return pygame.Rect(r.x, r.y, r.w, r.h)


def open_window(cfg: Config) -> pygame.Surface:
    try:
        pygame.init()
        screen = pygame.display.set_mode(cfg.window_size)
        pygame.display.set_caption(WINDOW_TITLE)
    except pygame.error as e:
        raise SurfaceInitError(f"could not open a {cfg.window_size[0]}x{cfg.window_size[1]} window: {e}") from e
    return screen


def load_sprites(path: str) -> pygame.Surface:
    try:
        sheet = pygame.image.load(path)
    except (pygame.error, FileNotFoundError) as e:
        raise SurfaceInitError(f"could not load sprite sheet {path!r}: {e}") from e
    # convert_alpha needs a display mode; off-screen surfaces keep the raw image
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        sheet = sheet.convert_alpha()
    return sheet


class PygameSurface:
    """Executes draw commands against a pygame surface."""

    def __init__(
        self,
        screen: pygame.Surface,
        sprites: Optional[pygame.Surface] = None,
        present: Callable[[], None] = pygame.display.flip,
    ):
        self.screen = screen
        self.sprites = sprites
        self._present = present

    def execute(self, commands: Iterable[DrawCommand]) -> None:
        for cmd in commands:
            if isinstance(cmd, Clear):
                self.screen.fill(cmd.color)
            elif isinstance(cmd, FillRect):
                pygame.draw.rect(self.screen, cmd.color, _to_pygame(cmd.dst))
            elif isinstance(cmd, CopyTexture):
                if self.sprites is None:
                    raise ValueError("CopyTexture issued but no sprite sheet is loaded")
                self.screen.blit(self.sprites, _to_pygame(cmd.dst), area=_to_pygame(cmd.src))
            elif isinstance(cmd, Present):
                self._present()
            else:
                raise TypeError(f"Unknown draw command: {cmd!r}")
