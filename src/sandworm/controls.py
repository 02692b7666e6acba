# controls.py
from enum import Enum, auto
from typing import Iterable, List

import pygame  # type: ignore

from .game import Direction, World, set_direction, toggle_pause


class Intent(Enum):
    QUIT = auto()
    PAUSE = auto()
    UP = auto()
    RIGHT = auto()
    DOWN = auto()
    LEFT = auto()


# WASD + arrows steer, Escape / P pause
KEYMAP = {
    pygame.K_w: Intent.UP,     pygame.K_UP: Intent.UP,
    pygame.K_d: Intent.RIGHT,  pygame.K_RIGHT: Intent.RIGHT,
    pygame.K_s: Intent.DOWN,   pygame.K_DOWN: Intent.DOWN,
    pygame.K_a: Intent.LEFT,   pygame.K_LEFT: Intent.LEFT,
    pygame.K_ESCAPE: Intent.PAUSE,
    pygame.K_p: Intent.PAUSE,
}

INTENT_DIRECTION = {
    Intent.UP: Direction.UP,
    Intent.RIGHT: Direction.RIGHT,
    Intent.DOWN: Direction.DOWN,
    Intent.LEFT: Direction.LEFT,
}


def intents_from_events(events: Iterable[pygame.event.Event]) -> List[Intent]:
    """Translate raw pygame events; unmapped keys and other event types are dropped."""
    intents: List[Intent] = []
    for event in events:
        if event.type == pygame.QUIT:
            intents.append(Intent.QUIT)
        elif event.type == pygame.KEYDOWN and event.key in KEYMAP:
            intents.append(KEYMAP[event.key])
    return intents


def apply_intents(world: World, intents: Iterable[Intent]) -> bool:
    """Feed intents to the engine in order. Return False as soon as a quit is seen."""
    for intent in intents:
        if intent is Intent.QUIT:
            return False
        if intent is Intent.PAUSE:
            toggle_pause(world)
        else:
            set_direction(world, INTENT_DIRECTION[intent])
    return True
