# main.py
import argparse
import sys
import time
from typing import Callable, Iterable, List, Optional

import pygame  # type: ignore

from .config import Config, CFG
from .controls import Intent, apply_intents, intents_from_events
from .game import GameState, World, new_world, tick
from .render import SceneRenderer
from .surface import PygameSurface, SurfaceInitError, load_sprites, open_window


def hold_final_frame(
    poll: Callable[[], Iterable[pygame.event.Event]],
    cfg: Config,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Wait out game_over_delay_s in frame-sized slices, leaving early on quit."""
    remaining_ms = round(cfg.game_over_delay_s * 1000)
    slice_ms = cfg.frame_delay_ms or remaining_ms
    while remaining_ms > 0:
        if Intent.QUIT in intents_from_events(poll()):
            print("[SANDWORM] Quit.")
            return 0
        step = min(slice_ms, remaining_ms)
        sleep(step / 1000)
        remaining_ms -= step
    return 0


def run_loop(
    world: World,
    renderer: SceneRenderer,
    surface: PygameSurface,
    poll: Callable[[], Iterable[pygame.event.Event]],
    cfg: Config,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Cooperative frame loop. Input is read and a frame drawn every iteration;
    the simulation only advances every cfg.frames_per_tick frames.
    Returns the process exit code.
    """
    frames = 0
    while True:
        # Last frame is already on screen: hold it, then leave
        if world.state is GameState.OVER:
            print(f"[SANDWORM] Game over. length={len(world.worm)}, invaders={world.score}")
            return hold_final_frame(poll, cfg, sleep)

        # 1) input
        before = world.state
        if not apply_intents(world, intents_from_events(poll())):
            print("[SANDWORM] Quit.")
            return 0
        if world.state is not before:
            print(f"[SANDWORM] {world.state.value}")

        # 2) update
        if frames == 0:
            tick(world)
        frames = (frames + 1) % cfg.frames_per_tick

        # 3) render
        surface.execute(renderer.render(world))
        sleep(cfg.frame_delay_ms / 1000)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Steer the sandworm, eat the invaders, avoid walls and yourself.")
    parser.add_argument("--grid-w", type=int, default=CFG.grid_w, help="grid width in cells")
    parser.add_argument("--grid-h", type=int, default=CFG.grid_h, help="grid height in cells")
    parser.add_argument("--cell-px", type=int, default=CFG.cell_px, help="pixel size of one cell")
    parser.add_argument(
        "--frames-per-tick",
        type=int,
        default=CFG.frames_per_tick,
        help="rendered frames per simulation step",
    )
    parser.add_argument("--frame-delay-ms", type=int, default=CFG.frame_delay_ms, help="sleep between frames")
    parser.add_argument(
        "--game-over-delay",
        type=float,
        default=CFG.game_over_delay_s,
        help="seconds the final frame stays up after a crash",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for invader placement")
    parser.add_argument(
        "--strict-bounds",
        action="store_true",
        help="end the game as soon as the head leaves the drawn field "
             "(default lets it travel one extra column/row)",
    )
    parser.add_argument("--sprites", type=str, default=None, help="path to a sprite sheet (PNG)")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        grid_w=args.grid_w,
        grid_h=args.grid_h,
        cell_px=args.cell_px,
        frames_per_tick=args.frames_per_tick,
        frame_delay_ms=args.frame_delay_ms,
        game_over_delay_s=args.game_over_delay,
        seed=args.seed,
        strict_bounds=args.strict_bounds,
        sprites=args.sprites,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        cfg = config_from_args(args)
    except ValueError as e:
        print(f"[SANDWORM] Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        screen = open_window(cfg)
        sprites = load_sprites(cfg.sprites) if cfg.sprites else None
    except SurfaceInitError as e:
        print(f"[SANDWORM] {e}", file=sys.stderr)
        pygame.quit()
        return 1

    world = new_world(cfg)
    renderer = SceneRenderer(cfg.cell_px, use_sprites=sprites is not None)
    surface = PygameSurface(screen, sprites)
    print(f"[SANDWORM] {cfg.grid_w}x{cfg.grid_h} grid, press Escape or P to start")

    try:
        return run_loop(world, renderer, surface, pygame.event.get, cfg)
    finally:
        pygame.quit()


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
