"""Command line entry point for the spinning ASCII torus."""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .torus.animation import AnimationDriver, run as run_animation
from .torus.config import AnimationSettings, ProjectionMode, RenderSettings, geometry_warnings
from .torus.engine import TorusRenderer
from .torus.terminal import TerminalController

_DEFAULT_RENDER = RenderSettings()
_DEFAULT_ANIMATION = AnimationSettings()


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spinning shaded torus for your terminal")
    parser.add_argument(
        "--horizontal-speed",
        type=float,
        default=_DEFAULT_ANIMATION.horizontal_speed,
        help=f"Horizontal rotation speed (default: {_DEFAULT_ANIMATION.horizontal_speed:g})",
    )
    parser.add_argument(
        "--vertical-speed",
        type=float,
        default=_DEFAULT_ANIMATION.vertical_speed,
        help=f"Vertical rotation speed (default: {_DEFAULT_ANIMATION.vertical_speed:g})",
    )
    parser.add_argument(
        "--padding",
        type=int,
        default=_DEFAULT_ANIMATION.padding,
        help=f"Blank border around the canvas (default: {_DEFAULT_ANIMATION.padding})",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=_DEFAULT_ANIMATION.size,
        help=f"Canvas half-height in rows (default: {_DEFAULT_ANIMATION.size})",
    )
    parser.add_argument(
        "--r1",
        type=float,
        default=_DEFAULT_RENDER.tube_radius,
        help=f"Tube (minor) radius (default: {_DEFAULT_RENDER.tube_radius:g})",
    )
    parser.add_argument(
        "--r2",
        type=float,
        default=_DEFAULT_RENDER.ring_radius,
        help=f"Ring (major) radius (default: {_DEFAULT_RENDER.ring_radius:g})",
    )
    parser.add_argument(
        "--mode",
        type=str.upper,
        default=_DEFAULT_RENDER.mode.value,
        choices=[mode.value for mode in ProjectionMode],
        help="Projection mode: A looks along z, B looks along y (default: A)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=_DEFAULT_ANIMATION.frame_delay * 1000.0,
        help="Pause between frames in milliseconds (default: 10)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=0,
        help="Run for a fixed number of frames (0 = infinite)",
    )
    return parser.parse_args(argv)


@dataclass
class RuntimeConfig:
    controller: TerminalController
    render: RenderSettings
    animation: AnimationSettings
    frame_limit: int
    warnings: List[str]


def _finite_or_default(value: float, default: float, label: str, warnings: List[str]) -> float:
    if math.isfinite(value):
        return value
    warnings.append(f"{label} {value} is not a finite number; using {default:g}")
    return default


def _setup_runtime(args: argparse.Namespace) -> RuntimeConfig:
    warnings: List[str] = []

    padding = args.padding
    if padding < 0:
        warnings.append(f"Padding {padding} is negative; using 0")
        padding = 0

    size = args.size
    if size < 1:
        warnings.append(f"Size {size} is below 1; using 1")
        size = 1

    horizontal_speed = _finite_or_default(
        args.horizontal_speed, _DEFAULT_ANIMATION.horizontal_speed, "Horizontal speed", warnings
    )
    vertical_speed = _finite_or_default(
        args.vertical_speed, _DEFAULT_ANIMATION.vertical_speed, "Vertical speed", warnings
    )

    delay_ms = _finite_or_default(args.delay, _DEFAULT_ANIMATION.frame_delay * 1000.0, "Delay", warnings)
    if delay_ms < 0:
        warnings.append(f"Delay {delay_ms:g} ms is negative; using 0")
        delay_ms = 0.0

    tube_radius = _finite_or_default(args.r1, _DEFAULT_RENDER.tube_radius, "Tube radius", warnings)
    ring_radius = _finite_or_default(args.r2, _DEFAULT_RENDER.ring_radius, "Ring radius", warnings)
    if tube_radius <= 0:
        warnings.append(f"Tube radius {tube_radius:g} is not positive; using {_DEFAULT_RENDER.tube_radius:g}")
        tube_radius = _DEFAULT_RENDER.tube_radius

    if ring_radius <= 0:
        warnings.append(f"Ring radius {ring_radius:g} is not positive; using {_DEFAULT_RENDER.ring_radius:g}")
        ring_radius = _DEFAULT_RENDER.ring_radius

    frame_limit = max(0, args.frames)

    render = RenderSettings(
        tube_radius=tube_radius,
        ring_radius=ring_radius,
        mode=ProjectionMode(args.mode),
    )
    animation = AnimationSettings(
        horizontal_speed=horizontal_speed,
        vertical_speed=vertical_speed,
        padding=padding,
        size=size,
        frame_delay=delay_ms / 1000.0,
    )
    warnings.extend(geometry_warnings(render, animation.canvas_width, animation.canvas_height))

    controller = TerminalController()
    columns, lines = controller.size_tuple()
    needed_columns = animation.canvas_width + 4 * padding
    needed_lines = animation.canvas_height + 2 * padding
    if needed_columns > columns or needed_lines > lines:
        warnings.append(
            f"Canvas {needed_columns}x{needed_lines} does not fit the terminal ({columns}x{lines}); "
            "lower --size or --padding"
        )

    return RuntimeConfig(
        controller=controller,
        render=render,
        animation=animation,
        frame_limit=frame_limit,
        warnings=warnings,
    )


def _emit_warnings(warnings: Sequence[str]) -> None:
    if not warnings:
        return
    for warning in warnings:
        sys.stderr.write(f"[torus] {warning}\n")
    sys.stderr.flush()


def _run_loop(config: RuntimeConfig) -> int:
    driver = AnimationDriver(TorusRenderer(config.render), config.animation)
    controller = config.controller
    with controller as terminal:
        try:
            return run_animation(driver, terminal, frame_limit=config.frame_limit)
        except KeyboardInterrupt:  # pragma: no cover - interactive loop
            controller.restore()
            sys.stdout.write("\nInterrupted. Bye!\n")
            sys.stdout.flush()
            return driver.frame_count


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    config = _setup_runtime(args)
    _emit_warnings(config.warnings)
    return _run_loop(config)


def main() -> None:
    run()


if __name__ == "__main__":
    main()
