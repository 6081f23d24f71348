"""Immutable settings shared by the renderer, the animation driver and the CLI."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import List

GLYPH_RAMP = ".,-~:;=!*#$@"
BLANK_GLYPH = " "


class ProjectionMode(enum.Enum):
    """Which rotation composition and camera axis the renderer uses."""

    A = "A"  # camera looks along z
    B = "B"  # camera looks along y


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """Geometry, camera and sampling constants for one torus renderer."""

    tube_radius: float = 1.0
    ring_radius: float = 2.0
    camera_distance: float = 5.0
    theta_spacing: float = 0.02
    phi_spacing: float = 0.05
    glyph_ramp: str = GLYPH_RAMP
    mode: ProjectionMode = ProjectionMode.A

    def __post_init__(self) -> None:
        if self.tube_radius <= 0 or self.ring_radius <= 0:
            raise ValueError("Torus radii must be positive")
        if self.camera_distance <= 0:
            raise ValueError("Camera distance must be positive")
        if self.theta_spacing <= 0 or self.phi_spacing <= 0:
            raise ValueError("Sampling spacing must be positive")
        if not self.glyph_ramp:
            raise ValueError("Glyph ramp requires at least one glyph")

    @property
    def outer_radius(self) -> float:
        return self.tube_radius + self.ring_radius


@dataclass(frozen=True, slots=True)
class AnimationSettings:
    """Per-frame angular speeds and canvas framing for the animation driver.

    Speeds are expressed in radians per ``frames_per_speed_unit`` frames, so
    the default horizontal speed of 5.0 advances beta by 0.1 rad per frame.
    """

    horizontal_speed: float = 5.0
    vertical_speed: float = 0.5
    padding: int = 1
    size: int = 14
    frames_per_speed_unit: float = 50.0
    frame_delay: float = 0.010

    def __post_init__(self) -> None:
        if self.frames_per_speed_unit <= 0:
            raise ValueError("frames_per_speed_unit must be positive")
        if self.size < 1:
            raise ValueError("Canvas size must be at least 1")
        if self.padding < 0:
            raise ValueError("Canvas padding cannot be negative")

    @property
    def alpha_rate(self) -> float:
        return self.vertical_speed / self.frames_per_speed_unit

    @property
    def beta_rate(self) -> float:
        return self.horizontal_speed / self.frames_per_speed_unit

    @property
    def canvas_height(self) -> int:
        return 2 * self.size + 1

    @property
    def canvas_width(self) -> int:
        # Terminal cells are roughly twice as tall as they are wide.
        return 2 * self.canvas_height


def geometry_warnings(settings: RenderSettings, width: int, height: int) -> List[str]:
    """Describe why frames rendered at ``width`` x ``height`` would be degraded.

    Nothing here is fatal: the renderer skips any sample that cannot be
    plotted, so these only explain visible gaps ahead of time.
    """

    warnings: List[str] = []
    if height < 2:
        warnings.append(f"Canvas height {height} is below the minimum of 2 rows")
    if settings.tube_radius >= settings.ring_radius:
        warnings.append(
            f"Tube radius {settings.tube_radius:g} is not smaller than ring radius "
            f"{settings.ring_radius:g}; the torus will self-intersect"
        )

    outer = settings.outer_radius
    distance = settings.camera_distance
    if outer >= distance:
        warnings.append(
            f"Torus outer radius {outer:g} reaches the camera at distance {distance:g}; "
            "points behind the camera are skipped"
        )
        return warnings

    # Largest |coordinate / depth| of any point within ``outer`` of the centre.
    max_slope = outer / math.sqrt(distance * distance - outer * outer)
    scale = distance * (0.75 * height) / outer
    half_extent_x = scale * max_slope
    half_extent_y = half_extent_x / 2.0
    if half_extent_x >= width / 2.0:
        warnings.append(
            f"Canvas width {width} is too narrow for height {height}; "
            f"at least {math.ceil(2.0 * half_extent_x) + 1} columns are needed to avoid clipping"
        )
    if half_extent_y >= height / 2.0:
        warnings.append(f"Canvas height {height} clips the torus vertically")
    return warnings
