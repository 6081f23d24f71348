"""Core math and rasterisation for the spinning ASCII torus."""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .config import BLANK_GLYPH, GLYPH_RAMP, ProjectionMode, RenderSettings

# Depths at or below this are treated as touching (or behind) the camera.
_MIN_DEPTH = 1e-9

# Luminance scale for the standard 12-glyph ramp; other ramps scale proportionally.
_LUMINANCE_SCALE = 8.0


@dataclass(frozen=True, slots=True)
class SurfaceSample:
    """One (theta, phi) position on the torus with its trigonometry cached."""

    theta: float
    phi: float
    sin_theta: float
    cos_theta: float
    sin_phi: float
    cos_phi: float

    @classmethod
    def at(cls, theta: float, phi: float) -> "SurfaceSample":
        return cls(theta, phi, math.sin(theta), math.cos(theta), math.sin(phi), math.cos(phi))


@dataclass(frozen=True, slots=True)
class ViewAngles:
    sin_alpha: float
    cos_alpha: float
    sin_beta: float
    cos_beta: float

    @classmethod
    def from_angles(cls, alpha: float, beta: float) -> "ViewAngles":
        return cls(math.sin(alpha), math.cos(alpha), math.sin(beta), math.cos(beta))


@dataclass(frozen=True, slots=True)
class SurfacePoint:
    """A sample in camera space: screen-right, screen-up, distance and light."""

    horizontal: float
    vertical: float
    depth: float
    luminance: float


def _sweep(spacing: float) -> List[float]:
    count = math.ceil(math.tau / spacing)
    return [i * spacing for i in range(count) if i * spacing < math.tau]


def surface_samples(settings: RenderSettings) -> Tuple[SurfaceSample, ...]:
    """Return the dense (theta, phi) mesh in theta-major order."""

    phis = _sweep(settings.phi_spacing)
    return tuple(
        SurfaceSample.at(theta, phi)
        for theta in _sweep(settings.theta_spacing)
        for phi in phis
    )


class ProjectionStrategy:
    """Rotates a surface sample by the viewing angles into camera space."""

    mode: ProjectionMode

    def transform(
        self, sample: SurfaceSample, view: ViewAngles, settings: RenderSettings
    ) -> SurfacePoint:
        raise NotImplementedError


class CameraAlongZ(ProjectionStrategy):
    """Ring swept around the y axis, then Rx(alpha) and Rz(beta) combined.

    The camera looks down +z; light comes from above and behind the viewer
    along (0, 1, -1).
    """

    mode = ProjectionMode.A

    @staticmethod
    def _rotate(
        u: float, v: float, sample: SurfaceSample, view: ViewAngles
    ) -> Tuple[float, float, float]:
        tilted = view.cos_alpha * v + view.sin_alpha * sample.sin_theta * u
        x = view.cos_beta * sample.cos_theta * u - view.sin_beta * tilted
        y = view.sin_beta * sample.cos_theta * u + view.cos_beta * tilted
        z = view.sin_alpha * v - view.cos_alpha * sample.sin_theta * u
        return x, y, z

    def transform(
        self, sample: SurfaceSample, view: ViewAngles, settings: RenderSettings
    ) -> SurfacePoint:
        circle_x = settings.ring_radius + settings.tube_radius * sample.cos_phi
        circle_y = settings.tube_radius * sample.sin_phi
        x, y, z = self._rotate(circle_x, circle_y, sample, view)
        _, ny, nz = self._rotate(sample.cos_phi, sample.sin_phi, sample, view)
        return SurfacePoint(x, y, z + settings.camera_distance, ny - nz)


class CameraAlongY(ProjectionStrategy):
    """Ring swept around the z axis, rotated by Rx(alpha) and then Rz(beta).

    The camera looks down +y with z pointing up the screen; light comes from
    above and behind the viewer along (0, -1, 1).
    """

    mode = ProjectionMode.B

    @staticmethod
    def _rotate(
        u: float, v: float, sample: SurfaceSample, view: ViewAngles
    ) -> Tuple[float, float, float]:
        x0 = u * sample.cos_theta
        y0 = u * sample.sin_theta
        y1 = view.cos_alpha * y0 - view.sin_alpha * v
        z1 = view.sin_alpha * y0 + view.cos_alpha * v
        x = view.cos_beta * x0 - view.sin_beta * y1
        y = view.sin_beta * x0 + view.cos_beta * y1
        return x, y, z1

    def transform(
        self, sample: SurfaceSample, view: ViewAngles, settings: RenderSettings
    ) -> SurfacePoint:
        circle_x = settings.ring_radius + settings.tube_radius * sample.cos_phi
        circle_y = settings.tube_radius * sample.sin_phi
        x, y, z = self._rotate(circle_x, circle_y, sample, view)
        _, ny, nz = self._rotate(sample.cos_phi, sample.sin_phi, sample, view)
        return SurfacePoint(x, z, y + settings.camera_distance, nz - ny)


_STRATEGIES: Dict[ProjectionMode, ProjectionStrategy] = {
    ProjectionMode.A: CameraAlongZ(),
    ProjectionMode.B: CameraAlongY(),
}


def projection_for(mode: ProjectionMode) -> ProjectionStrategy:
    try:
        return _STRATEGIES[mode]
    except KeyError as exc:  # pragma: no cover - enum is exhaustive
        raise ValueError(f"Unknown projection mode '{mode}'") from exc


def camera_scale(settings: RenderSettings, height: int) -> float:
    """Scale factor that makes the torus span three quarters of ``height``."""

    return settings.camera_distance * (0.75 * height) / settings.outer_radius


def glyph_index(luminance: float, ramp_length: int = 12) -> int:
    scale = _LUMINANCE_SCALE * ramp_length / len(GLYPH_RAMP)
    index = math.floor(luminance * scale)
    return max(0, min(ramp_length - 1, index))


@dataclass(frozen=True, slots=True)
class Canvas:
    """A finished frame: ``height`` rows of ``width`` glyphs, row-major."""

    width: int
    height: int
    glyphs: Tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.glyphs) != self.width * self.height:
            raise ValueError(
                f"Canvas expects {self.width * self.height} glyphs, got {len(self.glyphs)}"
            )

    @classmethod
    def blank(cls, width: int, height: int) -> "Canvas":
        return cls(width, height, (BLANK_GLYPH,) * (width * height))

    def cell(self, row: int, col: int) -> str:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) outside {self.width}x{self.height} canvas")
        return self.glyphs[row * self.width + col]

    def rows(self) -> List[str]:
        width = self.width
        return ["".join(self.glyphs[start:start + width]) for start in range(0, width * self.height, width)]

    def lit_cells(self) -> int:
        return sum(1 for glyph in self.glyphs if glyph != BLANK_GLYPH)

    def padded(self, margin: int) -> "Canvas":
        """Surround the frame with ``margin`` blank rows and ``2 * margin`` blank columns."""

        if margin <= 0:
            return self
        side = BLANK_GLYPH * (2 * margin)
        width = self.width + 4 * margin
        blank_row = BLANK_GLYPH * width
        lines = [blank_row] * margin
        lines.extend(side + row + side for row in self.rows())
        lines.extend([blank_row] * margin)
        return Canvas(width, self.height + 2 * margin, tuple("".join(lines)))

    def __str__(self) -> str:
        return "\n".join(self.rows())


class FrameBuffer:
    """Glyph grid and depth buffer for a single frame, always written together."""

    __slots__ = ("width", "height", "skipped", "_glyphs", "_depth")

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.skipped = 0
        self._glyphs: List[str] = [BLANK_GLYPH] * (width * height)
        self._depth: List[float] = [0.0] * (width * height)

    def plot(self, row: int, col: int, visibility: float, glyph: str) -> bool:
        index = row * self.width + col
        # Strictly greater: the first point seen at a given depth is kept.
        if visibility > self._depth[index]:
            self._depth[index] = visibility
            self._glyphs[index] = glyph
            return True
        return False

    def depth_at(self, row: int, col: int) -> float:
        return self._depth[row * self.width + col]

    def to_canvas(self) -> Canvas:
        return Canvas(self.width, self.height, tuple(self._glyphs))


class TorusRenderer:
    """Samples, rotates, projects and shades a torus into a character canvas."""

    def __init__(self, settings: Optional[RenderSettings] = None) -> None:
        self.settings = settings if settings is not None else RenderSettings()
        self._projection = projection_for(self.settings.mode)
        self._samples = surface_samples(self.settings)

    @property
    def samples(self) -> Tuple[SurfaceSample, ...]:
        return self._samples

    @property
    def mode(self) -> ProjectionMode:
        return self._projection.mode

    def render(self, alpha: float, beta: float, width: int, height: int) -> Canvas:
        return self.rasterize(alpha, beta, width, height).to_canvas()

    def rasterize(
        self,
        alpha: float,
        beta: float,
        width: int,
        height: int,
        samples: Optional[Iterable[SurfaceSample]] = None,
    ) -> FrameBuffer:
        """Run the sampling loop and return the populated frame buffer.

        ``samples`` overrides the cached mesh (and its order). Samples that
        land outside the canvas or at/behind the camera are skipped and
        counted in ``FrameBuffer.skipped``.
        """

        if width < 1 or height < 1:
            raise ValueError("Canvas width and height must be positive")

        settings = self.settings
        transform = self._projection.transform
        view = ViewAngles.from_angles(alpha, beta)
        scale = camera_scale(settings, height)
        half_width = width / 2.0
        half_height = height / 2.0
        ramp = settings.glyph_ramp
        ramp_length = len(ramp)

        frame = FrameBuffer(width, height)
        plot = frame.plot
        for sample in self._samples if samples is None else samples:
            point = transform(sample, view, settings)
            if not point.depth > _MIN_DEPTH:
                frame.skipped += 1
                continue

            ooz = 1.0 / point.depth
            col = math.floor(half_width + ooz * scale * point.horizontal)
            # Halved vertically: terminal cells are about twice as tall as wide.
            row = math.floor(half_height - ooz * scale * point.vertical / 2.0)
            if not (0 <= col < width and 0 <= row < height):
                frame.skipped += 1
                continue

            plot(row, col, ooz, ramp[glyph_index(point.luminance, ramp_length)])

        return frame


@functools.lru_cache(maxsize=8)
def _renderer_for(settings: RenderSettings) -> TorusRenderer:
    return TorusRenderer(settings)


def render(
    alpha: float,
    beta: float,
    width: int,
    height: int,
    settings: Optional[RenderSettings] = None,
) -> Canvas:
    """Render one frame with the given (or default) settings."""

    return _renderer_for(settings if settings is not None else RenderSettings()).render(
        alpha, beta, width, height
    )
