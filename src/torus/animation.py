"""Angle bookkeeping and the frame loop that drives the renderer."""

from __future__ import annotations

import math
import time
from typing import Callable, Iterator, Optional, Protocol

from .config import AnimationSettings
from .engine import Canvas


class FrameRenderer(Protocol):
    def render(self, alpha: float, beta: float, width: int, height: int) -> Canvas:
        ...


class FrameSink(Protocol):
    def draw(self, canvas: Canvas) -> None:
        ...


def wrap_angle(angle: float) -> float:
    """Keep an accumulated angle inside [0, 2*pi)."""

    if not math.isfinite(angle) or angle >= math.tau:
        return 0.0
    if angle < 0.0:
        wrapped = angle % math.tau
        return 0.0 if wrapped >= math.tau else wrapped
    return angle


class AnimationDriver:
    """Owns the two rotation angles and turns them into an endless frame stream."""

    def __init__(
        self,
        renderer: FrameRenderer,
        settings: Optional[AnimationSettings] = None,
        *,
        alpha: float = 0.0,
        beta: float = 0.0,
    ) -> None:
        self.renderer = renderer
        self.settings = settings if settings is not None else AnimationSettings()
        self._alpha = wrap_angle(alpha)
        self._beta = wrap_angle(beta)
        self._alpha_rate = self.settings.alpha_rate
        self._beta_rate = self.settings.beta_rate
        self._frame_count = 0

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def advance(self) -> None:
        self._alpha = wrap_angle(self._alpha + self._alpha_rate)
        self._beta = wrap_angle(self._beta + self._beta_rate)

    def next_frame(self) -> Canvas:
        settings = self.settings
        canvas = self.renderer.render(
            self._alpha, self._beta, settings.canvas_width, settings.canvas_height
        )
        self._frame_count += 1
        self.advance()
        return canvas.padded(settings.padding)

    def frames(self) -> Iterator[Canvas]:
        while True:
            yield self.next_frame()

    def __iter__(self) -> Iterator[Canvas]:
        return self.frames()


def run(
    driver: AnimationDriver,
    sink: FrameSink,
    *,
    frame_limit: int = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Present frames until ``frame_limit`` is reached (0 runs forever)."""

    delay = driver.settings.frame_delay
    presented = 0
    for canvas in driver.frames():
        sink.draw(canvas)
        presented += 1
        if frame_limit and presented >= frame_limit:
            break
        if delay > 0:
            sleep(delay)
    return presented
