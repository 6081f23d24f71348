"""Spinning, shaded ASCII torus for the terminal."""

from .animation import AnimationDriver, run, wrap_angle
from .config import GLYPH_RAMP, AnimationSettings, ProjectionMode, RenderSettings
from .engine import Canvas, FrameBuffer, TorusRenderer, glyph_index, render
from .terminal import TerminalController

__all__ = [
    "AnimationDriver",
    "AnimationSettings",
    "Canvas",
    "FrameBuffer",
    "GLYPH_RAMP",
    "ProjectionMode",
    "RenderSettings",
    "TerminalController",
    "TorusRenderer",
    "glyph_index",
    "render",
    "run",
    "wrap_angle",
]
