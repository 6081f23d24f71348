import itertools
import math
import unittest
from typing import List, Tuple

from src.torus.animation import AnimationDriver, run, wrap_angle
from src.torus.config import AnimationSettings
from src.torus.engine import Canvas, TorusRenderer


class RecordingRenderer:
    """Stands in for TorusRenderer and remembers the angles it was given."""

    def __init__(self) -> None:
        self.calls: List[Tuple[float, float, int, int]] = []

    def render(self, alpha: float, beta: float, width: int, height: int) -> Canvas:
        self.calls.append((alpha, beta, width, height))
        return Canvas.blank(width, height)


class RecordingSink:
    def __init__(self) -> None:
        self.frames: List[Canvas] = []

    def draw(self, canvas: Canvas) -> None:
        self.frames.append(canvas)


class WrapAngleTests(unittest.TestCase):
    def test_full_turn_resets_to_zero(self) -> None:
        self.assertEqual(wrap_angle(math.tau), 0.0)
        self.assertEqual(wrap_angle(math.tau + 0.3), 0.0)

    def test_angle_in_range_untouched(self) -> None:
        self.assertEqual(wrap_angle(0.0), 0.0)
        self.assertEqual(wrap_angle(3.0), 3.0)

    def test_negative_angle_brought_into_range(self) -> None:
        self.assertAlmostEqual(wrap_angle(-0.5), math.tau - 0.5)
        wrapped = wrap_angle(-1e-20)
        self.assertGreaterEqual(wrapped, 0.0)
        self.assertLess(wrapped, math.tau)

    def test_non_finite_angle_resets_to_zero(self) -> None:
        self.assertEqual(wrap_angle(float("nan")), 0.0)
        self.assertEqual(wrap_angle(float("inf")), 0.0)
        self.assertEqual(wrap_angle(float("-inf")), 0.0)


class AnimationDriverTests(unittest.TestCase):
    def test_angles_wrap_on_the_step_they_pass_full_turn(self) -> None:
        settings = AnimationSettings(horizontal_speed=100.0, vertical_speed=60.0, frames_per_speed_unit=50.0)
        driver = AnimationDriver(RecordingRenderer(), settings)
        for _ in range(25):
            alpha, beta = driver.alpha, driver.beta
            driver.advance()
            if alpha + settings.alpha_rate >= math.tau:
                self.assertEqual(driver.alpha, 0.0)
            else:
                self.assertEqual(driver.alpha, alpha + settings.alpha_rate)
            if beta + settings.beta_rate >= math.tau:
                self.assertEqual(driver.beta, 0.0)
            else:
                self.assertEqual(driver.beta, beta + settings.beta_rate)
            self.assertTrue(0.0 <= driver.alpha < math.tau)
            self.assertTrue(0.0 <= driver.beta < math.tau)

    def test_non_finite_speed_keeps_angles_in_range(self) -> None:
        settings = AnimationSettings(horizontal_speed=float("inf"), vertical_speed=float("nan"))
        driver = AnimationDriver(RecordingRenderer(), settings, alpha=float("nan"))
        for _ in range(3):
            driver.advance()
            self.assertTrue(0.0 <= driver.alpha < math.tau)
            self.assertTrue(0.0 <= driver.beta < math.tau)

    def test_initial_angles_are_wrapped(self) -> None:
        driver = AnimationDriver(RecordingRenderer(), alpha=7.0, beta=-1.0)
        self.assertEqual(driver.alpha, 0.0)
        self.assertAlmostEqual(driver.beta, math.tau - 1.0)

    def test_renderer_receives_current_angles_then_driver_advances(self) -> None:
        renderer = RecordingRenderer()
        settings = AnimationSettings(horizontal_speed=5.0, vertical_speed=0.5, padding=0, size=3)
        driver = AnimationDriver(renderer, settings)
        list(itertools.islice(driver.frames(), 3))
        self.assertEqual(
            [(call[0], call[1]) for call in renderer.calls],
            [(0.0, 0.0), (0.01, 0.1), (0.01 + 0.01, 0.1 + 0.1)],
        )
        self.assertEqual(renderer.calls[0][2:], (14, 7))
        self.assertEqual(driver.frame_count, 3)

    def test_frames_are_padded(self) -> None:
        settings = AnimationSettings(padding=2, size=3)
        frame = next(iter(AnimationDriver(RecordingRenderer(), settings)))
        self.assertEqual(frame.width, settings.canvas_width + 8)
        self.assertEqual(frame.height, settings.canvas_height + 4)

    def test_zero_speed_repeats_identical_frames(self) -> None:
        settings = AnimationSettings(horizontal_speed=0.0, vertical_speed=0.0, size=6)
        driver = AnimationDriver(TorusRenderer(), settings, alpha=0.8, beta=0.3)
        frames = list(itertools.islice(driver.frames(), 4))
        self.assertGreater(frames[0].lit_cells(), 0)
        for frame in frames[1:]:
            self.assertEqual(frame, frames[0])
        self.assertEqual((driver.alpha, driver.beta), (0.8, 0.3))

    def test_default_canvas_is_58_by_29(self) -> None:
        settings = AnimationSettings()
        self.assertEqual((settings.canvas_width, settings.canvas_height), (58, 29))
        self.assertAlmostEqual(settings.beta_rate, 0.1)
        self.assertAlmostEqual(settings.alpha_rate, 0.01)


class RunLoopTests(unittest.TestCase):
    def test_run_stops_at_frame_limit_and_paces(self) -> None:
        pauses: List[float] = []
        sink = RecordingSink()
        settings = AnimationSettings(size=2, frame_delay=0.01)
        presented = run(AnimationDriver(RecordingRenderer(), settings), sink, frame_limit=3, sleep=pauses.append)
        self.assertEqual(presented, 3)
        self.assertEqual(len(sink.frames), 3)
        self.assertEqual(pauses, [0.01, 0.01])

    def test_run_without_delay_never_sleeps(self) -> None:
        pauses: List[float] = []
        settings = AnimationSettings(size=2, frame_delay=0.0)
        run(AnimationDriver(RecordingRenderer(), settings), RecordingSink(), frame_limit=2, sleep=pauses.append)
        self.assertEqual(pauses, [])


if __name__ == "__main__":
    unittest.main()
