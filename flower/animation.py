"""Per-frame rotation of the flower instances."""

import math
import time
from typing import Callable, Optional

from flower.config import check_angular_velocity
from flower.instances import Instance

DEFAULT_ANGULAR_VELOCITY = 1.0 / 5000.0  # radians per millisecond


def advance(instances: list[Instance], dt_ms: float, angular_velocity: float = DEFAULT_ANGULAR_VELOCITY):
    """Add dt_ms * angular_velocity to every instance's rotation.

    All instances turn at the same rate, so their relative offsets (the
    shape of the flower) never change.
    """
    if not math.isfinite(dt_ms) or dt_ms < 0:
        raise ValueError(f"dt_ms must be finite and >= 0, got {dt_ms}")
    delta = dt_ms * angular_velocity
    for inst in instances:
        inst.rotation_z += delta


class AnimationDriver:
    """Owns the single write to instance rotations each frame.

    Usage:
        driver = AnimationDriver(flower.instances)
        # Each frame, with that frame's elapsed time:
        driver.update(dt_ms)
    """

    def __init__(self, instances: list[Instance], angular_velocity: float = DEFAULT_ANGULAR_VELOCITY):
        check_angular_velocity(angular_velocity)
        self.instances = instances
        self.angular_velocity = angular_velocity
        self.elapsed_ms = 0.0
        self.last_dt_ms = 0.0

    def update(self, dt_ms: float):
        """Apply one frame's elapsed time. Must be called once per frame."""
        advance(self.instances, dt_ms, self.angular_velocity)
        self.elapsed_ms += dt_ms
        self.last_dt_ms = dt_ms


def perf_clock_ms() -> float:
    return time.perf_counter() * 1000.0


class FrameLoop:
    """Update-then-render loop with an explicit stop signal.

    The elapsed time of each frame is measured from the injected clock and
    kept on the loop, not in module state. stop() may be called from inside
    render; the loop exits before the next frame.
    """

    def __init__(
        self,
        driver: AnimationDriver,
        render: Callable[[], None],
        clock: Callable[[], float] = perf_clock_ms,
    ):
        self.driver = driver
        self.render = render
        self.clock = clock
        self.running = False
        self.frame_count = 0

    def stop(self):
        self.running = False

    def run(self, max_frames: Optional[int] = None) -> int:
        """Run frames until stop() is called or max_frames is reached.

        Returns:
            Number of frames run by this call
        """
        self.running = True
        frames = 0
        try:
            last = self.clock()

            while self.running and (max_frames is None or frames < max_frames):
                now = self.clock()
                # A clock that went backwards counts as no time passing
                dt_ms = max(0.0, now - last)
                last = now

                self.driver.update(dt_ms)
                self.render()

                frames += 1
                self.frame_count += 1
        finally:
            self.running = False
        return frames
