"""Parameters for procedural flower generation and animation."""

import math
import numbers
from collections.abc import Sequence
from dataclasses import dataclass


class InvalidConfiguration(ValueError):
    """Raised when a flower configuration cannot produce valid geometry."""


def check_count(name: str, value, minimum: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidConfiguration(f"{name} must be >= {minimum}, got {value}")


def check_counts(number_of_petals, distance_steps):
    """Fail fast on petal/step counts that would give degenerate geometry."""
    check_count("number_of_petals", number_of_petals, 1)
    check_count("distance_steps", distance_steps, 2)


def check_angular_velocity(angular_velocity):
    if not isinstance(angular_velocity, numbers.Real) or isinstance(angular_velocity, bool):
        raise InvalidConfiguration(f"angular_velocity must be a number, got {angular_velocity!r}")
    if not math.isfinite(angular_velocity) or angular_velocity < 0:
        raise InvalidConfiguration(
            f"angular_velocity must be finite and >= 0, got {angular_velocity}"
        )


def check_taper(number_of_petals: int, taper_exponent: float, taper_scale: float, taper_floor: float):
    """Reject tapers that would put the edge on or below the baseline.

    The edge angle is (pi / number_of_petals) * factor, with factor equal to
    taper_floor + taper_scale at the root and taper_floor at the tip. With a
    positive exponent and a non-negative scale the angle shrinks from root
    to tip, so checking both ends bounds every sample. The root sample sits
    at the origin, so an angle of exactly pi is allowed there as long as the
    next samples are narrower.
    """
    for name, value in (
        ("taper_exponent", taper_exponent),
        ("taper_scale", taper_scale),
        ("taper_floor", taper_floor),
    ):
        if not math.isfinite(value):
            raise InvalidConfiguration(f"{name} must be finite, got {value}")

    if taper_exponent <= 0:
        raise InvalidConfiguration(f"taper_exponent must be > 0, got {taper_exponent}")
    if taper_scale < 0:
        raise InvalidConfiguration(f"taper_scale must be >= 0, got {taper_scale}")

    half_angle = math.pi / number_of_petals
    tip_angle = half_angle * taper_floor
    root_angle = half_angle * (taper_floor + taper_scale)

    if tip_angle <= 0:
        raise InvalidConfiguration(
            f"taper_floor must give a positive edge angle at the tip, got {taper_floor}"
        )
    # Tolerance for a factor of 1.0 assembled from floor + scale
    if root_angle > math.pi * (1.0 + 1e-12) or (root_angle >= math.pi and taper_scale == 0):
        raise InvalidConfiguration(
            f"edge angle must stay below pi, got {root_angle:.4f} at the root"
        )


@dataclass
class FlowerConfig:
    # Geometry
    number_of_petals: int = 5
    distance_steps: int = 5  # samples along the petal, root and tip included

    # Petal silhouette: (1 - d) ** taper_exponent * taper_scale + taper_floor
    taper_exponent: float = 0.5
    taper_scale: float = 0.6
    taper_floor: float = 0.4  # angle factor at the tip

    # Animation
    angular_velocity: float = 1.0 / 5000.0  # radians per millisecond

    # Shared appearance
    color: tuple = (0.0, 1.0, 0.0)

    def __post_init__(self):
        self.validate()

    def validate(self):
        check_counts(self.number_of_petals, self.distance_steps)
        check_taper(self.number_of_petals, self.taper_exponent, self.taper_scale, self.taper_floor)
        check_angular_velocity(self.angular_velocity)

        if (
            not isinstance(self.color, Sequence)
            or isinstance(self.color, str)
            or len(self.color) != 3
            or any(isinstance(c, bool) or not isinstance(c, numbers.Real) for c in self.color)
            or any(not 0.0 <= c <= 1.0 for c in self.color)
        ):
            raise InvalidConfiguration(f"color must be 3 components in [0, 1], got {self.color!r}")
