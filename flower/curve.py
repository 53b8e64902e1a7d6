"""Sampling of the curved outer edge of a single petal.

The petal is built along the +X axis. Each sample pairs a point on the
symmetry axis (the baseline) with a point on the curved edge above it:

                             --------x---------
          ---------x-----------------|------------------x
    x-----------------|-----------------|------------------|
    x-----------------x-----------------x------------------x
    ^ d = 0                                                ^ d = 1

The lower row is the baseline, the upper row the edge. The edge is later
mirrored across the baseline to close the petal.
"""

from dataclasses import dataclass

import numpy as np

from flower.config import check_counts, check_taper


@dataclass(frozen=True, eq=False)
class CurveSamples:
    """Ordered curve samples, root (d = 0) first.

    Attributes:
        distances: (N,) normalized distance from the root, in [0, 1]
        baseline: (N, 3) points on the symmetry axis
        edge: (N, 3) points on the curved outer edge
    """

    distances: np.ndarray
    baseline: np.ndarray
    edge: np.ndarray

    def __len__(self) -> int:
        return len(self.distances)

    def __iter__(self):
        for i in range(len(self)):
            yield self.baseline[i], self.edge[i]


def angle_factor(
    d,
    taper_exponent: float = 0.5,
    taper_scale: float = 0.6,
    taper_floor: float = 0.4,
):
    """Taper coefficient of the petal's angular width at distance d.

    Equals taper_scale + taper_floor at the root and taper_floor at the tip
    (1.0 and 0.4 with the defaults).
    """
    return np.power(1.0 - np.asarray(d, dtype=np.float64), taper_exponent) * taper_scale + taper_floor


def sample_curve(
    distance_steps: int = 5,
    number_of_petals: int = 5,
    taper_exponent: float = 0.5,
    taper_scale: float = 0.6,
    taper_floor: float = 0.4,
) -> CurveSamples:
    """Sample the petal outline at evenly spaced distances from the root.

    Args:
        distance_steps: Number of samples, >= 2
        number_of_petals: Petals sharing the full circle, >= 1

    Returns:
        CurveSamples with read-only arrays
    """
    check_counts(number_of_petals, distance_steps)
    check_taper(number_of_petals, taper_exponent, taper_scale, taper_floor)

    d = np.arange(distance_steps, dtype=np.float64) / (distance_steps - 1)
    half_angle = np.pi / number_of_petals
    theta = half_angle * angle_factor(d, taper_exponent, taper_scale, taper_floor)

    zeros = np.zeros_like(d)
    baseline = np.stack([d, zeros, zeros], axis=-1)
    edge = np.stack([d * np.cos(theta), d * np.sin(theta), zeros], axis=-1)

    for arr in (d, baseline, edge):
        arr.flags.writeable = False
    return CurveSamples(distances=d, baseline=baseline, edge=edge)
