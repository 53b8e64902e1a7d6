"""Reflection of the upper half of a petal across its baseline."""

import numpy as np


def reflect_y(points: np.ndarray) -> np.ndarray:
    """Map (x, y, z) to (x, -y, z)."""
    reflected = np.array(points, dtype=np.float64, copy=True)
    reflected[..., 1] = -reflected[..., 1]
    return reflected


def mirror_triangles(top: np.ndarray) -> np.ndarray:
    """Build the lower half of the petal from its upper half.

    Reflection flips each triangle's winding, so the vertex order is
    reversed afterwards to keep every triangle counter-clockwise from +Z.
    Triangle k of the result is the mirror image of triangle k of top.

    Args:
        top: (M, 3, 3) upper-half triangles

    Returns:
        (M, 3, 3) lower-half triangles
    """
    return reflect_y(top)[:, ::-1, :].copy()
