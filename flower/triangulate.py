"""Triangulation of the curve samples into the upper half of a petal."""

import numpy as np

from flower.curve import CurveSamples


def signed_area(triangles: np.ndarray) -> np.ndarray:
    """Signed area of each triangle projected onto the XY plane.

    Positive means counter-clockwise when viewed from +Z (front-facing).

    Args:
        triangles: (M, 3, 3) or (3, 3) vertex positions

    Returns:
        (M,) signed areas, or a scalar for a single triangle
    """
    tri = np.asarray(triangles, dtype=np.float64)
    e01 = tri[..., 1, :2] - tri[..., 0, :2]
    e02 = tri[..., 2, :2] - tri[..., 0, :2]
    return 0.5 * (e01[..., 0] * e02[..., 1] - e01[..., 1] * e02[..., 0])


def triangulate_strip(samples: CurveSamples) -> np.ndarray:
    """Split each quad between consecutive samples into two triangles.

    For samples i and i + 1 the quad is (base_i, edge_i, edge_i+1, base_i+1).
    Vertex order is chosen so both triangles wind counter-clockwise seen
    from +Z:

        A = (base_i+1, edge_i, base_i)
        B = (edge_i, base_i+1, edge_i+1)

    Args:
        samples: Output of sample_curve

    Returns:
        (2 * (N - 1), 3, 3) triangles, A and B for each step in order
    """
    base, edge = samples.baseline, samples.edge

    tri_a = np.stack([base[1:], edge[:-1], base[:-1]], axis=1)
    tri_b = np.stack([edge[:-1], base[1:], edge[1:]], axis=1)

    # Interleave so each step contributes A then B
    triangles = np.stack([tri_a, tri_b], axis=1).reshape(-1, 3, 3)
    return triangles
