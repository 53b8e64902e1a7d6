"""Assembly of the petal triangles into flat render buffers.

The petal is strictly planar for now: every vertex lies at z = 0 and every
normal is +Z. Giving the petal some elevation would be a transform applied
on top of these buffers.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from flower.config import FlowerConfig
from flower.curve import sample_curve
from flower.mirror import mirror_triangles
from flower.triangulate import triangulate_strip

UP = np.array([0.0, 0.0, 1.0], dtype=np.float32)


@dataclass(frozen=True, eq=False)
class PetalMesh:
    """Non-indexed triangle mesh of one petal.

    Attributes:
        positions: (9 * M,) float32, three xyz vertices per triangle
        normals: (9 * M,) float32, one xyz normal per vertex
    """

    positions: np.ndarray
    normals: np.ndarray

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.positions) // 9

    def triangles(self) -> np.ndarray:
        """(M, 3, 3) read-only view of the position buffer."""
        return self.positions.reshape(-1, 3, 3)

    def to_indexed(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Merge duplicated vertices into an indexed representation.

        Face order and the vertex order inside each face are kept, so the
        winding is unchanged.

        Returns:
            vertices: (V, 3) float32 unique positions, in first-use order
            normals: (V, 3) float32
            faces: (M, 3) int32 vertex indices
        """
        points = self.positions.reshape(-1, 3)
        normals = self.normals.reshape(-1, 3)

        index_of = {}
        unique = []
        unique_normals = []
        indices = np.empty(len(points), dtype=np.int32)
        for i, (p, n) in enumerate(zip(points, normals)):
            key = (tuple(p.tolist()), tuple(n.tolist()))
            if key not in index_of:
                index_of[key] = len(unique)
                unique.append(p)
                unique_normals.append(n)
            indices[i] = index_of[key]

        vertices = np.array(unique, dtype=np.float32).reshape(-1, 3)
        vertex_normals = np.array(unique_normals, dtype=np.float32).reshape(-1, 3)
        return vertices, vertex_normals, indices.reshape(-1, 3)


def assemble_mesh(top: np.ndarray, bottom: np.ndarray) -> PetalMesh:
    """Flatten the upper and lower halves into one PetalMesh.

    Args:
        top: (M, 3, 3) upper-half triangles
        bottom: (M, 3, 3) lower-half triangles

    Returns:
        PetalMesh with the top triangles first, then the bottom ones
    """
    triangles = np.concatenate([top, bottom], axis=0)

    # + 0.0 folds the -0.0 produced by mirroring the baseline
    positions = (triangles.reshape(-1).astype(np.float32)) + np.float32(0.0)
    normals = np.tile(UP, len(positions) // 3)

    positions.flags.writeable = False
    normals.flags.writeable = False
    return PetalMesh(positions=positions, normals=normals)


def build_petal_mesh(config: Optional[FlowerConfig] = None) -> PetalMesh:
    """Run the full pipeline: sample, triangulate, mirror, assemble."""
    if config is None:
        config = FlowerConfig()
    config.validate()

    samples = sample_curve(
        config.distance_steps,
        config.number_of_petals,
        taper_exponent=config.taper_exponent,
        taper_scale=config.taper_scale,
        taper_floor=config.taper_floor,
    )
    top = triangulate_strip(samples)
    bottom = mirror_triangles(top)
    return assemble_mesh(top, bottom)
