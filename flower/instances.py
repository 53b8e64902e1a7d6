"""Rotated instances of one shared petal mesh.

Meshes and appearances live in tables owned by the Flower; an Instance
only stores handles into those tables plus its own rotation, so every
petal draws the same geometry without copying it.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from flower.config import FlowerConfig, check_count
from flower.mesh import PetalMesh, build_petal_mesh


@dataclass(frozen=True)
class Appearance:
    color: tuple = (0.0, 1.0, 0.0)


@dataclass
class Instance:
    mesh_handle: int
    appearance_handle: int
    rotation_z: float = 0.0  # radians


@dataclass
class Flower:
    """Resource tables plus the instances referencing them."""

    meshes: list = field(default_factory=list)
    appearances: list = field(default_factory=list)
    instances: list = field(default_factory=list)

    def add_mesh(self, mesh: PetalMesh) -> int:
        self.meshes.append(mesh)
        return len(self.meshes) - 1

    def add_appearance(self, appearance: Appearance) -> int:
        self.appearances.append(appearance)
        return len(self.appearances) - 1

    def mesh_for(self, instance: Instance) -> PetalMesh:
        return self.meshes[instance.mesh_handle]

    def appearance_for(self, instance: Instance) -> Appearance:
        return self.appearances[instance.appearance_handle]

    def rotations(self) -> list[float]:
        return [inst.rotation_z for inst in self.instances]

    def instance_positions(self, index: int) -> np.ndarray:
        """World-space (M, 3, 3) triangles of one instance.

        Computed on the fly; the shared mesh buffers are not touched.
        """
        instance = self.instances[index]
        tris = self.mesh_for(instance).triangles().astype(np.float64)
        rot = model_matrix(instance.rotation_z)[:3, :3]
        return tris @ rot.T


def model_matrix(rotation_z: float) -> np.ndarray:
    """4x4 rotation about +Z by rotation_z radians."""
    c = math.cos(rotation_z)
    s = math.sin(rotation_z)
    mat = np.eye(4)
    mat[0, 0] = c
    mat[0, 1] = -s
    mat[1, 0] = s
    mat[1, 1] = c
    return mat


def arrange_instances(
    flower: Flower,
    mesh_handle: int,
    appearance_handle: int,
    number_of_petals: int,
) -> list[Instance]:
    """Add number_of_petals instances spread evenly around the center.

    Instance i starts at rotation 2 * pi * i / number_of_petals.
    """
    check_count("number_of_petals", number_of_petals, 1)
    if not 0 <= mesh_handle < len(flower.meshes):
        raise IndexError(f"unknown mesh handle {mesh_handle}")
    if not 0 <= appearance_handle < len(flower.appearances):
        raise IndexError(f"unknown appearance handle {appearance_handle}")

    created = []
    for i in range(number_of_petals):
        progression = i / number_of_petals
        created.append(Instance(
            mesh_handle=mesh_handle,
            appearance_handle=appearance_handle,
            rotation_z=2.0 * math.pi * progression,
        ))
    flower.instances.extend(created)
    return created


def build_flower(config: Optional[FlowerConfig] = None) -> Flower:
    """Build the petal mesh once and arrange the petals around it."""
    if config is None:
        config = FlowerConfig()

    mesh = build_petal_mesh(config)

    flower = Flower()
    mesh_handle = flower.add_mesh(mesh)
    appearance_handle = flower.add_appearance(Appearance(color=tuple(config.color)))
    arrange_instances(flower, mesh_handle, appearance_handle, config.number_of_petals)
    return flower
