"""Tests for petal mesh assembly."""

import numpy as np
import pytest

from flower.config import FlowerConfig
from flower.curve import sample_curve
from flower.mesh import PetalMesh, assemble_mesh, build_petal_mesh
from flower.mirror import mirror_triangles, reflect_y
from flower.triangulate import signed_area, triangulate_strip


class TestBuildPetalMesh:
    @pytest.mark.parametrize("steps", [2, 3, 5, 16])
    def test_buffer_sizes(self, steps):
        mesh = build_petal_mesh(FlowerConfig(distance_steps=steps))
        assert mesh.triangle_count == 4 * (steps - 1)
        assert mesh.vertex_count == 12 * (steps - 1)
        assert len(mesh.positions) == 12 * (steps - 1) * 3
        assert len(mesh.normals) == len(mesh.positions)
        assert len(mesh.positions) % 9 == 0

    def test_default_has_sixteen_triangles(self):
        mesh = build_petal_mesh()
        assert mesh.triangle_count == 16
        assert mesh.vertex_count == 48

    def test_float32_output(self):
        mesh = build_petal_mesh()
        assert mesh.positions.dtype == np.float32
        assert mesh.normals.dtype == np.float32

    def test_normals_all_up(self):
        mesh = build_petal_mesh(FlowerConfig(distance_steps=7))
        normals = mesh.normals.reshape(-1, 3)
        assert np.all(normals == np.array([0.0, 0.0, 1.0], dtype=np.float32))

    def test_planar(self):
        mesh = build_petal_mesh(FlowerConfig(distance_steps=9))
        assert np.all(mesh.positions.reshape(-1, 3)[:, 2] == 0.0)

    def test_winding_counter_clockwise(self):
        mesh = build_petal_mesh(FlowerConfig(number_of_petals=7, distance_steps=10))
        areas = signed_area(mesh.triangles())
        # Only the two triangles touching the root collapse to zero area
        assert np.all(areas >= 0)
        assert np.count_nonzero(areas == 0) == 2
        assert np.all(areas[areas != 0] > 0)

    def test_mirror_symmetry(self):
        mesh = build_petal_mesh(FlowerConfig(distance_steps=6))
        tris = mesh.triangles()
        half = mesh.triangle_count // 2
        top, bottom = tris[:half], tris[half:]
        for t, b in zip(top, bottom):
            for vertex in b:
                mirrored = reflect_y(vertex)
                assert np.any(np.all(np.isclose(t, mirrored), axis=-1))

    def test_symmetric_about_baseline(self):
        mesh = build_petal_mesh()
        y = mesh.positions.reshape(-1, 3)[:, 1]
        assert y.max() == pytest.approx(-y.min())

    def test_buffers_read_only(self):
        mesh = build_petal_mesh()
        with pytest.raises(ValueError):
            mesh.positions[0] = 1.0
        with pytest.raises(ValueError):
            mesh.normals[0] = 1.0

    def test_no_negative_zero(self):
        mesh = build_petal_mesh()
        assert not np.any(np.signbit(mesh.positions) & (mesh.positions == 0))


class TestAssembleMesh:
    def test_top_then_bottom(self):
        top = triangulate_strip(sample_curve(distance_steps=3))
        bottom = mirror_triangles(top)
        mesh = assemble_mesh(top, bottom)
        np.testing.assert_allclose(mesh.triangles()[:len(top)], top, atol=1e-7)
        np.testing.assert_allclose(mesh.triangles()[len(top):], bottom, atol=1e-7)


class TestToIndexed:
    def test_shapes(self):
        mesh = build_petal_mesh()
        vertices, normals, faces = mesh.to_indexed()
        assert vertices.shape[1] == 3
        assert normals.shape == vertices.shape
        assert faces.shape == (mesh.triangle_count, 3)
        assert faces.dtype == np.int32

    def test_vertices_merged(self):
        mesh = build_petal_mesh(FlowerConfig(distance_steps=5))
        vertices, _, faces = mesh.to_indexed()
        # Root shared by baseline and edge, then baseline plus upper and lower edge per step
        assert len(vertices) == 1 + 3 * 4
        assert faces.min() >= 0
        assert faces.max() < len(vertices)

    def test_preserves_triangles_and_winding(self):
        mesh = build_petal_mesh(FlowerConfig(distance_steps=4))
        vertices, _, faces = mesh.to_indexed()
        np.testing.assert_array_equal(vertices[faces], mesh.triangles())

    def test_normals_up(self):
        _, normals, _ = build_petal_mesh().to_indexed()
        np.testing.assert_array_equal(normals, np.tile([0.0, 0.0, 1.0], (len(normals), 1)))


class TestTaperWinding:
    @pytest.mark.parametrize("config", [
        FlowerConfig(number_of_petals=1, distance_steps=12),
        FlowerConfig(number_of_petals=2, distance_steps=8, taper_scale=0.0, taper_floor=1.0),
        FlowerConfig(number_of_petals=3, distance_steps=20, taper_exponent=2.0, taper_scale=1.5, taper_floor=0.1),
    ])
    def test_valid_tapers_wind_counter_clockwise(self, config):
        mesh = build_petal_mesh(config)
        assert np.all(np.isfinite(mesh.positions))
        areas = signed_area(mesh.triangles())
        assert np.count_nonzero(areas == 0) == 2
        assert np.all(areas[areas != 0] > 0)
