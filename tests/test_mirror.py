"""Tests for mirroring the upper half of the petal."""

import numpy as np

from flower.curve import sample_curve
from flower.mirror import mirror_triangles, reflect_y
from flower.triangulate import signed_area, triangulate_strip


class TestReflectY:
    def test_negates_y_only(self):
        p = np.array([[1.0, 2.0, 3.0]])
        np.testing.assert_allclose(reflect_y(p), [[1.0, -2.0, 3.0]])

    def test_does_not_modify_input(self):
        p = np.array([[1.0, 2.0, 3.0]])
        reflect_y(p)
        np.testing.assert_allclose(p, [[1.0, 2.0, 3.0]])


class TestMirrorTriangles:
    def setup_method(self):
        self.top = triangulate_strip(sample_curve(distance_steps=5, number_of_petals=5))
        self.bottom = mirror_triangles(self.top)

    def test_same_count(self):
        assert self.bottom.shape == self.top.shape

    def test_reversed_reflection(self):
        for t, b in zip(self.top, self.bottom):
            np.testing.assert_allclose(b[0], reflect_y(t[2]))
            np.testing.assert_allclose(b[1], reflect_y(t[1]))
            np.testing.assert_allclose(b[2], reflect_y(t[0]))

    def test_lower_half(self):
        assert np.all(self.bottom[..., 1] <= 0)

    def test_winding_preserved(self):
        np.testing.assert_allclose(signed_area(self.bottom), signed_area(self.top))

    def test_plain_reflection_flips_winding(self):
        reflected = reflect_y(self.top)
        np.testing.assert_allclose(signed_area(reflected), -signed_area(self.top))
