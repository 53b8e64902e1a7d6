"""Tests for the OpenGL petal renderer that need no GL context."""

from flower.config import FlowerConfig
from flower.instances import build_flower
from viewer.petal_renderer import PetalRenderer


class TestPetalRenderer:
    def test_construct_without_gl(self):
        flower = build_flower(FlowerConfig(number_of_petals=3))
        renderer = PetalRenderer(flower)
        assert renderer.flower is flower
        assert renderer._display_lists == {}
