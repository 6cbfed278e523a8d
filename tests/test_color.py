"""Tests for garden.color."""

import pytest

from garden.color import BLACK, TRANSPARENT, WHITE, Color


class TestFromHsb:
    def test_primary_hues(self):
        assert Color.from_hsb(0.0, 1.0, 1.0) == Color(1.0, 0.0, 0.0)
        assert Color.from_hsb(1.0 / 3.0, 1.0, 1.0).g == pytest.approx(1.0)

    def test_hue_wraps(self):
        assert Color.from_hsb(1.25, 0.5, 0.5) == Color.from_hsb(0.25, 0.5, 0.5)

    def test_zero_saturation_is_gray(self):
        color = Color.from_hsb(0.7, 0.0, 0.4)
        assert color.r == color.g == color.b == pytest.approx(0.4)

    def test_out_of_range_inputs_clamped(self):
        color = Color.from_hsb(0.1, 2.0, -1.0, alpha=5.0)
        assert color.a == 1.0
        assert (color.r, color.g, color.b) == (0.0, 0.0, 0.0)


class TestColorHelpers:
    def test_with_alpha_and_fade(self):
        assert WHITE.with_alpha(0.25).a == 0.25
        assert WHITE.with_alpha(0.5).fade(0.5).a == pytest.approx(0.25)

    def test_white_level(self):
        assert Color.white(0.5, 0.2) == Color(0.5, 0.5, 0.5, 0.2)

    def test_to_rgba255(self):
        assert BLACK.to_rgba255() == (0, 0, 0, 255)
        assert TRANSPARENT.to_rgba255() == (0, 0, 0, 0)
        assert Color(1.0, 0.5, 0.0, 1.0).to_rgba255() == (255, 128, 0, 255)

    def test_hue_roundtrip_for_vivid_color(self):
        assert Color.from_hsb(0.6, 1.0, 1.0).hue() == pytest.approx(0.6)
