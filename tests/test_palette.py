"""Tests for palettes and their color formulas."""

import pytest

from garden.color import Color
from garden.palette import DEFAULT_PALETTE, SUNSET_BUCKETS, Palette


class TestPaletteCycle:
    def test_enumeration_order(self):
        assert [p.display_name for p in Palette] == ["Pastel", "Sakura", "Neon", "Monochrome", "Sunset"]

    def test_default_is_pastel(self):
        assert DEFAULT_PALETTE is Palette.PASTEL
        assert Palette.PASTEL.index == 0

    def test_next_wraps_around(self):
        assert Palette.SUNSET.next() is Palette.PASTEL
        assert Palette.PASTEL.next() is Palette.SAKURA

    def test_seven_steps_from_first_land_on_third(self):
        palette = Palette.PASTEL
        for _ in range(7):
            palette = palette.next()
        assert palette.index == 2
        assert palette is Palette.NEON

    def test_lookup_by_name(self):
        assert Palette.from_name("sakura") is Palette.SAKURA
        assert Palette.from_name("MONOCHROME") is Palette.MONOCHROME
        with pytest.raises(ValueError):
            Palette.from_name("plaid")


def assert_same_color(actual: Color, expected: Color) -> None:
    assert (actual.r, actual.g, actual.b, actual.a) == pytest.approx(
        (expected.r, expected.g, expected.b, expected.a)
    )


class TestColorForSeed:
    """Each palette has its own mapping from seed to color."""

    def test_pastel_formula(self):
        assert Palette.PASTEL.color_for_seed(0.3) == Color.from_hsb(0.3, 0.4, 0.9)

    def test_neon_formula(self):
        assert Palette.NEON.color_for_seed(0.6) == Color.from_hsb(0.6, 0.8, 1.0)

    def test_sakura_wraps_hue_around_red(self):
        assert_same_color(Palette.SAKURA.color_for_seed(0.25), Color.from_hsb(0.95, 0.4, 0.95))
        assert_same_color(Palette.SAKURA.color_for_seed(0.75), Color.from_hsb(0.05, 0.6, 0.95))

    def test_monochrome_is_gray(self):
        color = Palette.MONOCHROME.color_for_seed(0.5)
        assert color.r == color.g == color.b == pytest.approx(0.6)

    def test_sunset_uses_four_buckets(self):
        for seed, bucket in ((0.0, 0), (0.3, 1), (0.6, 2), (0.99, 3)):
            assert Palette.SUNSET.color_for_seed(seed) == Color.from_hsb(*SUNSET_BUCKETS[bucket])

    def test_deterministic_and_opaque(self):
        for palette in Palette:
            for i in range(50):
                seed = i / 50
                color = palette.color_for_seed(seed)
                assert color == palette.color_for_seed(seed)
                assert color.a == 1.0
                for channel in (color.r, color.g, color.b):
                    assert 0.0 <= channel <= 1.0
