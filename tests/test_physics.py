"""Tests for the per-frame wind and growth step."""

import math

import pytest

from garden.config import GardenConfig, WindConfig
from garden.events import WindGustEvent
from garden.garden_state import GardenState
from garden.motion import MotionSample, StaticMotionSource
from garden.physics import PhysicsResult, WindPhysics


@pytest.fixture
def physics(garden):
    return WindPhysics(garden)


def run_ticks(physics, start, count, step, motion=None):
    results = []
    for i in range(1, count + 1):
        results.append(physics.update(start + i * step, motion))
    return results


class TestDecay:
    """Wind strength decays toward zero and snaps to it."""

    def test_reaches_zero_over_one_second_ticks(self):
        garden = GardenState(GardenConfig(seed=1, wind=WindConfig(decay_rate=0.95)))
        garden.set_wind_strength(50.0)
        physics = WindPhysics(garden)
        run_ticks(physics, 0.0, 100, 1.0)
        assert garden.wind.strength < 0.1
        assert garden.wind.strength == 0.0

    def test_monotonic_without_input(self, garden, physics):
        garden.set_wind_strength(80.0)
        previous = garden.wind.strength
        for result in run_ticks(physics, 0.0, 300, 1.0 / 60.0):
            assert result.strength_after <= previous
            assert 0.0 <= result.strength_after <= 100.0
            previous = result.strength_after

    def test_frame_rate_independent(self):
        a = GardenState(GardenConfig(seed=1))
        b = GardenState(GardenConfig(seed=1))
        a.set_wind_strength(60.0)
        b.set_wind_strength(60.0)
        run_ticks(WindPhysics(a), 0.0, 30, 1.0 / 30.0)
        run_ticks(WindPhysics(b), 0.0, 120, 1.0 / 120.0)
        assert a.wind.strength == pytest.approx(b.wind.strength, rel=1e-6)

    def test_one_reference_frame_applies_decay_rate_once(self, garden, physics):
        garden.set_wind_strength(50.0)
        physics.update(1.0 / 60.0)
        assert garden.wind.strength == pytest.approx(50.0 * 0.98)

    def test_time_not_advancing_is_skipped(self, garden, physics):
        garden.set_wind_strength(50.0)
        physics.update(1.0)
        strength = garden.wind.strength
        result = physics.update(0.5)
        assert result.skipped
        assert garden.wind.strength == strength

    def test_zero_strength_stays_zero(self, garden, physics):
        garden.set_wind_strength(0.0)
        run_ticks(physics, 0.0, 10, 0.1)
        assert garden.wind.strength == 0.0


class TestGyroStir:
    def test_rotation_turns_and_boosts(self, garden, physics):
        garden.set_wind_strength(0.0)
        spin = MotionSample(gyro_rate=1.0)
        physics.update(1.0 / 60.0, spin)
        assert garden.wind.direction == pytest.approx(0.1)
        assert garden.wind.strength == pytest.approx(2.0)

    def test_direction_stays_wrapped(self, garden, physics):
        spin = MotionSample(gyro_rate=5.0)
        run_ticks(physics, 0.0, 600, 1.0 / 60.0, spin)
        assert -math.pi <= garden.wind.direction <= math.pi

    def test_strength_capped(self, garden, physics):
        spin = MotionSample(gyro_rate=50.0)
        run_ticks(physics, 0.0, 120, 1.0 / 60.0, spin)
        assert garden.wind.strength <= 100.0

    def test_disabled_knob_ignores_rotation(self, garden, physics):
        garden.set_knob("gyro_wind_enabled", False)
        physics.update(1.0 / 60.0, MotionSample(gyro_rate=3.0))
        assert garden.wind.direction == 0.0
        assert garden.wind.strength < 5.0

    def test_motion_source_used_when_no_motion_passed(self, garden):
        source = StaticMotionSource(MotionSample(gyro_rate=1.0))
        physics = WindPhysics(garden, motion_source=source)
        result = physics.update(1.0 / 60.0)
        assert result.details["gyro_rate"] == 1.0
        assert garden.wind.direction > 0.0


class TestGusts:
    """Swipe gusts ease up to a peak and settle back to rest."""

    def test_swipe_direction_and_peak(self, garden, physics, recorded_events):
        target = physics.start_swipe_gust(200.0)
        assert garden.wind.direction == 0.0
        assert target.peak_strength == pytest.approx(40.0)
        physics.start_swipe_gust(-1000.0)
        assert garden.wind.direction == pytest.approx(math.pi)
        assert garden.wind.target.peak_strength == 50.0
        gusts = [e for e in recorded_events if isinstance(e, WindGustEvent)]
        assert [g.source for g in gusts] == ["swipe", "swipe"]

    def test_gust_curve(self, garden, physics):
        physics.start_swipe_gust(250.0)
        start = garden.wind.strength
        physics.update(2.0)
        assert garden.wind.strength == pytest.approx(50.0)
        physics.update(4.0)
        assert start < garden.wind.strength < 50.0
        result = physics.update(6.5)
        assert result.gust_finished
        assert garden.wind.target is None
        assert garden.wind.strength == pytest.approx(5.0)

    def test_gust_suspends_decay(self, garden, physics):
        physics.start_swipe_gust(250.0)
        strengths = [r.strength_after for r in run_ticks(physics, 0.0, 100, 1.0 / 60.0)]
        assert strengths == sorted(strengths)
        assert all(r.gusting for r in run_ticks(physics, 100 / 60.0, 5, 1.0 / 60.0))

    def test_gust_holds_strength_against_gyro(self, garden, physics):
        physics.start_swipe_gust(250.0)
        physics.update(2.0, MotionSample(gyro_rate=10.0))
        assert garden.wind.strength == pytest.approx(50.0)
        assert garden.wind.direction != 0.0

    def test_impulse_cancels_gust(self, garden, physics):
        physics.start_swipe_gust(250.0)
        physics.update(1.0)
        garden.apply_wind_impulse(10.0, 0.5)
        assert garden.wind.target is None
        result = physics.update(1.0 + 1.0 / 60.0)
        assert not result.gusting
        assert result.strength_after < result.strength_before

    def test_peak_clamped_to_cap(self, garden, physics):
        target = physics.start_gust(500.0, 1.0)
        assert target.peak_strength == 100.0


class TestGrowthStep:
    def test_held_flower_grows_with_time(self, garden, physics, viewport):
        flower_id = garden.spawn_flower((100, 100), viewport)
        garden.start_growing(flower_id, now=0.0)
        results = run_ticks(physics, 0.0, 60, 1.0 / 60.0)
        assert sum(r.grow_ticks for r in results) == 20
        assert garden.get_flower(flower_id).scale == pytest.approx(2.0)

    def test_frame_rate_does_not_change_growth(self, viewport):
        scales = []
        for fps in (30, 144):
            garden = GardenState(GardenConfig(seed=5))
            flower_id = garden.spawn_flower((100, 100), viewport)
            garden.start_growing(flower_id, now=0.0)
            run_ticks(WindPhysics(garden), 0.0, fps, 1.0 / fps)
            scales.append(garden.get_flower(flower_id).scale)
        assert scales[0] == pytest.approx(scales[1])


def test_result_defaults():
    result = PhysicsResult()
    assert result.skipped
    assert result.details == {}
