from __future__ import annotations

import math

import pytest

from FPT.functions.math_function import Annotation, MarkerKind
from FPT.functions.smooth_noise import (
    NoiseScale,
    SmoothNoise,
    clamp,
    smoothstep,
    smoothstep_between,
)


def test_smoothstep_fixed_points() -> None:
    assert smoothstep(0) == 0
    assert smoothstep(1) == 1
    assert smoothstep(0.5) == 0.5
    assert smoothstep(-3) == 0
    assert smoothstep(7) == 1


def test_smoothstep_is_monotonic() -> None:
    samples = [smoothstep(i / 100) for i in range(101)]
    assert all(b >= a for a, b in zip(samples, samples[1:]))


def test_smoothstep_between_edges() -> None:
    assert smoothstep_between(2.0, 2.0, 4.0) == 0
    assert smoothstep_between(3.0, 2.0, 4.0) == 0.5
    assert smoothstep_between(5.0, 2.0, 4.0) == 1


def test_clamp() -> None:
    assert clamp(-1, 0, 1) == 0
    assert clamp(2, 0, 1) == 1
    assert clamp(0.25, 0, 1) == 0.25


@pytest.mark.parametrize("t", [-0.0001, -1, -2.5, -1e9, -math.inf])
def test_negative_input_is_zero(t: float) -> None:
    noise = SmoothNoise(seed=1)
    assert noise.evaluate(t) == 0
    assert noise.control_points == {}


def test_repeated_evaluation_is_identical() -> None:
    noise = SmoothNoise()
    first = noise.evaluate(2.3)
    assert noise.evaluate(2.3) == first
    assert set(noise.control_points) == {2, 3}


def test_seed_makes_noise_reproducible() -> None:
    a = SmoothNoise(seed=42)
    b = SmoothNoise(seed=42)
    assert [a(t / 4) for t in range(20)] == [b(t / 4) for t in range(20)]


def test_control_values_are_within_range() -> None:
    noise = SmoothNoise(seed=3)
    for t in range(200):
        noise.evaluate(t)
    assert all(-1 <= v <= 1 for v in noise.control_points.values())


def test_endpoints_match_control_points() -> None:
    noise = SmoothNoise(seed=7)
    noise.evaluate(4.5)
    r0, r1 = noise.control_value(4), noise.control_value(5)
    assert noise.evaluate(4) == r0
    assert noise.evaluate(5) == r1


def test_interpolation_is_continuous() -> None:
    noise = SmoothNoise(seed=11)
    previous_gap = None
    for step in (0.1, 0.01, 0.001):
        samples = [noise.evaluate(3 + i * step) for i in range(int(round(2 / step)) + 1)]
        gap = max(abs(b - a) for a, b in zip(samples, samples[1:]))
        if previous_gap is not None:
            assert gap < previous_gap
        previous_gap = gap
    assert previous_gap < 0.01


def test_annotations_do_not_generate_points() -> None:
    noise = SmoothNoise(seed=5)
    assert list(noise.provide_annotations(0, 100)) == []
    assert noise.control_points == {}

    reference = SmoothNoise(seed=5)
    assert [noise(t / 3) for t in range(30)] == [reference(t / 3) for t in range(30)]


def test_annotations_report_generated_points_in_window() -> None:
    noise = SmoothNoise(seed=9)
    noise.evaluate(1.5)
    noise.evaluate(6.2)
    markers = list(noise.provide_annotations(1, 6))
    assert markers == [Annotation(1.0, MarkerKind.FILL_CIRCLE),
                       Annotation(2.0, MarkerKind.FILL_CIRCLE),
                       Annotation(6.0, MarkerKind.FILL_CIRCLE)]
    assert list(noise.provide_annotations(2.5, 5.9)) == []


def test_annotations_reflect_current_state() -> None:
    noise = SmoothNoise(seed=9)
    window = (0, 10)
    assert list(noise.provide_annotations(*window)) == []
    noise.evaluate(0.5)
    assert [a.x for a in noise.provide_annotations(*window)] == [0.0, 1.0]


def test_annotations_survive_evaluation_while_iterating() -> None:
    noise = SmoothNoise(seed=2)
    noise.evaluate(0.5)
    seen = []
    for marker in noise.provide_annotations(0, 10):
        noise.evaluate(marker.x)
        seen.append(marker.x)
    assert seen == [0.0, 1.0]
    assert 2 in noise.control_points


def test_scaled_variant_maps_unit_range() -> None:
    noise = SmoothNoise.scaled(seed=4)
    assert noise.value_range == (0.0, 1.0)
    assert noise.scale == NoiseScale(2.0, -1.0)
    for t in range(50):
        assert -1 <= noise.evaluate(t + 0.37) <= 1
    noise.evaluate(8.1)
    assert noise.evaluate(8) == 2 * noise.control_value(8) - 1


def test_invalid_range_is_rejected() -> None:
    with pytest.raises(ValueError):
        SmoothNoise(value_range=(1.0, 1.0))
    with pytest.raises(ValueError):
        SmoothNoise(value_range=(1.0, -1.0))


def test_noise_supports_annotations() -> None:
    assert SmoothNoise().supports_annotations
