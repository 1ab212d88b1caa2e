from __future__ import annotations

import json
import math

import pytest

from firework import gradients
from firework.utils import (
    FrameClock,
    Vector,
    clamp,
    distance_squared,
    gen_points_arc,
    gen_points_circle,
    gen_points_circle_normal,
    gen_points_fan,
    gen_points_on_circle,
    load_json,
    round_half_away,
    round_point,
)


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (-0.5, -1), (1.49, 1), (-1.5, -2), (2.5, 3), (0.0, 0)],
)
def test_round_half_away(value: float, expected: int) -> None:
    assert round_half_away(value) == expected


def test_round_point_and_distance() -> None:
    assert round_point(Vector(1.5, -2.4)) == (2, -2)
    assert distance_squared(Vector(0, 0), Vector(3, 4)) == 25
    assert clamp(300, 0, 255) == 255
    assert clamp(-3, 0, 255) == 0


def test_circle_points_are_lattice_points_in_disk() -> None:
    points = gen_points_circle(5, 200)
    assert len(points) == 200
    for point in points:
        assert point.x == int(point.x) and point.y == int(point.y)
        assert point.length_squared() <= 25


def test_normal_points_stay_in_disk() -> None:
    points = gen_points_circle_normal(90.0, 300)
    assert len(points) == 300
    assert all(point.length() <= 90.0 for point in points)


def test_fan_points_open_upwards() -> None:
    points = gen_points_fan(300.0, 100, 5 / 12 * math.pi, 7 / 12 * math.pi)
    assert len(points) == 100
    for point in points:
        assert point.length() <= 300.0
        # screen y grows downwards, so an upward fan has negative y
        assert point.y < 0


def test_arc_points_lie_on_radius() -> None:
    for point in gen_points_arc(50.0, 40, 0.0, math.pi) + gen_points_on_circle(50.0, 40):
        assert point.length() == pytest.approx(50.0)


def test_frame_clock_never_goes_backwards() -> None:
    clock = FrameClock(now=100.0)
    assert clock.tick(100.25) == pytest.approx(0.25)
    assert clock.tick(99.0) == 0.0
    assert clock.tick(100.5) == pytest.approx(0.25)


def test_load_json(tmp_path) -> None:
    good = tmp_path / "good.json"
    good.write_text(json.dumps({"fps": 30}), encoding="utf-8")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    assert load_json(good, {}) == {"fps": 30}
    assert load_json(broken, {"x": 1}) == {"x": 1}
    assert load_json(tmp_path / "missing.json", None) is None


def test_gradient_curves() -> None:
    assert gradients.constant_gradient(0.7) == 1.0
    assert gradients.linear_gradient_1(0.0) == pytest.approx(1.0)
    assert gradients.linear_gradient_1(1.0) == pytest.approx(0.3)
    assert gradients.explosion_gradient_1(0.5) == pytest.approx(0.8)
    assert gradients.explosion_gradient_3(0.5) == pytest.approx(0.48)
    assert gradients.explosion_gradient_2(0.0) == pytest.approx(0.1)
    assert gradients.fade_out_gradient(0.5) == pytest.approx(0.9)
    assert gradients.fade_out_gradient(1.0) == pytest.approx(0.2)
