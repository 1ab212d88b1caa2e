"""Shared constants and utility helpers for the firework show."""

from __future__ import annotations

from pathlib import Path
from typing import Any
import json
import math
import random
import time

import pygame

FPS = 20
SUBSTEP = 0.001
GRAVITY = 10.0

WHITE = (255, 255, 255)

Color = tuple[int, int, int]
Cell = tuple[int, int]
Vector = pygame.math.Vector2

DOWN = Vector(0, 1)
UP = Vector(0, -1)

DATA_DIR = Path(".firework")
SETTINGS_FILE = DATA_DIR / "settings.json"
LOG_FILE = DATA_DIR / "firework.log"


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def round_point(point: Vector) -> Cell:
    """Round a float point to the grid cell containing it."""
    return (round_half_away(point.x), round_half_away(point.y))


def distance_squared(a: Vector, b: Vector) -> float:
    """Return squared distance between two points."""
    return (b.x - a.x) ** 2 + (b.y - a.y) ** 2


def gen_points_circle(radius: int, n: int) -> list[Vector]:
    """Random integer lattice points inside a disk."""
    points: list[Vector] = []
    while len(points) < n:
        x = random.randint(-radius, radius)
        y = random.randint(-radius, radius)
        if x * x + y * y <= radius * radius:
            points.append(Vector(x, y))
    return points


def gen_points_circle_normal_dev(radius: float, n: int, std_dev: float) -> list[Vector]:
    """Random points inside a disk, normally distributed around the centre."""
    points: list[Vector] = []
    while len(points) < n:
        x = random.gauss(0.0, std_dev)
        y = random.gauss(0.0, std_dev)
        if x * x + y * y <= radius * radius:
            points.append(Vector(x, y))
    return points


def gen_points_circle_normal(radius: float, n: int) -> list[Vector]:
    """Normal disk points; denser near the centre."""
    return gen_points_circle_normal_dev(radius, n, radius / 9.0)


def gen_points_fan(radius: float, n: int, start_angle: float, end_angle: float) -> list[Vector]:
    """Random points inside a fan between two angles, counter-clockwise on screen."""
    points: list[Vector] = []
    while len(points) < n:
        x = random.uniform(-radius, radius)
        y = random.uniform(-radius, radius)
        angle = math.atan2(y, x)
        if start_angle <= angle <= end_angle and x * x + y * y <= radius * radius:
            points.append(Vector(x, -y))
    return points


def gen_points_arc(radius: float, n: int, start_angle: float, end_angle: float) -> list[Vector]:
    """Random points on an arc of the given radius."""
    points: list[Vector] = []
    for _ in range(n):
        angle = random.uniform(start_angle, end_angle)
        points.append(Vector(radius * math.cos(angle), -radius * math.sin(angle)))
    return points


def gen_points_on_circle(radius: float, n: int) -> list[Vector]:
    """Random points on a full circle."""
    return gen_points_arc(radius, n, 0.0, math.tau)


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


class FrameClock:
    """Monotonic frame clock that never reports a negative delta."""

    def __init__(self, now: float | None = None) -> None:
        self.last = time.monotonic() if now is None else now

    def tick(self, now: float | None = None) -> float:
        """Return seconds since the previous tick, clamped to zero."""
        if now is None:
            now = time.monotonic()
        delta = max(0.0, now - self.last)
        self.last = max(self.last, now)
        return delta
