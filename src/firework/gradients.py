"""Brightness curves over a particle's normalized lifetime.

Every curve takes ``elapsed / life_time`` (0 at spawn, 1 at death) and returns a
multiplier for the particle's base colour.
"""

from __future__ import annotations


def constant_gradient(x: float) -> float:
    """Keep the base colour for the whole lifetime."""
    return 1.0


def explosion_gradient_1(x: float) -> float:
    """Quick flash then a slow linear fade, like a burst."""
    if x < 0.087:
        return 150.0 * x**2
    return -0.8 * x + 1.2


def explosion_gradient_2(x: float) -> float:
    """Piecewise ramp up that falls off sharply near the end."""
    if x < 0.067:
        return 5.0 * x + 0.1
    if x < 0.2:
        return 2.0 * x + 0.3
    if x < 0.5:
        return x + 0.5
    if x < 0.684:
        return 0.5 * x + 0.75
    return -7.0 * (x - 0.65) ** 2 + 1.1


def explosion_gradient_3(x: float) -> float:
    """Darker variant of :func:`explosion_gradient_1`."""
    return explosion_gradient_1(x) * 0.6


def linear_gradient_1(x: float) -> float:
    return -0.7 * x + 1.0


def fade_out_gradient(x: float) -> float:
    """Hold brightness, then drop off steeply over the last fifth of life."""
    if x < 0.8125:
        return -0.4 * x + 1.1
    return -2.0 * x + 2.2
