"""Random firework generator that keeps a dynamic show populated."""

from __future__ import annotations

import logging
import random

from .demo import demo_firework_0
from .fireworks import FireworkManager
from .utils import Color, Vector

logger = logging.getLogger(__name__)

PALETTES: tuple[tuple[Color, ...], ...] = (
    ((255, 102, 75), (144, 56, 67), (255, 225, 124), (206, 32, 41)),
    ((235, 39, 155), (250, 216, 68), (242, 52, 72), (63, 52, 200), (255, 139, 57)),
    ((152, 186, 227), (89, 129, 177), (54, 84, 117), (240, 244, 254)),
    ((34, 87, 122), (56, 163, 165), (87, 204, 153), (128, 237, 153), (199, 249, 204)),
    ((205, 180, 219), (255, 200, 221), (255, 175, 204), (189, 224, 254), (162, 210, 255)),
    ((79, 0, 11), (114, 0, 38), (206, 66, 87), (255, 127, 81), (255, 155, 84)),
    ((0, 29, 61), (0, 53, 102), (255, 195, 0), (255, 214, 10)),
)


def target_population(width: int, height: int) -> int:
    """Number of fireworks a screen of this size should hold at once."""
    return (width * height) // 1300 + 3


def dyn_gen(manager: FireworkManager, width: int, height: int, enable_gradient: bool) -> bool:
    """Add one random burst when the manager is below the target population.

    Returns whether a firework was added.
    """
    if len(manager) >= target_population(width, height):
        return False
    center = Vector(random.randint(-3, width + 2), random.randint(-1, height))
    manager.add_firework(
        demo_firework_0(center, random.uniform(0.0, 2.0), enable_gradient, random.choice(PALETTES))
    )
    logger.debug("spawned dynamic firework at (%d, %d)", center.x, center.y)
    return True
