"""Particle templates and the per-particle physics integrator."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING
import math

from .utils import DOWN, GRAVITY, SUBSTEP, WHITE, Color, Vector

if TYPE_CHECKING:
    from .fireworks import FireworkConfig


class LifeState(IntEnum):
    """Stages of a particle's life, in the only order they can occur."""

    ALIVE = 0
    DECLINING = 1
    DYING = 2
    DEAD = 3


def life_state_for(life_time: float, elapsed: float) -> LifeState:
    """Map elapsed time over life time onto a life stage."""
    progress = elapsed / life_time
    if progress < 0.4:
        return LifeState.ALIVE
    if progress < 0.65:
        return LifeState.DECLINING
    if progress < 1.0:
        return LifeState.DYING
    return LifeState.DEAD


@dataclass(frozen=True, slots=True)
class ParticleConfig:
    """Immutable template every spawned particle is built from."""

    init_pos: Vector
    init_vel: Vector
    trail_length: int = 2
    life_time: float = 3.0
    color: Color = WHITE

    def __post_init__(self) -> None:
        if self.trail_length < 1:
            raise ValueError(f"trail_length must be at least 1, got {self.trail_length}")
        if self.life_time <= 0:
            raise ValueError(f"life_time must be positive, got {self.life_time}")
        # Vector2 is mutable, the template owns its own copies.
        object.__setattr__(self, "init_pos", Vector(self.init_pos))
        object.__setattr__(self, "init_vel", Vector(self.init_vel))


@dataclass(slots=True, eq=False)
class Particle:
    """A single simulated point with a fixed-length trail."""

    config: ParticleConfig

    pos: Vector = field(init=False)
    vel: Vector = field(init=False)
    trail: deque[Vector] = field(init=False)
    time_elapsed: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.reset()

    @property
    def life_state(self) -> LifeState:
        return life_state_for(self.config.life_time, self.time_elapsed)

    @property
    def progress(self) -> float:
        """Fraction of the life time already spent."""
        return self.time_elapsed / self.config.life_time

    def is_dead(self) -> bool:
        return self.life_state == LifeState.DEAD

    def reset(self) -> None:
        """Return the particle to its spawn state."""
        self.pos = Vector(self.config.init_pos)
        self.vel = Vector(self.config.init_vel)
        self.trail = deque(
            (Vector(self.pos) for _ in range(self.config.trail_length)),
            maxlen=self.config.trail_length,
        )
        self.time_elapsed = 0.0

    def update(self, dt: float, config: FireworkConfig) -> None:
        """Advance by ``dt`` seconds in fixed explicit-Euler sub-steps."""
        dt = max(0.0, dt)
        steps = math.floor(dt / SUBSTEP + 1e-9)
        for _ in range(steps):
            self._step(SUBSTEP, config)
        remainder = dt - steps * SUBSTEP
        if remainder > 1e-12:
            self._step(remainder, config)
        self.trail.append(Vector(self.pos))
        self.time_elapsed += dt

    def _step(self, step: float, config: FireworkConfig) -> None:
        force = DOWN * GRAVITY * config.gravity_scale + config.additional_force(self)
        speed = self.vel.length()
        if speed > 0.0:
            # normalize(v) * |v|^2 == v * |v|
            force -= self.vel * speed * config.drag_scale
        self.vel += force * step
        self.pos += self.vel * step
