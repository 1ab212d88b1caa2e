"""Fireworks, their emission forms, and the manager that drives them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Callable, Iterable, Iterator, Union
import logging
import random
import time

from .gradients import constant_gradient
from .particle import Particle, ParticleConfig
from .utils import Vector

logger = logging.getLogger(__name__)

ForceLaw = Callable[[Particle], Vector]
GradientCurve = Callable[[float], float]

# Emission timers count whole microseconds.
MICROS = 1_000_000


def _micros(seconds: float) -> int:
    return round(seconds * MICROS)


def no_force(particle: Particle) -> Vector:
    return Vector(0, 0)


class FireworkState(Enum):
    """Lifecycle of a firework: Waiting -> Alive -> Gone."""

    WAITING = auto()
    ALIVE = auto()
    GONE = auto()


class InstallForm(Enum):
    """How a manager treats its population of fireworks."""

    STATIC = auto()
    DYNAMIC = auto()


@dataclass(slots=True)
class Instant:
    """Fire every template once, on the first alive frame."""

    used: bool = False


@dataclass(slots=True)
class Sustained:
    """Emit random templates every ``time_interval`` seconds for ``lasts`` seconds."""

    lasts: float
    time_interval: float
    timer: float = 0.0

    def __post_init__(self) -> None:
        if self.lasts < 0:
            raise ValueError(f"lasts must not be negative, got {self.lasts}")
        if self.time_interval <= 0:
            raise ValueError(f"time_interval must be positive, got {self.time_interval}")


ExplosionForm = Union[Instant, Sustained]


@dataclass(slots=True)
class FireworkConfig:
    """Forces and colour gradient shared by all particles of one firework.

    ``drag_scale`` is the air-resistance coefficient; values far from the
    defaults make particles stall or fly off unrealistically.
    """

    gravity_scale: float = 1.0
    drag_scale: float = 0.28
    additional_force: ForceLaw = no_force
    gradient_curve: GradientCurve = constant_gradient
    enable_gradient: bool = False

    def with_gravity_scale(self, scale: float) -> FireworkConfig:
        return replace(self, gravity_scale=scale)

    def with_drag_scale(self, scale: float) -> FireworkConfig:
        return replace(self, drag_scale=scale)

    def with_additional_force(self, force: ForceLaw) -> FireworkConfig:
        return replace(self, additional_force=force)

    def with_gradient_curve(self, curve: GradientCurve) -> FireworkConfig:
        return replace(self, gradient_curve=curve)

    def with_gradient_enabled(self, enabled: bool) -> FireworkConfig:
        return replace(self, enable_gradient=enabled)

    def set_enable_gradient(self, enabled: bool) -> None:
        self.enable_gradient = enabled


@dataclass(slots=True, eq=False)
class Firework:
    """A timed group of particle emissions sharing one configuration."""

    particles: list[ParticleConfig]
    center: Vector = field(default_factory=lambda: Vector(0, 0))
    spawn_after: float = 0.0
    config: FireworkConfig = field(default_factory=FireworkConfig)
    form: ExplosionForm = field(default_factory=Instant)
    init_time: float = field(default_factory=time.monotonic)

    state: FireworkState = field(default=FireworkState.WAITING, init=False)
    time_elapsed: float = field(default=0.0, init=False)
    current_particles: list[Particle] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if not self.particles:
            raise ValueError("a firework needs at least one particle template")
        if self.spawn_after < 0:
            raise ValueError(f"spawn_after must not be negative, got {self.spawn_after}")
        self.particles = list(self.particles)
        self.center = Vector(self.center)

    def is_gone(self) -> bool:
        return self.state == FireworkState.GONE

    def is_alive(self) -> bool:
        return self.state == FireworkState.ALIVE

    def update(self, now: float, dt: float) -> None:
        """Spawn, integrate, and cull particles for one frame."""
        if self.state == FireworkState.GONE:
            return
        dt = max(0.0, dt)

        if self.state == FireworkState.WAITING and now >= self.init_time + self.spawn_after:
            self.state = FireworkState.ALIVE
            logger.debug("firework at (%.1f, %.1f) is alive", self.center.x, self.center.y)

        if self.state == FireworkState.ALIVE:
            self.time_elapsed += dt
            self._emit(dt)

        for particle in self.current_particles:
            particle.update(dt, self.config)
        self.current_particles = [p for p in self.current_particles if not p.is_dead()]

        if self.state == FireworkState.ALIVE and self._exhausted() and not self.current_particles:
            self.state = FireworkState.GONE
            logger.debug("firework at (%.1f, %.1f) is gone", self.center.x, self.center.y)

    def _emit(self, dt: float) -> None:
        form = self.form
        if isinstance(form, Instant):
            if not form.used:
                self._spawn(self.particles)
                form.used = True
            return

        if self.time_elapsed > form.lasts:
            return
        interval = _micros(form.time_interval)
        total = _micros(form.timer) + _micros(dt)
        if total <= interval:
            form.timer = total / MICROS
            return
        count = min(total // interval, len(self.particles))
        self._spawn(random.sample(self.particles, count))
        form.timer = (total % interval) / MICROS

    def _spawn(self, templates: Iterable[ParticleConfig]) -> None:
        self.current_particles.extend(Particle(template) for template in templates)

    def _exhausted(self) -> bool:
        if isinstance(self.form, Instant):
            return self.form.used
        return self.time_elapsed > self.form.lasts

    def reset(self, now: float | None = None) -> None:
        """Rearm the firework so it plays again from the start."""
        self.init_time = time.monotonic() if now is None else now
        self.state = FireworkState.WAITING
        self.time_elapsed = 0.0
        self.current_particles = []
        if isinstance(self.form, Instant):
            self.form.used = False
        else:
            self.form.timer = 0.0


class FireworkManager:
    """Owns every firework of a show and drives them each frame."""

    def __init__(
        self,
        fireworks: Iterable[Firework] = (),
        enable_loop: bool = False,
        install_form: InstallForm = InstallForm.STATIC,
    ) -> None:
        self.fireworks: list[Firework] = list(fireworks)
        self.enable_loop = enable_loop
        self.install_form = install_form

    def __len__(self) -> int:
        return len(self.fireworks)

    def add_firework(self, firework: Firework) -> None:
        self.fireworks.append(firework)

    def add_fireworks(self, fireworks: Iterable[Firework]) -> None:
        self.fireworks.extend(fireworks)

    def insert_firework(self, index: int, firework: Firework) -> None:
        self.fireworks.insert(index, firework)

    def set_enable_loop(self, enable_loop: bool) -> None:
        """Loop the show once everything is gone; ignored for dynamic installs."""
        self.enable_loop = enable_loop

    def enable_dynamic_install(self) -> None:
        self.install_form = InstallForm.DYNAMIC

    def is_gone(self) -> bool:
        return all(firework.is_gone() for firework in self.fireworks)

    def alive_fireworks(self) -> Iterator[Firework]:
        return (firework for firework in self.fireworks if firework.is_alive())

    def reset(self, now: float | None = None) -> None:
        """Restart the whole show."""
        for firework in self.fireworks:
            firework.reset(now)

    def update(self, now: float, dt: float) -> None:
        """Advance every firework, then apply the install policy."""
        for firework in self.fireworks:
            firework.update(now, dt)

        if self.install_form == InstallForm.DYNAMIC:
            self.fireworks = [f for f in self.fireworks if not f.is_gone()]
        elif self.enable_loop and self.fireworks and self.is_gone():
            logger.info("all %d fireworks gone, restarting show", len(self.fireworks))
            self.reset(now)
