"""Ready-made firework scenes."""

from __future__ import annotations

from typing import Callable, Sequence
import math
import random

from .fireworks import Firework, FireworkConfig, Instant, Sustained
from .gradients import (
    explosion_gradient_1,
    explosion_gradient_2,
    explosion_gradient_3,
    fade_out_gradient,
    linear_gradient_1,
)
from .particle import Particle, ParticleConfig
from .utils import (
    UP,
    Color,
    Vector,
    gen_points_arc,
    gen_points_circle,
    gen_points_circle_normal,
    gen_points_circle_normal_dev,
    gen_points_fan,
)


def _templates(
    origin: Vector,
    velocities: Sequence[Vector],
    trail: tuple[int, int],
    life: tuple[float, float],
    colors: Sequence[Color],
) -> list[ParticleConfig]:
    """One template per velocity with randomized trail, life and colour."""
    return [
        ParticleConfig(
            init_pos=origin,
            init_vel=velocity,
            trail_length=random.randint(*trail),
            life_time=random.uniform(*life),
            color=random.choice(colors),
        )
        for velocity in velocities
    ]


def _burst(
    center: Vector,
    spawn_after: float,
    particles: list[ParticleConfig],
    config: FireworkConfig,
    enable_gradient: bool,
) -> Firework:
    config.set_enable_gradient(enable_gradient)
    return Firework(particles=particles, center=center, spawn_after=spawn_after, config=config)


def demo_firework_0(center: Vector, spawn_after: float, enable_gradient: bool, colors: Sequence[Color]) -> Firework:
    """Randomly sized burst; used by the dynamic generator."""
    velocities = gen_points_circle_normal(random.uniform(230.0, 400.0), random.randint(33, 46))
    particles = _templates(center, velocities, (20, 24), (1.8, 2.3), colors)
    config = FireworkConfig(gradient_curve=explosion_gradient_1)
    return _burst(center, spawn_after, particles, config, enable_gradient)


def demo_firework_1(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    colors = [(255, 102, 75), (144, 56, 67), (255, 225, 124), (206, 32, 41)]
    particles = _templates(center, gen_points_circle_normal(250.0, 45), (23, 26), (2.1, 2.7), colors)
    config = FireworkConfig(gradient_curve=explosion_gradient_1)
    return _burst(center, spawn_after, particles, config, enable_gradient)


def demo_firework_2(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    """Dense, weightless golden sphere."""
    particles = _templates(center, gen_points_circle(100, 600), (5, 7), (3.0, 5.5), [(250, 216, 68)])
    config = FireworkConfig(gravity_scale=0.0, drag_scale=0.15, gradient_curve=explosion_gradient_2)
    return _burst(center, spawn_after, particles, config, enable_gradient)


def demo_firework_3(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    colors = [(242, 233, 190), (226, 196, 136), (149, 202, 176), (26, 64, 126)]
    particles = _templates(center, gen_points_circle_normal(350.0, 135), (23, 42), (3.5, 5.0), colors)
    config = FireworkConfig(gravity_scale=0.7, drag_scale=0.18, gradient_curve=explosion_gradient_1)
    return _burst(center, spawn_after, particles, config, enable_gradient)


def demo_firework_4(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    colors = [(242, 233, 190), (226, 196, 136), (255, 248, 253)]
    particles = _templates(center, gen_points_circle_normal(350.0, 25), (20, 32), (3.5, 5.0), colors)
    config = FireworkConfig(gravity_scale=0.3, gradient_curve=explosion_gradient_1)
    return _burst(center, spawn_after, particles, config, enable_gradient)


def demo_firework_5(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    colors = [(152, 186, 227), (54, 84, 117), (21, 39, 60)]
    particles = _templates(center, gen_points_circle_normal(450.0, 80), (33, 42), (3.5, 5.0), colors)
    config = FireworkConfig(gravity_scale=1.4, gradient_curve=explosion_gradient_3)
    return _burst(center, spawn_after, particles, config, enable_gradient)


def demo_firework_6(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    colors = [(242, 233, 190), (226, 196, 136), (255, 248, 253)]
    particles = _templates(center, gen_points_circle_normal(350.0, 35), (20, 22), (3.5, 4.0), colors)
    config = FireworkConfig(gravity_scale=0.1, drag_scale=0.19, gradient_curve=explosion_gradient_1)
    return _burst(center, spawn_after, particles, config, enable_gradient)


def demo_firework_comb_0(center: Vector, spawn_after: float, enable_gradient: bool) -> list[Firework]:
    """Five overlapping bursts."""
    return [
        demo_firework_3(center + Vector(-5, -19), spawn_after, enable_gradient),
        demo_firework_4(center + Vector(-30, 0), spawn_after + 0.4, enable_gradient),
        demo_firework_5(center + Vector(12, 0), spawn_after + 1.6, enable_gradient),
        demo_firework_1(center + Vector(-9, 7), spawn_after + 2.0, enable_gradient),
        demo_firework_6(center + Vector(24, -11), spawn_after + 2.3, enable_gradient),
    ]


def demo_firework_comb_1(start: Vector, spawn_after: float, enable_gradient: bool) -> list[Firework]:
    """A rocket ascent followed by its burst at the apex."""
    rocket = ParticleConfig(init_pos=start, init_vel=UP * 160, trail_length=6, life_time=1.2, color=(255, 255, 235))
    rocket_config = FireworkConfig(drag_scale=0.04, gradient_curve=linear_gradient_1)

    colors = [(235, 39, 155), (250, 216, 68), (242, 52, 72), (63, 52, 200), (255, 139, 57)]
    apex = start + UP * 53
    particles = _templates(apex, gen_points_circle_normal(350.0, 160), (23, 42), (2.5, 4.5), colors)
    burst_config = FireworkConfig(gravity_scale=0.3, drag_scale=0.2, gradient_curve=explosion_gradient_1)
    return [
        _burst(start, spawn_after, [rocket], rocket_config, enable_gradient),
        _burst(apex, spawn_after + 1.2, particles, burst_config, enable_gradient),
    ]


def demo_firework_comb_2(center: Vector, spawn_after: float, enable_gradient: bool) -> list[Firework]:
    """Fountains on the ground with three waves of single-shot streaks."""

    def side_fountain(origin: Vector, angle: float) -> Firework:
        colors = [(255, 183, 3), (251, 133, 0), (242, 233, 190)]
        velocities = gen_points_fan(60.0, 20, angle - 0.05, angle + 0.05)
        particles = _templates(origin, velocities, (28, 37), (2.5, 3.8), colors)
        config = FireworkConfig(drag_scale=0.05, gradient_curve=linear_gradient_1, enable_gradient=enable_gradient)
        return Firework(
            particles=particles,
            center=origin,
            spawn_after=spawn_after,
            config=config,
            form=Sustained(lasts=5.0, time_interval=0.08),
        )

    def centre_fountain(origin: Vector) -> Firework:
        colors = [(226, 196, 136), (255, 245, 253), (208, 58, 99)]
        velocities = gen_points_fan(1000.0, 20, 5.7 / 12 * math.pi, 6.3 / 12 * math.pi)
        particles = _templates(origin, velocities, (28, 37), (2.5, 3.8), colors)
        config = FireworkConfig(
            gravity_scale=0.9,
            drag_scale=0.14,
            gradient_curve=linear_gradient_1,
            enable_gradient=enable_gradient,
        )
        return Firework(
            particles=particles,
            center=origin,
            spawn_after=spawn_after + 4.0,
            config=config,
            form=Sustained(lasts=5.0, time_interval=0.08),
        )

    def streak(origin: Vector, delay: float, colors: Sequence[Color]) -> Firework:
        velocity = gen_points_arc(200.0, 1, 5 / 12 * math.pi, 7 / 12 * math.pi)[0]
        particles = _templates(origin, [velocity], (24, 29), (2.1, 2.7), colors)
        config = FireworkConfig(drag_scale=random.uniform(0.18, 0.24), gradient_curve=linear_gradient_1)
        return _burst(origin, delay, particles, config, enable_gradient)

    ground = center.y + 21
    fireworks = [
        side_fountain(Vector(center.x - 31, ground), 1.05),
        side_fountain(Vector(center.x + 31, ground), 2.09),
        centre_fountain(Vector(center.x - 7, ground)),
        centre_fountain(Vector(center.x + 7, ground)),
    ]
    waves = [
        (3.5, [(0, 119, 182), (144, 224, 239), (12, 180, 216)]),
        (4.7, [(181, 23, 158), (247, 37, 133), (114, 9, 183)]),
        (5.9, [(217, 237, 146), (153, 217, 140), (82, 182, 154)]),
    ]
    for delay, colors in waves:
        for offset in range(-33, 34, 3):
            fireworks.append(streak(Vector(center.x + offset, ground), delay, colors))
    return fireworks


def demo_firework_comb_3(center: Vector, spawn_after: float, enable_gradient: bool) -> list[Firework]:
    """A bright core, a wide slow halo, then a ring of small bursts."""
    origin = center + UP * 6
    core = _templates(
        origin,
        gen_points_circle_normal_dev(14.0, 200, 60.0),
        (15, 19),
        (3.0, 5.0),
        [(255, 216, 190), (255, 238, 221), (248, 247, 255)],
    )
    halo = _templates(
        origin,
        gen_points_circle_normal_dev(10000.0, 600, 30.0),
        (20, 27),
        (4.8, 10.0),
        [(152, 186, 227), (89, 129, 177), (54, 84, 117), (240, 244, 254)],
    )
    fireworks = [
        _burst(
            center,
            spawn_after,
            core,
            FireworkConfig(gravity_scale=0.35, drag_scale=0.15, gradient_curve=explosion_gradient_1),
            enable_gradient,
        ),
        _burst(
            center,
            spawn_after,
            halo,
            FireworkConfig(gravity_scale=0.5, drag_scale=0.09, gradient_curve=explosion_gradient_1),
            enable_gradient,
        ),
    ]
    ring_colors = [(17, 138, 178), (6, 214, 160), (7, 59, 76), (255, 255, 255)]
    for idx, offset in enumerate(gen_points_circle(27, 10)):
        particles = _templates(
            center + offset,
            gen_points_circle_normal_dev(100.0, 35, 350.0 / 9),
            (20, 29),
            (3.0, 4.0),
            ring_colors,
        )
        config = FireworkConfig(gravity_scale=0.25, drag_scale=0.28, gradient_curve=explosion_gradient_3)
        fireworks.append(_burst(center, spawn_after + 0.2 * (idx + 4), particles, config, enable_gradient))
    return fireworks


def demo_fountain(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    """A five second upward fountain."""
    colors = [(226, 196, 136), (255, 245, 253), (208, 58, 99)]
    velocities = gen_points_fan(300.0, 45, 5 / 12 * math.pi, 7 / 12 * math.pi)
    particles = _templates(center, velocities, (28, 37), (2.5, 3.8), colors)
    config = FireworkConfig(
        gravity_scale=0.5,
        drag_scale=0.15,
        gradient_curve=fade_out_gradient,
        enable_gradient=enable_gradient,
    )
    return Firework(
        particles=particles,
        center=center,
        spawn_after=spawn_after,
        config=config,
        form=Sustained(lasts=5.0, time_interval=0.08),
    )


def vortex_force(center: Vector, strength: float = 150.0) -> Callable[[Particle], Vector]:
    """Attraction toward ``center`` that weakens with distance."""

    def force(particle: Particle) -> Vector:
        offset = center - particle.pos
        distance = offset.length()
        if distance == 0:
            return Vector(0, 0)
        return offset.normalize() * (strength / distance)

    return force


def demo_vortex(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    """Particles orbiting and spiralling into the centre."""
    colors = [(233, 232, 237), (254, 142, 130), (200, 27, 72), (86, 18, 31)]
    particles = []
    for offset in gen_points_circle(30, 45):
        tangent = Vector(offset.y, -offset.x)
        velocity = tangent.normalize() * 15 if tangent.length() > 0 else Vector(0, 0)
        particles.append(
            ParticleConfig(
                init_pos=center + offset,
                init_vel=velocity,
                trail_length=random.randint(28, 39),
                life_time=random.uniform(4.5, 7.0),
                color=random.choice(colors),
            )
        )
    config = FireworkConfig(
        gravity_scale=0.0,
        drag_scale=0.05,
        additional_force=vortex_force(center),
        gradient_curve=fade_out_gradient,
        enable_gradient=enable_gradient,
    )
    return Firework(
        particles=particles,
        center=center,
        spawn_after=spawn_after,
        config=config,
        form=Sustained(lasts=10.0, time_interval=0.01),
    )


def demo_heart(center: Vector, spawn_after: float, enable_gradient: bool) -> Firework:
    """Two fans pulled back toward the centre, tracing a heart."""
    colors = [(233, 232, 237), (254, 142, 130), (200, 27, 72), (86, 18, 31)]
    trail_length = random.randint(100, 104)
    life_time = random.uniform(3.0, 3.2)
    origin = center - UP * 15
    velocities = gen_points_fan(300.0, 45, 0.2 * math.pi, 0.3 * math.pi)
    velocities += gen_points_fan(300.0, 45, 0.7 * math.pi, 0.8 * math.pi)
    particles = [
        ParticleConfig(origin, velocity, trail_length, life_time, random.choice(colors))
        for velocity in velocities
    ]
    config = FireworkConfig(
        gravity_scale=0.1,
        drag_scale=0.1,
        additional_force=lambda particle: (center - particle.pos) * 2,
        gradient_curve=fade_out_gradient,
        enable_gradient=enable_gradient,
    )
    return Firework(particles=particles, center=center, spawn_after=spawn_after, config=config, form=Instant())


DemoFactory = Callable[[tuple[int, int], bool], list[Firework]]

DEMOS: dict[int, DemoFactory] = {
    0: lambda size, grad: demo_firework_comb_0(Vector(size[0] / 4, size[1] / 2), 0.7, grad),
    1: lambda size, grad: demo_firework_comb_2(Vector(size[0] / 4, size[1] / 2), 0.7, grad),
    2: lambda size, grad: demo_firework_comb_3(Vector(size[0] / 4, size[1] / 2), 0.7, grad),
    3: lambda size, grad: demo_firework_comb_1(Vector(size[0] / 4, 66), 0.2, grad),
    4: lambda size, grad: [demo_firework_2(Vector(size[0] / 4, size[1] / 2), 0.7, grad)],
    5: lambda size, grad: [demo_fountain(Vector(size[0] / 4, size[1] - 2), 0.0, grad)],
    6: lambda size, grad: [demo_vortex(Vector(size[0] / 4, size[1] / 2), 0.0, grad)],
    7: lambda size, grad: [demo_heart(Vector(size[0] / 4, size[1] / 2), 0.0, grad)],
}


def build_demo(number: int, size: tuple[int, int], enable_gradient: bool) -> list[Firework]:
    """Build demo ``number`` for a terminal of ``size`` (columns, rows).

    Scene coordinates use half the terminal width, the compositor doubles x.
    """
    if number not in DEMOS:
        raise ValueError(f"unknown demo number {number}, expected 0-{len(DEMOS) - 1}")
    return DEMOS[number](size, enable_gradient)
