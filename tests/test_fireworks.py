from __future__ import annotations

import pytest

from firework.fireworks import (
    Firework,
    FireworkConfig,
    FireworkManager,
    FireworkState,
    InstallForm,
    Instant,
    Sustained,
)
from firework.particle import LifeState, ParticleConfig
from firework.utils import Vector

T0 = 100.0


def _templates(count: int, life_time: float = 1.0) -> list[ParticleConfig]:
    return [ParticleConfig(Vector(0, 0), Vector(i, -10), 3, life_time, (255, 0, 0)) for i in range(count)]


def _instant(count: int = 3, spawn_after: float = 0.0, life_time: float = 1.0) -> Firework:
    return Firework(particles=_templates(count, life_time), spawn_after=spawn_after, init_time=T0)


def _sustained(count: int = 50, lasts: float = 10.0, interval: float = 0.5) -> Firework:
    return Firework(
        particles=_templates(count, life_time=100.0),
        form=Sustained(lasts=lasts, time_interval=interval),
        init_time=T0,
    )


def test_end_to_end_single_particle() -> None:
    template = ParticleConfig(Vector(0, 0), Vector(0, -10), trail_length=2, life_time=1.0)
    firework = Firework(particles=[template], center=Vector(0, 0), init_time=T0)

    firework.update(T0, 0.0)
    assert firework.state == FireworkState.ALIVE
    assert len(firework.current_particles) == 1
    particle = firework.current_particles[0]
    assert list(particle.trail) == [Vector(0, 0), Vector(0, 0)]

    firework.update(T0 + 0.5, 0.5)
    assert particle.life_state == LifeState.DECLINING
    assert particle.pos != Vector(0, 0)

    firework.update(T0 + 1.1, 0.6)
    assert firework.current_particles == []
    assert firework.state == FireworkState.GONE


def test_waits_for_activation_delay() -> None:
    firework = _instant(spawn_after=2.0, life_time=5.0)
    firework.update(T0 + 1.0, 1.0)
    assert firework.state == FireworkState.WAITING
    assert firework.current_particles == []
    firework.update(T0 + 2.0, 1.0)
    assert firework.state == FireworkState.ALIVE


def test_instant_fires_exactly_once() -> None:
    firework = _instant(count=7, life_time=50.0)
    firework.update(T0, 0.02)
    assert len(firework.current_particles) == 7
    spawned = list(firework.current_particles)
    for frame in range(1, 40):
        firework.update(T0 + frame * 0.05, 0.05)
        assert firework.current_particles == spawned
    assert firework.form == Instant(used=True)


def test_state_never_goes_backwards() -> None:
    firework = _instant(spawn_after=0.2, life_time=0.3)
    order = {FireworkState.WAITING: 0, FireworkState.ALIVE: 1, FireworkState.GONE: 2}
    states = []
    for frame in range(40):
        firework.update(T0 + frame * 0.05, 0.05)
        states.append(order[firework.state])
    assert states == sorted(states)
    assert states[-1] == order[FireworkState.GONE]
    firework.update(T0 + 10.0, 0.05)
    assert firework.state == FireworkState.GONE


def test_reset_rearms_firework() -> None:
    firework = _instant(life_time=0.1)
    firework.update(T0, 0.0)
    firework.update(T0 + 0.2, 0.2)
    assert firework.is_gone()

    firework.reset(now=T0 + 5.0)
    assert firework.state == FireworkState.WAITING
    assert firework.time_elapsed == 0
    assert firework.current_particles == []
    assert firework.form == Instant(used=False)

    firework.update(T0 + 5.0, 0.0)
    assert len(firework.current_particles) == 3


def test_sustained_waits_for_interval() -> None:
    firework = _sustained(interval=0.5)
    firework.update(T0, 0.25)
    firework.update(T0 + 0.25, 0.25)
    assert firework.current_particles == []
    assert firework.form.timer == pytest.approx(0.5)
    firework.update(T0 + 0.5, 0.125)
    assert len(firework.current_particles) == 1
    assert firework.form.timer == pytest.approx(0.125)


def test_sustained_emission_independent_of_chunking() -> None:
    chunked = _sustained(interval=0.5)
    for frame in range(9):
        chunked.update(T0 + frame * 0.125, 0.125)

    single = _sustained(interval=0.5)
    single.update(T0, 1.125)

    assert len(chunked.current_particles) == len(single.current_particles) == 2
    assert chunked.form.timer == pytest.approx(0.125)
    assert single.form.timer == pytest.approx(0.125)



def test_sustained_boundary_is_exact_across_frame_sizes() -> None:
    chunked = _sustained(interval=0.3)
    for frame in range(3):
        chunked.update(T0 + frame * 0.1, 0.1)

    single = _sustained(interval=0.3)
    single.update(T0, 0.3)

    assert chunked.current_particles == []
    assert single.current_particles == []
    assert chunked.form.timer == single.form.timer == pytest.approx(0.3)

    chunked.update(T0 + 0.3, 0.1)
    single.update(T0 + 0.3, 0.1)
    assert len(chunked.current_particles) == len(single.current_particles) == 1

def test_sustained_samples_without_replacement() -> None:
    firework = _sustained(count=5, interval=0.1)
    firework.update(T0, 0.45)
    assert len(firework.current_particles) == 4
    templates = [p.config for p in firework.current_particles]
    assert len({id(t) for t in templates}) == 4
    assert all(t in firework.particles for t in templates)


def test_sustained_catch_up_is_capped_by_templates() -> None:
    firework = _sustained(count=3, interval=0.1)
    firework.update(T0, 1.05)
    assert len(firework.current_particles) == 3


def test_sustained_stops_after_lasts_and_goes() -> None:
    firework = Firework(
        particles=_templates(4, life_time=0.2),
        form=Sustained(lasts=1.0, time_interval=0.1),
        init_time=T0,
    )
    for frame in range(12):
        firework.update(T0 + frame * 0.125, 0.125)
    emitted_frames = []
    for frame in range(12, 20):
        before = len(firework.current_particles)
        firework.update(T0 + frame * 0.125, 0.125)
        emitted_frames.append(len(firework.current_particles) > before)
    assert not any(emitted_frames)
    assert firework.state == FireworkState.GONE


def test_sustained_reset_clears_timer() -> None:
    firework = _sustained(interval=0.5)
    firework.update(T0, 0.3)
    firework.reset(now=T0)
    assert firework.form.timer == 0


def test_negative_dt_is_clamped() -> None:
    firework = _instant()
    firework.update(T0, -0.5)
    assert firework.time_elapsed == 0
    assert all(p.time_elapsed == 0 for p in firework.current_particles)


def test_config_setters_return_copies() -> None:
    base = FireworkConfig()
    heavy = base.with_gravity_scale(2.0).with_drag_scale(0.1).with_gradient_enabled(True)
    assert (base.gravity_scale, base.drag_scale, base.enable_gradient) == (1.0, 0.28, False)
    assert (heavy.gravity_scale, heavy.drag_scale, heavy.enable_gradient) == (2.0, 0.1, True)
    curved = base.with_gradient_curve(lambda x: 0.5)
    assert curved.gradient_curve(0.3) == 0.5
    assert base.gradient_curve(0.3) == 1.0
    base.set_enable_gradient(True)
    assert base.enable_gradient


@pytest.mark.parametrize(
    "kwargs",
    [
        {"particles": []},
        {"particles": _templates(1), "spawn_after": -1.0},
    ],
)
def test_invalid_firework_fails_fast(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        Firework(**kwargs)


@pytest.mark.parametrize("lasts, interval", [(-1.0, 0.1), (1.0, 0.0), (1.0, -0.5)])
def test_invalid_sustained_form_fails_fast(lasts: float, interval: float) -> None:
    with pytest.raises(ValueError):
        Sustained(lasts=lasts, time_interval=interval)


def test_manager_loops_static_show() -> None:
    manager = FireworkManager([_instant(life_time=0.1), _instant(spawn_after=0.1, life_time=0.2)], enable_loop=True)
    manager.update(T0, 0.0)
    manager.update(T0 + 0.15, 0.15)
    assert manager.fireworks[0].is_gone()
    assert not manager.is_gone()
    manager.update(T0 + 0.3, 0.15)
    assert all(f.state == FireworkState.WAITING for f in manager.fireworks)
    assert len(manager) == 2


def test_manager_without_loop_stays_gone() -> None:
    manager = FireworkManager([_instant(life_time=0.1)])
    manager.update(T0, 0.0)
    manager.update(T0 + 0.2, 0.2)
    manager.update(T0 + 0.4, 0.2)
    assert manager.is_gone()
    assert len(manager) == 1


def test_dynamic_manager_prunes_gone_and_ignores_loop() -> None:
    manager = FireworkManager(install_form=InstallForm.DYNAMIC, enable_loop=True)
    manager.add_firework(_instant(life_time=0.1))
    manager.add_firework(_instant(life_time=5.0))
    manager.update(T0, 0.0)
    manager.update(T0 + 0.2, 0.2)
    assert len(manager) == 1
    assert manager.fireworks[0].current_particles[0].config.life_time == 5.0


def test_manager_insert_and_alive_fireworks() -> None:
    manager = FireworkManager()
    first, second = _instant(), _instant(spawn_after=5.0)
    manager.add_fireworks([second])
    manager.insert_firework(0, first)
    assert manager.fireworks == [first, second]
    manager.update(T0, 0.0)
    assert list(manager.alive_fireworks()) == [first]


def test_manager_reset_restarts_every_firework() -> None:
    manager = FireworkManager([_instant(), _instant()])
    manager.update(T0, 0.1)
    manager.reset(now=T0 + 1)
    assert all(f.state == FireworkState.WAITING and f.init_time == T0 + 1 for f in manager.fireworks)
