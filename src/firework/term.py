"""Character-grid compositor that rasterizes particle trails for a terminal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO
import random

from .fireworks import FireworkManager
from .particle import LifeState, Particle
from .utils import WHITE, Cell, Color, Vector, clamp, distance_squared, round_point

BLANK = " "
LINE_STEP = 0.2
EPSILON = 1e-6
INF = float("inf")

# (density upper bound, ascii palette, cjk palette); the last row catches the rest.
ALIVE_PALETTES: tuple[tuple[float, str, str], ...] = (
    (0.3, "`'. ", "。，”“』 『￥"),
    (0.5, "/\\|()1{}[]?", "一二三二三五十十已于上下义天"),
    (0.7, "oahkbdpqwmZO0QLCJUYXzcvunxrjft*", "时中自字木月日目火田左右点以"),
    (INF, "$@B%8&WM#", "𰻞"),
)
DECLINING_PALETTES: tuple[tuple[float, str, str], ...] = (
    (0.2, "` '. ", "？。， 『』 ||"),
    (0.6, "-_ +~<> i!lI;:,\"^", "（）【】*￥|十一二三六"),
    (0.85, "/\\| ()1{}[ ]?", "人中亿入上下火土"),
    (INF, "xrjft*", "繁荣昌盛国泰民安龍龖龠龜耋"),
)
DYING_PALETTES: tuple[tuple[float, str, str], ...] = (
    (0.6, ".  ,`.    ^,' . ", "。 『 』 、： |。，— ……"),
    (INF, " /\\| ( )  1{} [  ]?i !l I;: ,\"^ ", "|￥人 上十入乙小 下"),
)
PALETTES = {
    LifeState.ALIVE: ALIVE_PALETTES,
    LifeState.DECLINING: DECLINING_PALETTES,
    LifeState.DYING: DYING_PALETTES,
}


@dataclass(slots=True)
class Char:
    """A single glyph with its foreground colour."""

    text: str = BLANK
    color: Color = WHITE


def palette_for(state: LifeState, density: float, cjk: bool) -> str:
    """Return the glyph palette for a life stage and trail density."""
    rows = PALETTES[state]
    for bound, ascii_palette, cjk_palette in rows:
        if density < bound:
            return cjk_palette if cjk else ascii_palette
    raise ValueError(f"no palette for density {density}")


def shift_gradient(color: Color, scale: float) -> Color:
    """Scale an RGB colour, truncating each channel into 0..255."""
    r, g, b = color
    return (
        int(clamp(int(r * scale), 0, 255)),
        int(clamp(int(g * scale), 0, 255)),
        int(clamp(int(b * scale), 0, 255)),
    )


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


def construct_line(a: Vector, b: Vector) -> list[Cell]:
    """Walk from ``a`` to ``b`` and return the grid cells the segment crosses.

    The axis with the larger delta drives the walk in ``LINE_STEP`` increments,
    the other axis follows the slope. The walk stops once the remaining
    distance to ``b`` stops shrinking.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    path = [round_point(a)]
    if dx == 0 and dy == 0:
        return path

    if abs(dx) >= abs(dy):
        step_x = _sign(dx) * LINE_STEP
        step_y = _sign(dy) * abs(LINE_STEP * dy / dx)
    else:
        step_y = _sign(dy) * LINE_STEP
        step_x = _sign(dx) * abs(LINE_STEP * dx / dy)

    point = Vector(a)
    best = distance_squared(a, b) + EPSILON
    while distance_squared(point, b) <= best:
        cell = round_point(point)
        if cell != path[-1]:
            path.append(cell)
            best = distance_squared(point, b)
        point.x += step_x
        point.y += step_y
    return path


class Terminal:
    """Grid of coloured characters the fireworks are composited into."""

    def __init__(self, size: tuple[int, int], cjk: bool = False, rng: random.Random | None = None) -> None:
        self.cjk = cjk
        self.rng = rng or random.Random()
        self.size = (0, 0)
        self.screen: list[list[Char]] = []
        self.reinit(size)

    def reinit(self, size: tuple[int, int]) -> None:
        """Resize the grid for new terminal dimensions (columns, rows)."""
        columns, rows = size
        if columns <= 0 or rows <= 0:
            raise ValueError(f"terminal size must be positive, got {size}")
        if self.cjk:
            columns = max(1, (columns - 1) // 2)
        self.size = (columns, rows)
        self.clear_screen()

    def clear_screen(self) -> None:
        columns, rows = self.size
        self.screen = [[Char() for _ in range(columns)] for _ in range(rows)]

    def inside(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size[0] and 0 <= y < self.size[1]

    def render(self, manager: FireworkManager) -> None:
        """Composite every alive firework; later fireworks end up on top."""
        self.clear_screen()
        for firework in reversed(manager.fireworks):
            if not firework.is_alive():
                continue
            config = firework.config
            for particle in reversed(firework.current_particles):
                if config.enable_gradient:
                    color = shift_gradient(particle.config.color, config.gradient_curve(particle.progress))
                else:
                    color = particle.config.color
                self._draw_particle(particle, color)

    def _draw_particle(self, particle: Particle, color: Color) -> None:
        state = particle.life_state
        if state == LifeState.DEAD:
            return
        trail_length = particle.config.trail_length
        points = [p if self.cjk else Vector(p.x * 2, p.y) for p in reversed(particle.trail)]
        for idx in range(len(points) - 1):
            density = (trail_length - idx - 1) / trail_length
            palette = palette_for(state, density, self.cjk)
            for x, y in construct_line(points[idx], points[idx + 1]):
                if not self.inside((x, y)) or self.screen[y][x].text != BLANK:
                    continue
                self.screen[y][x] = Char(self.rng.choice(palette), color)

    def painted(self) -> dict[Cell, Char]:
        """Return every non-blank cell keyed by (x, y)."""
        return {
            (x, y): char
            for y, line in enumerate(self.screen)
            for x, char in enumerate(line)
            if char.text != BLANK
        }

    def print(self, stream: TextIO) -> None:
        """Write the grid to ``stream`` as ANSI escapes and flush once."""
        step = 2 if self.cjk else 1
        chunks: list[str] = []
        current: Color | None = None
        for y, line in enumerate(self.screen):
            for x, char in enumerate(line):
                chunks.append(f"\x1b[{y + 1};{x * step + 1}H")
                if char.color != current:
                    current = char.color
                    chunks.append("\x1b[38;2;{};{};{}m".format(*current))
                chunks.append(char.text)
        stream.write("".join(chunks))
        stream.flush()
