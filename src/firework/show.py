"""Frame loop tying the simulation, compositor and terminal together."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable
import logging
import time

import pygame

from .console import ESCAPE, Console, strip_escape_sequences, terminal_size
from .demo import build_demo
from .fireworks import FireworkManager
from .gen import dyn_gen
from .settings import ShowSettings
from .term import Terminal
from .utils import FrameClock

logger = logging.getLogger(__name__)

QUIT_KEYS = {ESCAPE, "q", "Q"}
RESTART_KEYS = {"r", "R"}


class ShowState(Enum):
    """Finite states of the show loop."""

    RUNNING = auto()
    STOPPED = auto()


class FireworkShow:
    """Drives one firework show until the user quits."""

    def __init__(
        self,
        settings: ShowSettings,
        console: Console | None = None,
        size_source: Callable[[], tuple[int, int]] = terminal_size,
    ) -> None:
        pygame.init()
        self.settings = settings
        self.console = console or Console()
        self.size_source = size_source
        self.clock = pygame.time.Clock()
        self.frame_clock = FrameClock()
        self.state = ShowState.RUNNING

        self.size = self.size_source()
        self.terminal = Terminal(self.size, cjk=settings.cjk)
        self.manager = self._create_manager(settings)

    def _create_manager(self, settings: ShowSettings) -> FireworkManager:
        manager = FireworkManager()
        if settings.dynamic:
            manager.enable_dynamic_install()
            logger.info("starting dynamic show")
        else:
            manager.add_fireworks(build_demo(settings.demo, self.size, settings.gradient))
            manager.set_enable_loop(settings.looping)
            logger.info("starting demo %d with %d fireworks", settings.demo, len(manager))
        return manager

    @property
    def scene_width(self) -> int:
        """Width in scene units; without cjk every unit covers two columns."""
        columns = self.terminal.size[0]
        return columns if self.settings.cjk else columns // 2

    def run(self) -> None:
        """Main event/update/render loop."""
        try:
            with self.console:
                while self.state == ShowState.RUNNING:
                    self._handle_events()
                    if self.state != ShowState.RUNNING:
                        break
                    self.step(time.monotonic())
                    self.clock.tick(self.settings.fps)
        finally:
            logger.info("show stopped")
            pygame.quit()

    def _handle_events(self) -> None:
        keys = strip_escape_sequences(self.console.read_keys())
        if any(key in QUIT_KEYS for key in keys):
            self.state = ShowState.STOPPED
            return
        if any(key in RESTART_KEYS for key in keys):
            logger.info("restart requested")
            self.manager.reset()

        size = self.size_source()
        if size != self.size:
            logger.info("terminal resized from %s to %s", self.size, size)
            self.resize(size)

    def resize(self, size: tuple[int, int]) -> None:
        """Restart the show on a grid of the new size."""
        self.size = size
        self.manager.reset()
        self.terminal.reinit(size)

    def step(self, now: float) -> None:
        """Compute and draw a single frame."""
        dt = self.frame_clock.tick(now)
        if self.settings.dynamic:
            dyn_gen(self.manager, self.scene_width, self.terminal.size[1], self.settings.gradient)
        self.manager.update(now, dt)
        self.terminal.render(self.manager)
        self.terminal.print(self.console.stdout)
