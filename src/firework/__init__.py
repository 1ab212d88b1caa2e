"""Terminal firework simulation and renderer."""

import os

# pygame only supplies vectors and frame pacing here; never open a window or audio device.
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
