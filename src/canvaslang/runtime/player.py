"""
Playback of evaluated scenes.

The player replays a scene's timeline in order and then either shows the
final canvas once or, when the program registered frames, cycles through
them until the process is stopped. ``max_cycles`` bounds that loop for tests
and for the ``--loops`` CLI option.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

from canvaslang.compiler.ast_nodes import Canvas
from canvaslang.config import RuntimeConfig
from canvaslang.render.renderer import Renderer
from canvaslang.runtime.interpreter import Interpreter
from canvaslang.runtime.timeline import Pause, Scene, Show

logger = logging.getLogger(__name__)


class Display(Protocol):
    """What the player needs from a display sink."""

    def update(self, text: str) -> None: ...

    def final(self, text: str) -> None: ...


def sleep_ms(milliseconds: int) -> None:
    """Sleep for given number of milliseconds."""
    time.sleep(milliseconds / 1000)


class Player:
    """
    Drives timed output for a ``Scene``.

    Args:
        display: Sink receiving composited frames
        renderer: Used to paint the background under each frame
        sleep: Called with a pause length in milliseconds
    """

    def __init__(
        self,
        display: Display,
        renderer: Optional[Renderer] = None,
        sleep: Callable[[int], None] = sleep_ms,
    ) -> None:
        self.display = display
        self.renderer = renderer or Renderer()
        self.sleep = sleep

    @property
    def config(self) -> RuntimeConfig:
        return self.renderer.config

    def play_timeline(self, scene: Scene) -> None:
        """Replay live steps recorded during evaluation."""
        for step in scene.timeline:
            if isinstance(step, Show):
                self.display.update(self.renderer.compose(step.background, step.text))
                self.sleep(step.hold_ms)
            elif isinstance(step, Pause):
                self.sleep(step.duration_ms)
            else:
                raise TypeError(f"Unknown timeline step: {step!r}")

    def loop_frames(self, scene: Scene, max_cycles: Optional[int] = None) -> int:
        """
        Cycle through the registered frames over the final background.

        Runs forever unless ``max_cycles`` is given.

        Returns:
            Number of completed cycles.
        """
        if not scene.frames:
            return 0

        interval = self.config.frame_interval_ms
        cycles = 0
        logger.debug("Entering frame loop with %d frame(s)", len(scene.frames))
        while max_cycles is None or cycles < max_cycles:
            for frame in scene.frames:
                self.display.update(self.renderer.compose(scene.background, frame))
                self.sleep(interval)
            cycles += 1
        return cycles

    def play(self, scene: Scene, max_cycles: Optional[int] = None) -> None:
        """Replay the timeline, then loop frames or show the final canvas."""
        self.play_timeline(scene)

        if scene.frames:
            self.loop_frames(scene, max_cycles)
        else:
            self.display.final(self.renderer.compose(scene.background, scene.canvas_output))


def run(
    canvas: Canvas,
    display: Display,
    config: Optional[RuntimeConfig] = None,
    sleep: Callable[[int], None] = sleep_ms,
    max_cycles: Optional[int] = None,
) -> Scene:
    """
    Evaluate ``canvas`` and play it on ``display``.

    Does not return when the program registered frames, unless
    ``max_cycles`` is given.
    """
    renderer = Renderer(config)
    scene = Interpreter(renderer).evaluate(canvas)
    Player(display, renderer, sleep).play(scene, max_cycles)
    return scene
