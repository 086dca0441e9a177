"""
canvas-lang Interpreter.

Walks a ``Canvas`` once, left to right, threading an output buffer through
the commands. Drawing commands append rendered text to the buffer; ``wait``,
``rainbow`` and ``animate`` record display steps on a timeline; ``frame``
blocks render into their own buffer and register the result for the frame
loop. The outcome is a ``Scene`` that the player turns into terminal output.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from canvaslang.compiler.ast_nodes import (
    Animate,
    ASTVisitor,
    Background,
    Canvas,
    Circle,
    Command,
    Frame,
    Line,
    Rainbow,
    Rect,
    Text,
    Variable,
    Wait,
)
from canvaslang.config import RuntimeConfig
from canvaslang.render.renderer import Renderer
from canvaslang.runtime.timeline import Pause, Scene, Show, Step

logger = logging.getLogger(__name__)

INITIAL_BACKGROUND = "black"
HUE_CYCLE = 360


@dataclass
class InterpreterState:
    """
    Mutable state of one evaluation.

    Attributes:
        background: Current background color
        variables: Declared variables (stored, never interpolated)
        frames: Rendered frames registered by ``frame`` commands
        canvas_output: Accumulated top-level output
        timeline: Live display steps in source order
    """

    background: str = INITIAL_BACKGROUND
    variables: dict[str, float] = field(default_factory=dict)
    frames: list[str] = field(default_factory=list)
    canvas_output: str = ""
    timeline: list[Step] = field(default_factory=list)


def animation_timing(duration: int, frame_count: int, min_delay: int = 50) -> tuple[int, int]:
    """
    Compute the per-frame delay and number of steps of an animate block.

    Returns:
        ``(frame_delay, steps)`` where ``frame_delay`` is
        ``max(min_delay, duration // frame_count)`` and ``steps`` is
        ``ceil(duration / frame_delay)``.

    Example:
        animation_timing(1000, 3) -> (333, 4)
    """
    frame_delay = max(min_delay, duration // frame_count)
    if frame_delay <= 0:
        return frame_delay, 0
    steps = max(0, math.ceil(duration / frame_delay))
    return frame_delay, steps


class Interpreter(ASTVisitor):
    """
    Evaluates a canvas into a ``Scene``.

    ``_render`` sets the buffer a command sees; each ``visit_*`` method reads
    it and returns the buffer that follows the command.

    Usage:
        scene = Interpreter().evaluate(canvas)
    """

    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        config: Optional[RuntimeConfig] = None,
    ) -> None:
        self.config = config or (renderer.config if renderer else RuntimeConfig())
        self.renderer = renderer or Renderer(self.config)
        self.state = InterpreterState()
        self._buffer = ""

    def evaluate(self, canvas: Canvas) -> Scene:
        """
        Walk ``canvas`` and return the resulting scene.

        The interpreter can be reused; every call starts from fresh state.
        """
        self.state = InterpreterState()
        self.visit(canvas)

        state = self.state
        logger.debug(
            "Evaluated %d command(s): %d frame(s), %d timeline step(s)",
            len(canvas.commands),
            len(state.frames),
            len(state.timeline),
        )
        return Scene(
            timeline=list(state.timeline),
            frames=tuple(state.frames),
            canvas_output=state.canvas_output,
            background=state.background,
            variables=dict(state.variables),
        )

    def _render(self, command: Command, buffer: str) -> str:
        self._buffer = buffer
        return self.visit(command)

    def _render_block(self, commands: tuple[Command, ...]) -> str:
        """Render ``commands`` into a fresh buffer."""
        buffer = ""
        for command in commands:
            buffer = self._render(command, buffer)
        return buffer

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def visit_canvas(self, node: Canvas) -> str:
        self.state.canvas_output = self._render_block(node.commands)
        return self.state.canvas_output

    def visit_background(self, node: Background) -> str:
        self.state.background = node.color
        return self._buffer

    def visit_circle(self, node: Circle) -> str:
        return self._buffer + self.renderer.circle(node.radius, node.fill)

    def visit_rect(self, node: Rect) -> str:
        return self._buffer + self.renderer.rect(node.width, node.height, node.fill)

    def visit_text(self, node: Text) -> str:
        return self._buffer + self.renderer.text(node.text, node.color, node.size)

    def visit_line(self, node: Line) -> str:
        return self._buffer + self.renderer.line(node.x1, node.y1, node.x2, node.y2, node.color)

    def visit_variable(self, node: Variable) -> str:
        self.state.variables[node.name] = node.value
        return self._buffer

    def visit_wait(self, node: Wait) -> str:
        self.state.timeline.append(Pause(node.duration))
        return self._buffer

    def visit_rainbow(self, node: Rainbow) -> str:
        buffer = self._buffer
        # The hue only depends on offset % 360.
        overlays: dict[int, str] = {}
        for offset in range(node.duration):
            hue = offset % HUE_CYCLE
            if hue not in overlays:
                overlays[hue] = self.renderer.rainbow(node.text, hue)
            self.state.timeline.append(
                Show(
                    buffer,
                    self.state.background,
                    self.config.rainbow_step_ms,
                    overlay=overlays[hue],
                )
            )
        return buffer

    def visit_frame(self, node: Frame) -> str:
        buffer = self._buffer
        self.state.frames.append(self._render_block(node.commands))
        return buffer

    def visit_animate(self, node: Animate) -> str:
        buffer = self._buffer
        # Direct frame children are played here and never join the frame loop.
        rendered = [
            self._render_block(child.commands)
            for child in node.frames
            if isinstance(child, Frame)
        ]
        if not rendered:
            logger.warning("animate block without frame children has nothing to play")
            return buffer

        frame_delay, steps = animation_timing(
            node.duration, len(rendered), self.config.min_frame_delay_ms
        )
        for index in range(steps):
            self.state.timeline.append(
                Show(rendered[index % len(rendered)], self.state.background, frame_delay)
            )
        return buffer


def evaluate(canvas: Canvas, config: Optional[RuntimeConfig] = None) -> Scene:
    """Evaluate ``canvas`` with a default renderer."""
    return Interpreter(config=config).evaluate(canvas)
