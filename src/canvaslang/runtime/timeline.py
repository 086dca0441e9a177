"""
Display steps produced by the interpreter.

Evaluating a canvas never touches the terminal. It records what to show and
for how long, in source order, and the player replays those steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class Show:
    """
    Display ``content`` over ``background``, then hold it.

    Attributes:
        content: Rendered text (already colored, background not applied)
        background: Background color in effect when the step was recorded
        hold_ms: Pause after drawing, in milliseconds
        overlay: Text drawn after ``content``; rainbow steps share one
            ``content`` string and only vary this
    """

    content: str
    background: str
    hold_ms: int
    overlay: str = ""

    @property
    def text(self) -> str:
        """The full text to display."""
        return self.content + self.overlay


@dataclass(frozen=True, slots=True)
class Pause:
    """Pause without drawing."""

    duration_ms: int


Step = Union[Show, Pause]


@dataclass
class Scene:
    """
    Result of evaluating a canvas.

    Attributes:
        timeline: Live display steps (wait, rainbow, animate) in source order
        frames: Frames registered by ``frame`` commands for the endless loop
        canvas_output: Accumulated output of top-level drawing commands
        background: Background color after the whole walk
        variables: Declared variables
    """

    timeline: list[Step] = field(default_factory=list)
    frames: tuple[str, ...] = ()
    canvas_output: str = ""
    background: str = "black"
    variables: dict[str, float] = field(default_factory=dict)

    @property
    def loops_forever(self) -> bool:
        """True when playback ends in the endless frame loop."""
        return bool(self.frames)

    @property
    def total_duration_ms(self) -> int:
        """Time spent replaying the timeline, frame loop excluded."""
        total = 0
        for step in self.timeline:
            total += step.hold_ms if isinstance(step, Show) else step.duration_ms
        return total
