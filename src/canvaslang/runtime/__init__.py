"""
canvas-lang Runtime Package.

- Interpreter: evaluates a Canvas into a Scene
- Timeline: Show/Pause display steps and the Scene result
- Player: replays a Scene with real pauses
- Display: in-place terminal redraw
"""

from canvaslang.runtime.display import TerminalDisplay
from canvaslang.runtime.interpreter import (
    InterpreterState,
    Interpreter,
    animation_timing,
    evaluate,
)
from canvaslang.runtime.player import Player, run
from canvaslang.runtime.timeline import Pause, Scene, Show

__all__ = [
    "Interpreter",
    "InterpreterState",
    "Pause",
    "Player",
    "Scene",
    "Show",
    "TerminalDisplay",
    "animation_timing",
    "evaluate",
    "run",
]
