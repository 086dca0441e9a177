"""
Runtime configuration for canvas-lang.

Timings follow the language's fixed pacing: the top-level frame loop pauses
100 ms per frame, rainbow text advances every 10 ms and animate blocks never
step faster than 50 ms per frame.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Mapping, Optional, TextIO

logger = logging.getLogger(__name__)

DEFAULT_FONT = "doom"


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """
    Settings shared by the renderer and the player.

    Attributes:
        color: Emit ANSI color codes
        font: Figlet font used for ``text`` commands
        small_font: Figlet font used when ``size`` is at or below ``small_size``
        small_size: Size threshold between the two fonts
        frame_interval_ms: Pause between frames of the top-level frame loop
        rainbow_step_ms: Pause between hue steps of ``rainbow``
        min_frame_delay_ms: Lower bound for an ``animate`` frame delay
    """

    color: bool = True
    font: str = DEFAULT_FONT
    small_font: str = DEFAULT_FONT
    small_size: int = 15
    frame_interval_ms: int = 100
    rainbow_step_ms: int = 10
    min_frame_delay_ms: int = 50

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ) -> RuntimeConfig:
        """
        Build a config from the environment.

        Colors are off when ``NO_COLOR`` is set or the output stream is not a
        TTY. ``CANVASLANG_FONT`` selects the figlet font and
        ``CANVASLANG_FRAME_INTERVAL`` the frame loop pause in milliseconds.
        """
        environ = os.environ if environ is None else environ
        stream = sys.stdout if stream is None else stream

        color = not environ.get("NO_COLOR") and stream.isatty()
        config = cls(color=color)

        font = environ.get("CANVASLANG_FONT")
        if font:
            config = replace(config, font=font, small_font=font)

        interval = environ.get("CANVASLANG_FRAME_INTERVAL")
        if interval:
            try:
                config = replace(config, frame_interval_ms=max(0, int(interval)))
            except ValueError:
                logger.warning("Ignoring invalid CANVASLANG_FRAME_INTERVAL=%r", interval)

        return config

    def with_overrides(self, **overrides: object) -> RuntimeConfig:
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)
