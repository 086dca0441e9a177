"""
Abstract Syntax Tree (AST) node definitions for canvas-lang.

A program is a single ``Canvas`` holding commands in source order. Each node
is immutable and carries its source location for error reporting; locations
are excluded from equality so hand-built trees compare equal to parsed ones.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from canvaslang.utils.errors import SourceLocation


class ASTNode(ABC):
    """Base class for all AST nodes."""

    location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass


class ASTVisitor(ABC):
    """
    Visitor pattern base class for AST traversal.

    Every command kind has a ``visit_*`` method here that raises, so a
    visitor missing a handler fails loudly instead of skipping the node.
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)

    def _unhandled(self, node: ASTNode) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} does not handle {type(node).__name__} nodes"
        )

    def visit_canvas(self, node: "Canvas") -> Any:
        return self._unhandled(node)

    def visit_background(self, node: "Background") -> Any:
        return self._unhandled(node)

    def visit_circle(self, node: "Circle") -> Any:
        return self._unhandled(node)

    def visit_rect(self, node: "Rect") -> Any:
        return self._unhandled(node)

    def visit_text(self, node: "Text") -> Any:
        return self._unhandled(node)

    def visit_line(self, node: "Line") -> Any:
        return self._unhandled(node)

    def visit_variable(self, node: "Variable") -> Any:
        return self._unhandled(node)

    def visit_rainbow(self, node: "Rainbow") -> Any:
        return self._unhandled(node)

    def visit_wait(self, node: "Wait") -> Any:
        return self._unhandled(node)

    def visit_frame(self, node: "Frame") -> Any:
        return self._unhandled(node)

    def visit_animate(self, node: "Animate") -> Any:
        return self._unhandled(node)


def _location_field() -> Any:
    return field(default=None, compare=False, repr=False)


# -----------------------------------------------------------------------------
# Drawing Commands
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Background(ASTNode):
    """
    Set the scene background color.

    Example:
        background "navy";

    ``color`` keeps the quotes of the string literal.
    """

    color: str
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_background(self)


@dataclass(frozen=True, slots=True)
class Circle(ASTNode):
    """
    A filled circle.

    Example:
        circle at(10, 5) radius 4 fill "red";
    """

    x: float
    y: float
    radius: float
    fill: str
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_circle(self)


@dataclass(frozen=True, slots=True)
class Rect(ASTNode):
    """
    A filled rectangle.

    Example:
        rect at(0, 0) width 8 height 3 fill "blue";
    """

    x: float
    y: float
    width: float
    height: float
    fill: str
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_rect(self)


@dataclass(frozen=True, slots=True)
class Text(ASTNode):
    """
    Large glyph text.

    Example:
        text "Hello" at(0, 0) size 20 color "yellow";

    ``text`` has its quotes removed; ``color`` keeps them.
    """

    text: str
    x: float
    y: float
    size: int
    color: str
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_text(self)


@dataclass(frozen=True, slots=True)
class Line(ASTNode):
    """
    A straight line between two grid points.

    Example:
        line from(0, 0) to(10, 4) color "green";
    """

    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_line(self)


# -----------------------------------------------------------------------------
# State and Timing Commands
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Variable(ASTNode):
    """
    A numeric variable declaration.

    Example:
        var speed = 2.5;
    """

    name: str
    value: float
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable(self)


@dataclass(frozen=True, slots=True)
class Rainbow(ASTNode):
    """
    Hue-cycling text shown live while the scene is evaluated.

    Example:
        rainbow "Party!" at(0, 0) duration 120;

    ``duration`` is the number of hue steps, not milliseconds.
    """

    text: str
    x: float
    y: float
    duration: int
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_rainbow(self)


@dataclass(frozen=True, slots=True)
class Wait(ASTNode):
    """
    Pause for ``duration`` milliseconds.

    Example:
        wait 500;
    """

    duration: int
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_wait(self)


# -----------------------------------------------------------------------------
# Blocks
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Frame(ASTNode):
    """
    A block rendered into its own buffer and registered for the frame loop.

    Example:
        frame { circle at(0, 0) radius 2 fill "red"; }
    """

    commands: tuple["Command", ...]
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_frame(self)


@dataclass(frozen=True, slots=True)
class Animate(ASTNode):
    """
    A block of frames played back immediately.

    Example:
        animate {
            frame { circle at(0, 0) radius 1 fill "red"; }
            frame { circle at(0, 0) radius 2 fill "red"; }
        } for 1000;

    ``frames`` holds every parsed child; only ``Frame`` children are played.
    ``duration`` is the total playback time in milliseconds.
    """

    frames: tuple["Command", ...]
    duration: int
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_animate(self)


Command = Union[
    Background, Circle, Rect, Text, Line, Variable, Rainbow, Wait, Frame, Animate
]


# -----------------------------------------------------------------------------
# Program
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Canvas(ASTNode):
    """
    Root node of a canvas-lang program.

    Attributes:
        commands: Top-level commands in declaration order
    """

    commands: tuple[Command, ...]
    location: Optional[SourceLocation] = _location_field()

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_canvas(self)


COMMAND_KEYWORDS: dict[str, type[ASTNode]] = {
    "background": Background,
    "circle": Circle,
    "rect": Rect,
    "text": Text,
    "line": Line,
    "animate": Animate,
    "var": Variable,
    "rainbow": Rainbow,
    "wait": Wait,
    "frame": Frame,
}

NODE_KEYWORDS: dict[type[ASTNode], str] = {
    node_type: keyword for keyword, node_type in COMMAND_KEYWORDS.items()
}
