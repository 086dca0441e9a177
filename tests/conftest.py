"""
Pytest configuration and shared fixtures for canvas-lang tests.
"""

from dataclasses import dataclass, field

import pytest

from canvaslang.compiler.ast_nodes import Canvas
from canvaslang.compiler.lexer import Lexer
from canvaslang.compiler.parser import Parser
from canvaslang.compiler.tokens import Token
from canvaslang.config import RuntimeConfig
from canvaslang.render.renderer import Renderer
from canvaslang.runtime.interpreter import Interpreter
from canvaslang.runtime.timeline import Scene


@dataclass
class FakeDisplay:
    """Records everything the player sends to the screen."""

    updates: list[str] = field(default_factory=list)
    finals: list[str] = field(default_factory=list)

    def update(self, text: str) -> None:
        self.updates.append(text)

    def final(self, text: str) -> None:
        self.finals.append(text)


@dataclass
class FakeSleep:
    """Stands in for real sleeping; records each pause in milliseconds."""

    calls: list[int] = field(default_factory=list)

    def __call__(self, milliseconds: int) -> None:
        self.calls.append(milliseconds)

    @property
    def total(self) -> int:
        return sum(self.calls)


@pytest.fixture
def plain_config() -> RuntimeConfig:
    """Config with ANSI colors off so rendered output is plain text."""
    return RuntimeConfig(color=False)


@pytest.fixture
def renderer(plain_config) -> Renderer:
    return Renderer(plain_config)


@pytest.fixture
def lexer_factory():
    """Factory fixture for creating lexers."""

    def _create_lexer(source: str, filename: str = "test.canvas") -> Lexer:
        return Lexer(source, filename)

    return _create_lexer


@pytest.fixture
def tokenize(lexer_factory):
    """Fixture to tokenize source code."""

    def _tokenize(source: str) -> list[Token]:
        return lexer_factory(source).tokenize()

    return _tokenize


@pytest.fixture
def parse(tokenize):
    """Fixture to parse source code into a Canvas."""

    def _parse(source: str) -> Canvas:
        return Parser(tokenize(source), source, "test.canvas").parse()

    return _parse


@pytest.fixture
def evaluate(parse, renderer):
    """Fixture to evaluate source code into a Scene with colors off."""

    def _evaluate(source: str) -> Scene:
        return Interpreter(renderer).evaluate(parse(source))

    return _evaluate


@pytest.fixture
def display() -> FakeDisplay:
    return FakeDisplay()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()
