"""
canvas-lang Parser.

A recursive descent parser that transforms a token list into an Abstract
Syntax Tree rooted at a ``Canvas`` node. Each command is a fixed positional
sequence of marker words, punctuation and values; the parser looks one token
ahead and aborts on the first mismatch.
"""

import logging
from typing import Callable, Optional

from canvaslang.compiler.ast_nodes import (
    Animate,
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
from canvaslang.compiler.tokens import Token, TokenType
from canvaslang.utils.errors import ParseError, SourceLocation

logger = logging.getLogger(__name__)


def _to_float(token: Token) -> float:
    return float(token.value)


def _to_int(token: Token) -> int:
    """Truncate a numeric literal to an integer (``2.9`` -> ``2``)."""
    return int(float(token.value))


def _strip_quotes(token: Token) -> str:
    return token.value.replace('"', "")


class Parser:
    """
    Recursive descent parser for canvas-lang.

    Parses a list of tokens into a ``Canvas`` AST.

    Usage:
        parser = Parser(tokens)
        ast = parser.parse()
    """

    def __init__(self, tokens: list[Token], source: str = "",
                 filename: str = "<input>") -> None:
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer (no EOF token required)
            source: Optional source code, used to place the EOF location
            filename: Optional filename for error reporting
        """
        self.tokens = tokens
        self.pos = 0
        self._source = source
        self._filename = filename
        self._eof = Token(TokenType.EOF, "EOF", self._eof_location())

        self._commands: dict[str, Callable[[], Command]] = {
            "background": self._parse_background,
            "circle": self._parse_circle,
            "rect": self._parse_rect,
            "text": self._parse_text,
            "line": self._parse_line,
            "animate": self._parse_animate,
            "var": self._parse_variable,
            "rainbow": self._parse_rainbow,
            "wait": self._parse_wait,
            "frame": self._parse_frame,
        }

    def _eof_location(self) -> Optional[SourceLocation]:
        """Locate the synthetic EOF token just past the last real token."""
        if self._source:
            lines = self._source.split("\n")
            return SourceLocation(
                line=len(lines),
                column=len(lines[-1]) + 1,
                offset=len(self._source),
                filename=self._filename,
            )
        if self.tokens and self.tokens[-1].location is not None:
            last = self.tokens[-1]
            return SourceLocation(
                line=last.location.line,
                column=last.location.column + len(last.value),
                offset=last.location.offset + len(last.value),
                filename=last.location.filename,
            )
        return None

    @property
    def _current(self) -> Token:
        """Get the current token, or EOF past the end."""
        if self.pos >= len(self.tokens):
            return self._eof
        return self.tokens[self.pos]

    def _is_at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self._current.type == TokenType.EOF

    def _check(self, *types: TokenType) -> bool:
        """Check if the current token is one of the given types."""
        return self._current.type in types

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self._current
        if not self._is_at_end():
            self.pos += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        """Consume current token if it matches, else raise error."""
        if self._check(token_type):
            return self._advance()
        raise self._error(
            f"Expected {token_type.name}, got {self._current.type.name}",
            expected=token_type.name,
        )

    def _error(self, message: str, expected: Optional[str] = None) -> ParseError:
        """Create a parser error at the current token."""
        token = self._current
        return ParseError(message, token.location, expected=expected, found=token)

    # -------------------------------------------------------------------------
    # Program Parsing
    # -------------------------------------------------------------------------

    def parse(self) -> Canvas:
        """
        Parse the entire program.

        Grammar:
            canvas := IDENTIFIER '{' Command* '}'

        Returns:
            The root Canvas AST node.
        """
        loc = self._current.location
        self._expect(TokenType.IDENTIFIER)  # canvas
        commands = self._parse_block_body()

        if not self._is_at_end():
            logger.warning(
                "Ignoring %d token(s) after the closing brace of the canvas",
                len(self.tokens) - self.pos,
            )

        return Canvas(commands, location=loc)

    def _parse_block_body(self) -> tuple[Command, ...]:
        """Parse ``'{' Command* '}'``."""
        self._expect(TokenType.LBRACE)

        commands: list[Command] = []
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            commands.append(self._parse_command())

        self._expect(TokenType.RBRACE)
        return tuple(commands)

    def _parse_command(self) -> Command:
        """Dispatch on the leading identifier of a command."""
        token = self._current

        if token.type == TokenType.IDENTIFIER:
            handler = self._commands.get(token.value)
            if handler is None:
                raise self._error(f"Unknown command: {token.value}", expected="command")
            return handler()

        raise self._error(f"Expected command, got {token.type.name}", expected="command")

    def _parse_point(self) -> tuple[float, float]:
        """Parse ``'(' NUMBER ',' NUMBER ')'``."""
        self._expect(TokenType.LPAREN)
        x = _to_float(self._expect(TokenType.NUMBER))
        self._expect(TokenType.COMMA)
        y = _to_float(self._expect(TokenType.NUMBER))
        self._expect(TokenType.RPAREN)
        return x, y

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def _parse_background(self) -> Background:
        """
        Handles:
            background "red";
        """
        loc = self._advance().location  # background
        color = self._expect(TokenType.STRING)
        self._expect(TokenType.SEMICOLON)
        return Background(color.value, location=loc)

    def _parse_circle(self) -> Circle:
        """
        Handles:
            circle at(x, y) radius R fill "color";
        """
        loc = self._advance().location  # circle
        self._expect(TokenType.IDENTIFIER)  # at
        x, y = self._parse_point()
        self._expect(TokenType.IDENTIFIER)  # radius
        radius = _to_float(self._expect(TokenType.NUMBER))
        self._expect(TokenType.IDENTIFIER)  # fill
        fill = self._expect(TokenType.STRING)
        self._expect(TokenType.SEMICOLON)
        return Circle(x, y, radius, fill.value, location=loc)

    def _parse_rect(self) -> Rect:
        """
        Handles:
            rect at(x, y) width W height H fill "color";
        """
        loc = self._advance().location  # rect
        self._expect(TokenType.IDENTIFIER)  # at
        x, y = self._parse_point()
        self._expect(TokenType.IDENTIFIER)  # width
        width = _to_float(self._expect(TokenType.NUMBER))
        self._expect(TokenType.IDENTIFIER)  # height
        height = _to_float(self._expect(TokenType.NUMBER))
        self._expect(TokenType.IDENTIFIER)  # fill
        fill = self._expect(TokenType.STRING)
        self._expect(TokenType.SEMICOLON)
        return Rect(x, y, width, height, fill.value, location=loc)

    def _parse_text(self) -> Text:
        """
        Handles:
            text "Hello" at(x, y) size N color "color";
        """
        loc = self._advance().location  # text
        text = self._expect(TokenType.STRING)
        self._expect(TokenType.IDENTIFIER)  # at
        x, y = self._parse_point()
        self._expect(TokenType.IDENTIFIER)  # size
        size = _to_int(self._expect(TokenType.NUMBER))
        self._expect(TokenType.IDENTIFIER)  # color
        color = self._expect(TokenType.STRING)
        self._expect(TokenType.SEMICOLON)
        return Text(_strip_quotes(text), x, y, size, color.value, location=loc)

    def _parse_line(self) -> Line:
        """
        Handles:
            line from(x1, y1) to(x2, y2) color "color";
        """
        loc = self._advance().location  # line
        self._expect(TokenType.IDENTIFIER)  # from
        x1, y1 = self._parse_point()
        self._expect(TokenType.IDENTIFIER)  # to
        x2, y2 = self._parse_point()
        self._expect(TokenType.IDENTIFIER)  # color
        color = self._expect(TokenType.STRING)
        self._expect(TokenType.SEMICOLON)
        return Line(x1, y1, x2, y2, color.value, location=loc)

    def _parse_animate(self) -> Animate:
        """
        Handles:
            animate { frame { ... } frame { ... } } for 1000;
        """
        loc = self._advance().location  # animate
        frames = self._parse_block_body()
        self._expect(TokenType.IDENTIFIER)  # for
        duration = _to_int(self._expect(TokenType.NUMBER))
        self._expect(TokenType.SEMICOLON)
        return Animate(frames, duration, location=loc)

    def _parse_variable(self) -> Variable:
        """
        Handles:
            var name = 3.5;
        """
        loc = self._advance().location  # var
        name = self._expect(TokenType.IDENTIFIER)
        self._expect(TokenType.ASSIGN)
        value = _to_float(self._expect(TokenType.NUMBER))
        self._expect(TokenType.SEMICOLON)
        return Variable(name.value, value, location=loc)

    def _parse_rainbow(self) -> Rainbow:
        """
        Handles:
            rainbow "text" at(x, y) duration N;
        """
        loc = self._advance().location  # rainbow
        text = self._expect(TokenType.STRING)
        self._expect(TokenType.IDENTIFIER)  # at
        x, y = self._parse_point()
        self._expect(TokenType.IDENTIFIER)  # duration
        duration = _to_int(self._expect(TokenType.NUMBER))
        self._expect(TokenType.SEMICOLON)
        return Rainbow(_strip_quotes(text), x, y, duration, location=loc)

    def _parse_wait(self) -> Wait:
        """
        Handles:
            wait 500;
        """
        loc = self._advance().location  # wait
        duration = _to_int(self._expect(TokenType.NUMBER))
        self._expect(TokenType.SEMICOLON)
        return Wait(duration, location=loc)

    def _parse_frame(self) -> Frame:
        """
        Handles:
            frame { ... }
        """
        loc = self._advance().location  # frame
        return Frame(self._parse_block_body(), location=loc)


def parse_tokens(tokens: list[Token], source: str = "", filename: str = "<input>") -> Canvas:
    """Parse a token list in one call."""
    return Parser(tokens, source, filename).parse()
