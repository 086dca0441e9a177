"""
Completion and hover providers for the canvas-lang language server.

Commands are plain identifiers, so completion offers every command as a
snippet at statement position and palette colors inside string literals.
"""

from __future__ import annotations

from lsprotocol import types

from canvaslang.compiler.ast_nodes import COMMAND_KEYWORDS
from canvaslang.render.colors import COLOR_MAP

# command -> (syntax, description)
COMMAND_DOCS: dict[str, tuple[str, str]] = {
    "background": ('background "<color>";', "Set the background color of the scene"),
    "circle": (
        'circle at(x, y) radius r fill "<color>";',
        "Draw a filled circle of dots",
    ),
    "rect": (
        'rect at(x, y) width w height h fill "<color>";',
        "Draw a filled rectangle of blocks",
    ),
    "text": (
        'text "<text>" at(x, y) size n color "<color>";',
        "Draw large figlet text; sizes above 15 use the large font",
    ),
    "line": (
        'line from(x1, y1) to(x2, y2) color "<color>";',
        "Draw a straight line between two points",
    ),
    "animate": (
        "animate { frame { ... } ... } for ms;",
        "Play the frames inside the block, spreading them over ms milliseconds",
    ),
    "var": ("var name = value;", "Declare a numeric variable"),
    "rainbow": (
        'rainbow "<text>" at(x, y) duration steps;',
        "Show text with a moving rainbow, one hue shift per step",
    ),
    "wait": ("wait ms;", "Pause for ms milliseconds"),
    "frame": (
        "frame { ... }",
        "Render the block into its own frame; frames loop once the program ends",
    ),
}

COMMAND_SNIPPETS: dict[str, str] = {
    "background": 'background "${1:black}";',
    "circle": 'circle at(${1:0}, ${2:0}) radius ${3:5} fill "${4:red}";',
    "rect": 'rect at(${1:0}, ${2:0}) width ${3:10} height ${4:5} fill "${5:blue}";',
    "text": 'text "${1:Hello}" at(${2:0}, ${3:0}) size ${4:20} color "${5:white}";',
    "line": 'line from(${1:0}, ${2:0}) to(${3:10}, ${4:10}) color "${5:green}";',
    "animate": "animate {\n\tframe {\n\t\t$0\n\t}\n} for ${1:1000};",
    "var": "var ${1:name} = ${2:0};",
    "rainbow": 'rainbow "${1:Hello}" at(${2:0}, ${3:0}) duration ${4:100};',
    "wait": "wait ${1:500};",
    "frame": "frame {\n\t$0\n}",
}


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def word_at(source: str, line: int, character: int) -> tuple[str, types.Range | None]:
    """
    Get the identifier at a position.

    Args:
        source: Document text
        line: 0-indexed line number
        character: 0-indexed character position

    Returns:
        Tuple of (word, range) or ("", None) if no word found
    """
    lines = source.splitlines()
    if line < 0 or line >= len(lines):
        return "", None

    line_text = lines[line]
    if character < 0 or character > len(line_text):
        return "", None

    start = character
    while start > 0 and _is_word_char(line_text[start - 1]):
        start -= 1

    end = character
    while end < len(line_text) and _is_word_char(line_text[end]):
        end += 1

    if start == end:
        return "", None

    return line_text[start:end], types.Range(
        start=types.Position(line=line, character=start),
        end=types.Position(line=line, character=end),
    )


def _inside_string(source: str, line: int, character: int) -> bool:
    lines = source.splitlines()
    if line < 0 or line >= len(lines):
        return False
    return lines[line][:character].count('"') % 2 == 1


class CompletionProvider:
    """Provides completion items and hover text for canvas-lang documents."""

    def __init__(self) -> None:
        self._keyword_completions: list[types.CompletionItem] | None = None
        self._color_completions: list[types.CompletionItem] | None = None

    def get_keyword_completions(self) -> list[types.CompletionItem]:
        """
        Get snippet completions for every command.

        Returns cached items after first call.
        """
        if self._keyword_completions is None:
            self._keyword_completions = [
                types.CompletionItem(
                    label=keyword,
                    kind=types.CompletionItemKind.Keyword,
                    insert_text=COMMAND_SNIPPETS[keyword],
                    insert_text_format=types.InsertTextFormat.Snippet,
                    detail=COMMAND_DOCS[keyword][0],
                    documentation=COMMAND_DOCS[keyword][1],
                )
                for keyword in COMMAND_KEYWORDS
            ]
        return self._keyword_completions

    def get_color_completions(self) -> list[types.CompletionItem]:
        """Get completions for the named color palette."""
        if self._color_completions is None:
            self._color_completions = [
                types.CompletionItem(
                    label=name,
                    kind=types.CompletionItemKind.Color,
                    detail=hex_value,
                )
                for name, hex_value in COLOR_MAP.items()
            ]
        return self._color_completions

    def get_completions(self, source: str, line: int, character: int) -> list[types.CompletionItem]:
        """Colors inside a string literal, commands everywhere else."""
        if _inside_string(source, line, character):
            return self.get_color_completions()
        return self.get_keyword_completions()

    def get_hover(self, source: str, line: int, character: int) -> types.Hover | None:
        """Describe the command or color under the cursor."""
        word, word_range = word_at(source, line, character)
        if not word:
            return None

        if word in COMMAND_DOCS:
            syntax, description = COMMAND_DOCS[word]
            value = f"**{word}**\n\n```\n{syntax}\n```\n\n{description}"
        elif word.lower() in COLOR_MAP and _inside_string(source, line, character):
            value = f"**{word}**\n\nColor `{COLOR_MAP[word.lower()]}`"
        else:
            return None

        return types.Hover(
            contents=types.MarkupContent(kind=types.MarkupKind.Markdown, value=value),
            range=word_range,
        )
