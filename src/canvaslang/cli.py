"""
canvas-lang Command-Line Interface.

Runs a canvas-lang program in the terminal.

Usage:
    canvas-lang scene.canvas               # Render / animate
    canvas-lang scene.canvas --loops 3     # Stop the frame loop after 3 cycles
    canvas-lang scene.canvas --check       # Syntax check only
    canvas-lang scene.canvas --tokens      # Dump tokens
    canvas-lang scene.canvas --ast         # Dump the syntax tree
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from canvaslang import __version__
from canvaslang.compiler.ast_nodes import ASTNode
from canvaslang.compiler.lexer import Lexer
from canvaslang.compiler.parser import Parser
from canvaslang.config import RuntimeConfig
from canvaslang.runtime.display import TerminalDisplay
from canvaslang.runtime.player import run
from canvaslang.utils.diagnostics import diagnostic_from_error
from canvaslang.utils.errors import CanvasLangError

USAGE = "Usage: canvas-lang <script.canvas>"

logger = logging.getLogger("canvaslang")


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.GRAY = ""
        cls.BOLD = ""
        cls.RESET = ""


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    # Disable colors if not a TTY or if NO_COLOR is set
    if not sys.stderr.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


# Initialize on module load
_init_colors()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="canvas-lang",
        description="canvas-lang - Render ASCII-art scenes and animations in the terminal",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="canvas-lang source file (.canvas)",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--check",
        action="store_true",
        help="Only check the file for syntax errors",
    )
    mode.add_argument(
        "--tokens",
        action="store_true",
        help="Print the token stream and exit",
    )
    mode.add_argument(
        "--ast",
        action="store_true",
        help="Print the syntax tree and exit",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in the rendered output",
    )
    parser.add_argument(
        "--font",
        default=None,
        help="Figlet font for text commands (default: doom)",
    )
    parser.add_argument(
        "--loops",
        type=int,
        default=None,
        metavar="N",
        help="Stop the frame loop after N cycles (default: loop until interrupted)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_error(message: Any) -> None:
    print(f"{Colors.RED}Error: {message}{Colors.RESET}", file=sys.stderr)


def _build_config(args: argparse.Namespace) -> RuntimeConfig:
    config = RuntimeConfig.from_env()
    overrides: dict[str, Any] = {}
    if args.no_color:
        overrides["color"] = False
    if args.font:
        overrides["font"] = args.font
        overrides["small_font"] = args.font
    return config.with_overrides(**overrides)


def cmd_tokens(source: str, filename: str) -> int:
    """Print the token stream."""
    for token in Lexer(source, filename).tokenize():
        print(token)
    return 0


def cmd_ast(source: str, filename: str) -> int:
    """Print the syntax tree."""
    tokens = Lexer(source, filename).tokenize()
    ast = Parser(tokens, source, filename).parse()
    _print_ast(ast)
    return 0


def cmd_check(source: str, filename: str) -> int:
    """Parse only, reporting errors with source context."""
    try:
        tokens = Lexer(source, filename).tokenize()
        Parser(tokens, source, filename).parse()
    except CanvasLangError as e:
        diagnostic = diagnostic_from_error(e, filename)
        print(diagnostic.render(source, use_color=bool(Colors.RESET)), file=sys.stderr)
        return 1

    print(f"{Colors.GREEN}OK:{Colors.RESET} {filename} (no syntax errors)")
    return 0


def cmd_run(source: str, filename: str, args: argparse.Namespace) -> int:
    """Evaluate and play the program."""
    tokens = Lexer(source, filename).tokenize()
    ast = Parser(tokens, source, filename).parse()
    config = _build_config(args)
    logger.debug("Running %s with %r", filename, config)

    try:
        with TerminalDisplay() as display:
            run(ast, display, config=config, max_cycles=args.loops)
    except KeyboardInterrupt:
        logger.debug("Playback interrupted")
        return 130
    return 0


def _print_ast(node: Any, indent: int = 0) -> None:
    """Pretty print an AST node."""
    prefix = "  " * indent
    node_name = type(node).__name__

    attrs = {
        key: getattr(node, key)
        for key in getattr(node, "__dataclass_fields__", {})
        if key != "location"
    }

    if not attrs:
        print(f"{prefix}{node_name}")
        return

    print(f"{prefix}{node_name}:")
    for key, value in attrs.items():
        if isinstance(value, ASTNode):
            print(f"{prefix}  {key}:")
            _print_ast(value, indent + 2)
        elif isinstance(value, tuple) and value and isinstance(value[0], ASTNode):
            print(f"{prefix}  {key}: [")
            for item in value:
                _print_ast(item, indent + 2)
            print(f"{prefix}  ]")
        else:
            print(f"{prefix}  {key}: {value!r}")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.input is None:
        print(USAGE, file=sys.stderr)
        return 1

    input_path: Path = args.input
    if not input_path.exists():
        _print_error(f"File not found: {input_path}")
        return 1

    filename = str(input_path)
    try:
        source = input_path.read_text(encoding="utf-8")

        if args.tokens:
            return cmd_tokens(source, filename)
        if args.ast:
            return cmd_ast(source, filename)
        if args.check:
            return cmd_check(source, filename)
        return cmd_run(source, filename, args)

    except CanvasLangError as e:
        _print_error(e.message)
        return 1
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        _print_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
