"""Interactive line-based editor.

Opens an image, builds a filter chain command by command and previews or
saves the result.

Usage:
    pixelchain photo.jpg

    # Without preview windows, with verbose logging:
    pixelchain photo.jpg --no-preview --log-level DEBUG

Example session:
    > add blur 2 gaussian
    > add sharpen box 3
    > list
    > show
    > save out.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, TextIO

from .config import settings
from .errors import PixelChainError
from .filters import FILTER_ALIASES, FILTER_REGISTRY
from .preview import show_raster
from .session import EditorSession

logger = logging.getLogger(__name__)

PROMPT = "> "

COMMAND_HELP = [
    ("open <path>", "open image"),
    ("add <filter> <*params>", "add filter to image"),
    ("remove <index>", "remove filter from image by index"),
    ("list", "list all filters"),
    ("show", "render and show image"),
    ("render", "render image without showing it"),
    ("save <path>", "save rendered image"),
    ("close", "close image"),
    ("help", "show this message"),
    ("exit", "exit program"),
]


def help_text() -> str:
    """Command and filter overview."""
    lines = ["Available commands:"]
    for usage, description in COMMAND_HELP:
        lines.append(f"  {usage:<26} {description}")
    lines.append("")
    lines.append("Available filters:")
    seen = set()
    for filter_cls in FILTER_REGISTRY.values():
        if filter_cls in seen:
            continue
        seen.add(filter_cls)
        summary = (filter_cls.__doc__ or "").strip().splitlines()[0]
        lines.append(f"  {filter_cls.__name__.lower():<26} {summary}")
    lines.append("")
    lines.append(f"Aliases: {', '.join(sorted(FILTER_ALIASES))}")
    return "\n".join(lines)


def _cmd_open(session: EditorSession, args: list[str]) -> None:
    if not args:
        raise _UsageError("open <path>")
    raster = session.open(" ".join(args))
    print(f"Image loaded ({raster.width}x{raster.height}).")


def _cmd_add(session: EditorSession, args: list[str]) -> None:
    if not args:
        raise _UsageError("add <filter> <*params>")
    added = session.add(" ".join(args))
    print(f"{added.label} filter added.")


def _cmd_remove(session: EditorSession, args: list[str]) -> None:
    if len(args) != 1:
        raise _UsageError("remove <index>")
    try:
        index = int(args[0])
    except ValueError:
        raise _UsageError("remove <index>") from None
    session.remove(index)
    print(f"Filter at index {index} removed.")


def _cmd_list(session: EditorSession, args: list[str]) -> None:
    print(session.list())


def _cmd_show(session: EditorSession, args: list[str]) -> None:
    session.render(show=True)


def _cmd_render(session: EditorSession, args: list[str]) -> None:
    raster = session.render()
    print(f"Rendered {raster.width}x{raster.height} image.")


def _cmd_save(session: EditorSession, args: list[str]) -> None:
    if not args:
        raise _UsageError("save <path>")
    path = " ".join(args)
    session.save(path)
    print(f"Image saved to {path}.")


def _cmd_close(session: EditorSession, args: list[str]) -> None:
    session.close()
    print("Image closed.")


def _cmd_help(session: EditorSession, args: list[str]) -> None:
    print(help_text())


COMMANDS: dict[str, Callable[[EditorSession, list[str]], None]] = {
    "open": _cmd_open,
    "add": _cmd_add,
    "remove": _cmd_remove,
    "list": _cmd_list,
    "show": _cmd_show,
    "render": _cmd_render,
    "save": _cmd_save,
    "close": _cmd_close,
    "help": _cmd_help,
}

EXIT_COMMANDS = {"exit", "quit"}


class _UsageError(Exception):
    """Wrong number or kind of command arguments."""

    def __init__(self, usage: str):
        super().__init__(f"Usage: {usage}")


def run_command(session: EditorSession, line: str) -> bool:
    """
    Executes a single command line.

    :param session: The session to operate on
    :param line: The raw input line
    :return: False if the program should exit, True otherwise
    """
    parts = line.strip().split()
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]
    if command in EXIT_COMMANDS:
        return False
    handler = COMMANDS.get(command)
    if handler is None:
        print("Unknown command. Type 'help' to see available commands.")
        return True
    try:
        handler(session, args)
    except _UsageError as e:
        print(e)
    except PixelChainError as e:
        logger.debug(f"Command '{line.strip()}' failed: {e!r}")
        print(e)
    return True


def repl(session: EditorSession, stream: TextIO | None = None) -> None:
    """
    Reads and executes commands until exit or end of input.

    :param session: The session to operate on
    :param stream: The command source, stdin by default
    """
    if stream is None:
        stream = sys.stdin
    print("Welcome to pixelchain!")
    print("Type 'help' to see available commands.")
    while True:
        print(PROMPT, end="", flush=True)
        line = stream.readline()
        if not line:
            print()
            break
        if not run_command(session, line):
            break


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Interactive raster editor built on composable filters"
    )
    parser.add_argument(
        "image",
        nargs="?",
        help="Image to open on startup",
    )
    parser.add_argument(
        "--no-preview",
        action="store_true",
        help="Never open preview windows",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help=f"Logging level (default: {settings.LOG_LEVEL})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    preview_enabled = settings.PREVIEW_ENABLED and not args.no_preview
    session = EditorSession(preview=show_raster if preview_enabled else None)
    if args.image:
        run_command(session, f"open {args.image}")
    repl(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())
