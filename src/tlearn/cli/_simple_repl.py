"""
Simple REPL (Read-Eval-Print Loop) using plain input().

Used when prompt_toolkit features are not wanted (--simple) and for one-shot
commands (-c).
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from tlearn.core.datamodels import DisplayLine, LineKind

if TYPE_CHECKING:
    from tlearn.cli.interpreter import Interpreter


# ANSI escape codes for colored text
GREY = "\033[90m"
WHITE = "\033[97m"
RED = "\033[91m"
GREEN = "\033[92m"
RESET = "\033[0m"

KIND_COLORS = {
    LineKind.COMMAND: WHITE,
    LineKind.OUTPUT: "",
    LineKind.ERROR: RED,
    LineKind.INFO: GREY,
    LineKind.SUCCESS: GREEN,
}

# Words that leave the shell without going through the interpreter
QUIT_COMMANDS = {"exit", "quit"}


def print_line(line: DisplayLine, echo: bool = True) -> None:
    """Print one display line with ANSI colors.

    Args:
        line: The line to print.
        echo: Print "command" lines too. The interactive loop already shows
            what the user typed, so it passes False.
    """
    if line.kind == LineKind.COMMAND:
        if echo:
            print(f"{WHITE}$ {line.content}{RESET}")
        return
    if not line.content:
        return
    color = KIND_COLORS.get(line.kind, "")
    if color:
        print(f"{color}{line.content}{RESET}")
    else:
        print(line.content)


def clear_screen() -> None:
    print("\033[2J\033[H", end="", flush=True)


async def repl(interpreter: "Interpreter") -> None:
    """Run the simple interactive loop until EOF or exit/quit.

    Each line is executed to completion before the next one is read.
    """
    while True:
        try:
            user_input = await asyncio.to_thread(input, f"{interpreter.prompt} ")
        except EOFError:
            print("\nGoodbye!")
            break
        except KeyboardInterrupt:
            print()
            continue

        if user_input.strip().lower() in QUIT_COMMANDS:
            print("Goodbye!")
            break

        await interpreter.execute(user_input)
