"""
Feature-rich REPL (Read-Eval-Print Loop) implementation using prompt_toolkit.

Provides tab completion of command names, Up/Down recall from the session's
command history, and colored output per line kind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.filters import has_completions
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear as clear_terminal
from prompt_toolkit.styles import Style

from tlearn.cli._simple_repl import QUIT_COMMANDS
from tlearn.core.datamodels import DisplayLine, LineKind

if TYPE_CHECKING:
    from tlearn.cli.commands.registry import CommandRegistry
    from tlearn.cli.interpreter import Interpreter


def get_style() -> Style:
    """Get the prompt and output style."""
    return Style.from_dict({
        "prompt": "ansicyan bold",
        LineKind.COMMAND.value: "ansiwhite bold",
        LineKind.OUTPUT.value: "",
        LineKind.ERROR.value: "ansired",
        LineKind.INFO.value: "ansibrightblack",
        LineKind.SUCCESS.value: "ansigreen",
    })


STYLE = get_style()


def render_line(line: DisplayLine) -> None:
    """Print a display line; echoed commands are left to the prompt."""
    if line.kind == LineKind.COMMAND or not line.content:
        return
    print_formatted_text(
        FormattedText([(f"class:{line.kind.value}", line.content)]),
        style=STYLE,
    )


def clear_screen() -> None:
    clear_terminal()


class CommandCompleter(Completer):
    """Completer for command names (first word only)."""

    def __init__(self, registry: "CommandRegistry"):
        self.registry = registry

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor.lstrip()

        # Only the command name is completed
        if " " in text:
            return

        for name, description in sorted(self.registry.get_completions().items()):
            if name.startswith(text.lower()):
                yield Completion(
                    name,
                    start_position=-len(text),
                    display_meta=description,
                )


def _make_bindings(interpreter: "Interpreter") -> KeyBindings:
    bindings = KeyBindings()

    @bindings.add("up", filter=~has_completions)
    def _(event):
        """Recall an older command."""
        buf = event.app.current_buffer
        buf.text = interpreter.recall_previous()
        buf.cursor_position = len(buf.text)

    @bindings.add("down", filter=~has_completions)
    def _(event):
        """Recall a newer command, or empty input past the newest."""
        buf = event.app.current_buffer
        buf.text = interpreter.recall_next()
        buf.cursor_position = len(buf.text)

    @bindings.add("c-c")
    def _(event):
        """Handle Ctrl+C - cancel current input."""
        event.app.current_buffer.reset()

    return bindings


async def repl(interpreter: "Interpreter") -> None:
    """Run the interactive REPL.

    Features:
        - Tab completion for command names
        - Up/Down recall of previous commands
        - Ctrl+C to cancel input, Ctrl+D or exit/quit to leave

    Args:
        interpreter: The Interpreter whose display renders via render_line.
    """
    session: PromptSession = PromptSession(
        completer=CommandCompleter(interpreter.registry),
        style=STYLE,
        key_bindings=_make_bindings(interpreter),
        complete_while_typing=False,
    )

    while True:
        try:
            user_input = await session.prompt_async(
                FormattedText([("class:prompt", f"{interpreter.prompt} ")])
            )
        except EOFError:
            print("Goodbye!")
            break
        except KeyboardInterrupt:
            continue

        if user_input.strip().lower() in QUIT_COMMANDS:
            print("Goodbye!")
            break

        await interpreter.execute(user_input)
