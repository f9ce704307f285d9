"""
Command-line interpreter: tokenize, dispatch, record.

One line at a time goes through Interpreter.execute():

    1. blank input is ignored
    2. the raw line is recorded in the command-history buffer
    3. the line is echoed as a "command" display line
    4. "clear" wipes the display and stops
    5. unknown commands produce a "command not found" error
    6. the handler runs; its response becomes a display line
    7. a handler that raises is reported as an error line
    8. the prompt is recomputed from the navigation path

Only one execute() may be in flight at a time. Front-ends wait for each
call to finish before reading the next line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterator, Optional

from tlearn.cli.commands.loader import load_builtin_commands
from tlearn.cli.commands.registry import CommandContext, CommandRegistry, command_registry
from tlearn.core.datamodels import CommandResponse, DisplayLine, LineKind
from tlearn.core.tokenizer import split_command
from tlearn.session.state import compute_prompt

if TYPE_CHECKING:
    from tlearn.api.client import ApiClient
    from tlearn.session.credentials import CredentialStore
    from tlearn.session.state import SessionState

logger = logging.getLogger(__name__)

CLEAR_COMMAND = "clear"


class DisplayHistory:
    """Ordered, append-only list of display lines, plus a clear signal.

    Listeners let a front-end render lines as they arrive.
    """

    def __init__(
        self,
        on_append: Optional[Callable[[DisplayLine], None]] = None,
        on_clear: Optional[Callable[[], None]] = None,
    ):
        self._lines: list[DisplayLine] = []
        self._on_append = on_append
        self._on_clear = on_clear

    @property
    def lines(self) -> list[DisplayLine]:
        return list(self._lines)

    def append(self, line: DisplayLine) -> None:
        self._lines.append(line)
        if self._on_append:
            self._on_append(line)

    def clear(self) -> None:
        self._lines = []
        if self._on_clear:
            self._on_clear()

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[DisplayLine]:
        return iter(list(self._lines))


class Interpreter:
    """Runs command lines against a registry and a session."""

    def __init__(
        self,
        state: "SessionState",
        api: "ApiClient",
        credentials: "CredentialStore",
        registry: CommandRegistry | None = None,
        display: DisplayHistory | None = None,
        welcome: str | None = None,
    ):
        if registry is None:
            load_builtin_commands()
            registry = command_registry
        self.registry = registry
        self.context = CommandContext(
            state=state, api=api, credentials=credentials, registry=registry
        )
        self.display = display or DisplayHistory()
        self.prompt = compute_prompt(state.path)
        self._busy = False

        if welcome:
            self.display.append(DisplayLine(kind=LineKind.INFO, content=welcome))

    @property
    def state(self) -> "SessionState":
        return self.context.state

    @property
    def busy(self) -> bool:
        """True while a command is being executed."""
        return self._busy

    @property
    def lines(self) -> list[DisplayLine]:
        return self.display.lines

    def _emit(self, kind: LineKind, content: str) -> None:
        self.display.append(DisplayLine(kind=kind, content=content))

    async def execute(self, raw: str) -> None:
        """Execute one command line.

        Never raises for command failures; every outcome ends up as a
        display line.
        """
        if not raw.strip():
            return

        self.state.record_command(raw)
        name, args = split_command(raw)
        self._emit(LineKind.COMMAND, raw)

        if name == CLEAR_COMMAND:
            self.display.clear()
            return

        entry = self.registry.get(name)
        if entry is None:
            self._emit(LineKind.ERROR, f"Command not found: {name}. Type 'help' for list.")
            return

        logger.debug(f"Dispatching '{entry.name}' with {len(args)} argument(s)")
        self._busy = True
        try:
            response = await entry.handler(self.context, args)
        except Exception as e:
            logger.exception(f"Command '{entry.name}' raised")
            self._emit(LineKind.ERROR, f"Error executing '{name}': {e}")
        else:
            if not isinstance(response, CommandResponse):
                logger.error(f"Command '{entry.name}' returned {type(response).__name__}")
                self._emit(LineKind.ERROR, f"Error executing '{name}': no response")
            else:
                self.display.append(DisplayLine.from_response(response))
        finally:
            self._busy = False

        self.prompt = compute_prompt(self.state.path)

    # Recall delegates to the session so the pointer lives in one place
    def recall_previous(self) -> str:
        return self.state.recall_previous()

    def recall_next(self) -> str:
        return self.state.recall_next()
