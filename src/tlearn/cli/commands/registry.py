"""
Command registry for the t-learn shell.

Commands are registered with a name, async handler function, and metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable

from tlearn.core.datamodels import CommandResponse

if TYPE_CHECKING:
    from tlearn.api.client import ApiClient
    from tlearn.session.credentials import CredentialStore
    from tlearn.session.state import SessionState


@dataclass
class CommandContext:
    """Everything a handler may touch: session state and collaborators."""

    state: "SessionState"
    api: "ApiClient"
    credentials: "CredentialStore"
    registry: "CommandRegistry | None" = None


Handler = Callable[[CommandContext, list[str]], Awaitable[CommandResponse]]


@dataclass
class CommandEntry:
    """Entry for a registered command."""

    name: str
    handler: Handler
    description: str
    usage: str | None = None
    aliases: list[str] = field(default_factory=list)
    admin: bool = False


class CommandRegistry:
    """Registry for shell commands."""

    def __init__(self):
        self._commands: dict[str, CommandEntry] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        description: str,
        usage: str | None = None,
        aliases: list[str] | None = None,
        admin: bool = False,
    ) -> Callable[[Handler], Handler]:
        """Decorator to register a command.

        Args:
            name: Command name (matched case-insensitively)
            description: Short description for help
            usage: Usage string (e.g., "lessons <course>")
            aliases: Alternative names for the command
            admin: True for commands that need an admin account

        Returns:
            Decorator function

        Example:
            @command_registry.register("whoami", "Show current user")
            async def cmd_whoami(ctx, args):
                return CommandResponse.info(ctx.state.user or "guest")
        """
        def decorator(func: Handler) -> Handler:
            entry = CommandEntry(
                name=name.lower(),
                handler=func,
                description=description,
                usage=usage or name.lower(),
                aliases=[a.lower() for a in aliases or []],
                admin=admin,
            )
            self._commands[entry.name] = entry

            for alias in entry.aliases:
                self._aliases[alias] = entry.name

            return func
        return decorator

    def get(self, name: str) -> CommandEntry | None:
        """Get a command by name or alias."""
        name = name.lower()
        if name in self._commands:
            return self._commands[name]
        if name in self._aliases:
            return self._commands[self._aliases[name]]
        return None

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._commands)

    def all_commands(self) -> list[CommandEntry]:
        """Get all registered commands sorted by name."""
        return sorted(self._commands.values(), key=lambda e: e.name)

    def get_completions(self) -> dict[str, str]:
        """Get command names and descriptions for completion."""
        result = {}
        for entry in self._commands.values():
            result[entry.name] = entry.description
            for alias in entry.aliases:
                result[alias] = entry.description
        return result


# Global command registry
command_registry = CommandRegistry()
