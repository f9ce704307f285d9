"""Clear command - wipe the terminal screen."""
from __future__ import annotations

from tlearn.cli.commands.registry import CommandContext, command_registry
from tlearn.core.datamodels import CommandResponse


@command_registry.register("clear", "Clear the terminal screen")
async def cmd_clear(ctx: CommandContext, args: list[str]) -> CommandResponse:
    """Registered for help and completion only.

    The interpreter intercepts "clear" before registry lookup and wipes the
    display history itself.
    """
    return CommandResponse.info("")
