"""History command - show the command-history buffer."""
from __future__ import annotations

from tlearn.cli.commands.registry import CommandContext, command_registry
from tlearn.core.datamodels import CommandResponse


@command_registry.register("history", "Show previously entered commands")
async def cmd_history(ctx: CommandContext, args: list[str]) -> CommandResponse:
    history = ctx.state.command_history
    if not history:
        return CommandResponse.info("No commands yet.")
    width = len(str(len(history)))
    lines = [f"{i:>{width}}  {line}" for i, line in enumerate(history, 1)]
    return CommandResponse.info("\n".join(lines))
