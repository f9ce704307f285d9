"""Help command - show available commands."""
from __future__ import annotations

from tlearn.cli.commands.registry import CommandContext, command_registry
from tlearn.core.datamodels import CommandResponse


@command_registry.register("help", "List available commands", aliases=["?"])
async def cmd_help(ctx: CommandContext, args: list[str]) -> CommandResponse:
    """List every registered command with its usage."""
    registry = ctx.registry or command_registry
    entries = registry.all_commands()
    width = max((len(e.usage) for e in entries), default=0)

    lines = ["Available commands:"]
    for entry in entries:
        suffix = " (admin)" if entry.admin else ""
        lines.append(f"  {entry.usage:<{width}}  - {entry.description}{suffix}")
    return CommandResponse.info("\n".join(lines))
