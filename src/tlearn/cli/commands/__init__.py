"""
Command system for the t-learn shell.

The first word of a line names the command; the remaining words are its
positional arguments. Commands are loaded from:
1. Package builtins
2. ~/.tlearn/commands/ (user-hackable, may override builtins)
"""

from __future__ import annotations

from tlearn.cli.commands.registry import (
    CommandContext,
    CommandEntry,
    CommandRegistry,
    command_registry,
)
from tlearn.cli.commands.loader import load_all_commands, load_builtin_commands

__all__ = [
    "CommandContext",
    "CommandEntry",
    "CommandRegistry",
    "command_registry",
    "load_all_commands",
    "load_builtin_commands",
]
