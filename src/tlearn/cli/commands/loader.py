"""
Command loader for built-in and user commands.

Built-ins live in tlearn.cli.commands.builtins, one package per command
group. User commands are loaded afterwards from ~/.tlearn/commands/, one
package per directory, and may replace a built-in by registering the same
name:

    # ~/.tlearn/commands/hello/__init__.py
    from tlearn.cli.commands import command_registry
    from tlearn.core import CommandResponse

    @command_registry.register("hello", "Say hello")
    async def cmd_hello(ctx, args):
        return CommandResponse.info(f"Hello, {ctx.state.user or 'guest'}!")
"""

from __future__ import annotations

import importlib
import logging
import sys
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from typing import NamedTuple

from tlearn.cli.commands.registry import command_registry

logger = logging.getLogger(__name__)

USER_COMMANDS_DIR = Path.home() / ".tlearn" / "commands"

BUILTINS_DIR = Path(__file__).parent / "builtins"
BUILTINS_PACKAGE = "tlearn.cli.commands.builtins"

USER_MODULE_PREFIX = "tlearn_user_commands"


class LoadResult(NamedTuple):
    name: str
    ok: bool
    error: str = ""


def discover_commands(commands_dir: Path) -> list[Path]:
    """Find command packages in a directory.

    Returns the ``__init__.py`` of every subdirectory that has one, sorted by
    directory name. Names starting with "." or "_" are skipped.
    """
    if not commands_dir.is_dir():
        if commands_dir.exists():
            logger.warning(f"Commands path is not a directory: {commands_dir}")
        return []

    found = []
    for subdir in sorted(p for p in commands_dir.iterdir() if p.is_dir()):
        if subdir.name.startswith((".", "_")):
            continue
        init_file = subdir / "__init__.py"
        if not init_file.exists():
            logger.debug(f"Skipping {subdir.name}: no __init__.py")
            continue
        found.append(init_file)
    return found


def load_builtin_commands() -> int:
    """Import every built-in command package and return how many there are.

    A package already imported is not executed again.
    """
    packages = discover_commands(BUILTINS_DIR)
    for init_file in packages:
        importlib.import_module(f"{BUILTINS_PACKAGE}.{init_file.parent.name}")
    return len(packages)


def load_command(init_file: Path, prefix: str = USER_MODULE_PREFIX) -> LoadResult:
    """Execute one user command package.

    Failures are reported in the result rather than raised, so one broken
    command cannot stop the shell from starting.
    """
    name = init_file.parent.name
    module_name = f"{prefix}.{name}"

    spec = spec_from_file_location(module_name, init_file)
    if spec is None or spec.loader is None:
        return LoadResult(name, False, "Could not create module spec")

    module = module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        error = f"Syntax error: {e}"
    except ImportError as e:
        error = f"Import error: {e}"
    except Exception as e:
        error = f"Error: {e}"
    else:
        return LoadResult(name, True)

    sys.modules.pop(module_name, None)
    return LoadResult(name, False, error)


def load_all_commands(user_dir: Path | None = None) -> int:
    """Load built-ins, then user commands.

    Args:
        user_dir: User commands directory (default: ~/.tlearn/commands)

    Returns:
        Number of user commands loaded.
    """
    load_builtin_commands()
    builtin_names = {entry.name for entry in command_registry.all_commands()}

    loaded = 0
    for init_file in discover_commands(user_dir or USER_COMMANDS_DIR):
        result = load_command(init_file)
        if not result.ok:
            logger.warning(f"Failed to load command '{result.name}': {result.error}")
            continue
        loaded += 1
        if result.name in builtin_names:
            logger.info(f"User command '{result.name}' overrides the built-in")
        else:
            logger.info(f"Loaded user command: {result.name}")
    return loaded
