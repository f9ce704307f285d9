#!/usr/bin/env python3
"""
CLI entry point for the t-learn shell (tlearn command).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from tlearn import __version__
from tlearn.api.client import ApiClient
from tlearn.cli.commands import command_registry, load_all_commands
from tlearn.cli.interpreter import DisplayHistory, Interpreter
from tlearn.config import DEFAULTS, Config, get_config_manager
from tlearn.core.datamodels import LineKind
from tlearn.session.credentials import (
    USERNAME_KEY,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from tlearn.session.state import SessionState
from tlearn.utils.logging import configure_logging

logger = logging.getLogger(__name__)

WELCOME = f"Welcome to t-learn v{__version__}. Type 'help' to start."


def print_config():
    """Print current configuration."""
    cfg_mgr = get_config_manager()
    settings = cfg_mgr.list_settings()

    print(f"Config file: {cfg_mgr.path}")

    if settings:
        print("\nCustom settings:")
        for key, value in settings.items():
            print(f"  {key}: {value}")

    print("\nDefaults (used when not set):")
    for key, value in DEFAULTS.items():
        if key not in settings:
            print(f"  {key}: {value}")

    print("\nSet with: tlearn --set-config key=value")
    print(f"Available keys: {', '.join(Config.model_fields)}")
    print()


def parse_config_value(key: str, value: str):
    """Convert a --set-config string to the type of the config field.

    Raises:
        ValueError: If the key is unknown or the value does not convert.
    """
    if key not in Config.model_fields:
        raise ValueError(f"Unknown config key: {key}")
    default = DEFAULTS.get(key)
    if isinstance(default, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(default, float):
        return float(value)
    return value


async def run_shell(
    credentials: CredentialStore,
    api_url: str,
    timeout: float,
    command: str | None = None,
    simple: bool = False,
    welcome: bool = True,
) -> int:
    """Run the shell (or a single command) and return an exit status."""
    state = SessionState(user=credentials.get(USERNAME_KEY))

    async with ApiClient(credentials, base_url=api_url, timeout=timeout) as api:
        if command is not None:
            from tlearn.cli._simple_repl import print_line

            display = DisplayHistory(on_append=lambda line: print_line(line, echo=False))
            interpreter = Interpreter(state, api, credentials, registry=command_registry, display=display)
            await interpreter.execute(command)
            lines = interpreter.lines
            return 1 if lines and lines[-1].kind == LineKind.ERROR else 0

        if simple:
            from tlearn.cli._simple_repl import clear_screen, print_line, repl

            display = DisplayHistory(
                on_append=lambda line: print_line(line, echo=False),
                on_clear=clear_screen,
            )
        else:
            from tlearn.cli._repl import clear_screen, render_line, repl

            display = DisplayHistory(on_append=render_line, on_clear=clear_screen)

        interpreter = Interpreter(
            state,
            api,
            credentials,
            registry=command_registry,
            display=display,
            welcome=WELCOME if welcome else None,
        )
        await repl(interpreter)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tlearn CLI."""
    cfg_mgr = get_config_manager()
    cfg = cfg_mgr.config

    parser = argparse.ArgumentParser(
        description="Interactive shell for the t-learn platform",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Config file: {cfg_mgr.path}

Examples:
    tlearn                                  # Start the shell
    tlearn -c courses                       # Run one command and exit
    tlearn --api-url https://learn.example  # Use another server
    tlearn --set-config simple=true         # Always use the simple REPL
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--api-url", default=cfg.get("api_url"),
                        help=f"API base URL (default: {cfg.get('api_url')})")
    parser.add_argument("--timeout", type=float, default=cfg.get("request_timeout"),
                        help=f"Request timeout in seconds (default: {cfg.get('request_timeout')})")
    parser.add_argument("-c", "--command", metavar="LINE",
                        help="Run one command line and exit")
    parser.add_argument("--simple", action="store_true", default=cfg.get("simple"),
                        help="Use simple REPL (no prompt_toolkit features)")
    parser.add_argument("--no-persist", action="store_true",
                        help="Keep the login token in memory only")
    parser.add_argument("--debug", action="store_true", default=cfg.get("debug"),
                        help="Log debug output to stderr")

    # Config management
    parser.add_argument("--config", action="store_true",
                        help="Show current configuration")
    parser.add_argument("--set-config", metavar="KEY=VALUE",
                        help=f"Set a config value. Keys: {', '.join(Config.model_fields)}")
    parser.add_argument("--unset-config", metavar="KEY",
                        help="Unset a config value (reset to default)")

    args = parser.parse_args(argv)

    if args.config:
        print_config()
        return 0

    if args.set_config:
        try:
            key, value = args.set_config.split("=", 1)
            key = key.strip()
            parsed = parse_config_value(key, value.strip())
            cfg_mgr.set(key, parsed)
            print(f"Set {key} = {parsed}")
            print(f"Saved to {cfg_mgr.path}")
        except ValueError as e:
            print(f"Error: {e}")
            return 1
        return 0

    if args.unset_config:
        try:
            cfg_mgr.unset(args.unset_config)
            print(f"Unset {args.unset_config}")
            print(f"Saved to {cfg_mgr.path}")
        except ValueError as e:
            print(f"Error: {e}")
            return 1
        return 0

    log_path = configure_logging(debug=args.debug)
    logger.debug(f"Logging to {log_path}")

    loaded = load_all_commands()
    if loaded:
        logger.info(f"Loaded {loaded} user command(s)")

    credentials: CredentialStore = MemoryCredentialStore() if args.no_persist else FileCredentialStore()

    try:
        return asyncio.run(
            run_shell(
                credentials,
                api_url=args.api_url,
                timeout=args.timeout,
                command=args.command,
                simple=args.simple,
                welcome=cfg.get("welcome"),
            )
        )
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
