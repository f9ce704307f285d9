"""Account commands - register, login, logout, whoami, token."""
from __future__ import annotations

import logging

from tlearn.cli.commands.registry import CommandContext, command_registry
from tlearn.core.datamodels import CommandResponse
from tlearn.core.exceptions import ApiError, CredentialStoreError
from tlearn.session.credentials import TOKEN_KEY, USERNAME_KEY

logger = logging.getLogger(__name__)


def _restore_credentials(ctx: CommandContext, previous: dict[str, str | None]) -> None:
    """Put back the stored values a failed login may have overwritten."""
    try:
        for key, value in previous.items():
            if value is None:
                ctx.credentials.remove(key)
            else:
                ctx.credentials.set(key, value)
    except CredentialStoreError as e:
        logger.warning(f"Could not restore stored credentials: {e}")


@command_registry.register(
    "register", "Create a new account", usage="register <user> <email> <pass>"
)
async def cmd_register(ctx: CommandContext, args: list[str]) -> CommandResponse:
    if len(args) != 3:
        return CommandResponse.usage("register <username> <email> <password>")
    username, email, password = args

    try:
        account = await ctx.api.register(username, email, password)
    except ApiError as e:
        return CommandResponse.error(f"Registration failed: {e.message}")

    return CommandResponse.success(
        f"Account created for {account.username}. Log in with: login {account.username} <password>"
    )


@command_registry.register("login", "Log in to the platform", usage="login <user> <pass>")
async def cmd_login(ctx: CommandContext, args: list[str]) -> CommandResponse:
    """Log in and persist the token and username."""
    if len(args) != 2:
        return CommandResponse.usage("login <username> <password>")
    username, password = args

    try:
        result = await ctx.api.login(username, password)
    except ApiError as e:
        return CommandResponse.error(f"Login failed: {e.message}")

    previous = {key: ctx.credentials.get(key) for key in (TOKEN_KEY, USERNAME_KEY)}
    try:
        ctx.credentials.set(TOKEN_KEY, result.token)
        ctx.credentials.set(USERNAME_KEY, result.user.username)
    except CredentialStoreError as e:
        _restore_credentials(ctx, previous)
        return CommandResponse.error(f"Login failed: could not save credentials: {e}")

    ctx.state.user = result.user.username
    logger.info(f"Logged in as {result.user.username}")
    return CommandResponse.success(f"Logged in as {result.user.username}.")


@command_registry.register("logout", "Log out and forget the stored token")
async def cmd_logout(ctx: CommandContext, args: list[str]) -> CommandResponse:
    was = ctx.state.user
    ctx.state.logout()
    try:
        ctx.credentials.remove(TOKEN_KEY)
        ctx.credentials.remove(USERNAME_KEY)
    except CredentialStoreError as e:
        return CommandResponse.error(f"Logged out, but the stored token could not be removed: {e}")
    if was is None:
        return CommandResponse.info("Not logged in.")
    return CommandResponse.success(f"Logged out {was}.")


@command_registry.register("whoami", "Show current user")
async def cmd_whoami(ctx: CommandContext, args: list[str]) -> CommandResponse:
    if ctx.state.user is None:
        return CommandResponse.error("Not logged in. Use: login <username> <password>")
    return CommandResponse.info(ctx.state.user)


@command_registry.register("token", "Generate an API key for the t-learn CLI")
async def cmd_token(ctx: CommandContext, args: list[str]) -> CommandResponse:
    try:
        key = await ctx.api.generate_api_key()
    except ApiError as e:
        return CommandResponse.error(f"Could not generate API key: {e.message}")

    return CommandResponse.success(
        "API key generated:\n"
        f"  {key.api_key}\n"
        "Keep it secret. Generating a new key replaces this one."
    )
