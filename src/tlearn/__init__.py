"""
tlearn - interactive shell for the t-learn course platform

Users type command lines; the shell tokenizes them, dispatches to a
registered command, and renders the result. Some commands call the t-learn
REST API.

Example usage:
    import asyncio
    from tlearn import ApiClient, Interpreter, MemoryCredentialStore, SessionState

    async def main():
        credentials = MemoryCredentialStore()
        async with ApiClient(credentials) as api:
            shell = Interpreter(SessionState(), api, credentials)
            await shell.execute('lessons "Go Mastery"')
            for line in shell.lines:
                print(line.kind.value, line.content)

    asyncio.run(main())
"""

__version__ = "0.1.0"

from tlearn.core import (
    ApiConnectionError,
    ApiError,
    CommandResponse,
    DisplayLine,
    LineKind,
    TLearnError,
    resolve,
    tokenize,
)
from tlearn.session import (
    FileCredentialStore,
    MemoryCredentialStore,
    SessionState,
    compute_prompt,
)
from tlearn.api import ApiClient
from tlearn.cli import DisplayHistory, Interpreter

__all__ = [
    # Version
    "__version__",
    # Core
    "CommandResponse",
    "DisplayLine",
    "LineKind",
    "TLearnError",
    "ApiError",
    "ApiConnectionError",
    "tokenize",
    "resolve",
    # Session
    "SessionState",
    "compute_prompt",
    "FileCredentialStore",
    "MemoryCredentialStore",
    # API
    "ApiClient",
    # CLI
    "DisplayHistory",
    "Interpreter",
]
