"""
Core pieces of the shell: tokenizer, resolver, display models, exceptions.
"""

from tlearn.core.datamodels import CommandResponse, DisplayLine, LineKind
from tlearn.core.exceptions import (
    ApiConnectionError,
    ApiError,
    CredentialStoreError,
    TLearnError,
)
from tlearn.core.resolver import find, resolve
from tlearn.core.tokenizer import split_command, tokenize

__all__ = [
    # Models
    "CommandResponse",
    "DisplayLine",
    "LineKind",
    # Exceptions
    "TLearnError",
    "ApiError",
    "ApiConnectionError",
    "CredentialStoreError",
    # Parsing / resolution
    "tokenize",
    "split_command",
    "resolve",
    "find",
]
