"""
Session state and credential storage for the t-learn shell.
"""

from tlearn.session.credentials import (
    TOKEN_KEY,
    USERNAME_KEY,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from tlearn.session.state import ROOT_PROMPT, SessionState, compute_prompt

__all__ = [
    "SessionState",
    "compute_prompt",
    "ROOT_PROMPT",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "TOKEN_KEY",
    "USERNAME_KEY",
]
