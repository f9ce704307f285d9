"""
Exception classes for the t-learn shell.
"""

from __future__ import annotations


class TLearnError(Exception):
    """Base exception for shell errors."""


class ApiError(TLearnError):
    """Remote API call failed.

    The message is meant to be shown to the user verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiConnectionError(ApiError):
    """Remote API could not be reached."""


class CredentialStoreError(TLearnError):
    """Credential store could not be written."""
