"""
Data models for the shell display.
"""

from __future__ import annotations

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class LineKind(str, Enum):
    """Semantic kind of a display line."""

    COMMAND = "command"
    OUTPUT = "output"
    ERROR = "error"
    INFO = "info"
    SUCCESS = "success"


class CommandResponse(BaseModel):
    """Result returned by every command handler."""

    model_config = {"frozen": True}

    kind: LineKind
    content: str

    @classmethod
    def info(cls, content: str) -> CommandResponse:
        return cls(kind=LineKind.INFO, content=content)

    @classmethod
    def success(cls, content: str) -> CommandResponse:
        return cls(kind=LineKind.SUCCESS, content=content)

    @classmethod
    def output(cls, content: str) -> CommandResponse:
        return cls(kind=LineKind.OUTPUT, content=content)

    @classmethod
    def error(cls, content: str) -> CommandResponse:
        return cls(kind=LineKind.ERROR, content=content)

    @classmethod
    def usage(cls, usage: str) -> CommandResponse:
        """Error response carrying a usage hint."""
        return cls(kind=LineKind.ERROR, content=f"Usage: {usage}")


class DisplayLine(BaseModel):
    """One rendered unit of terminal output."""

    model_config = {"frozen": True}

    id: str = Field(default_factory=lambda: uuid4().hex)
    kind: LineKind
    content: str

    @classmethod
    def from_response(cls, response: CommandResponse) -> DisplayLine:
        return cls(kind=response.kind, content=response.content)
