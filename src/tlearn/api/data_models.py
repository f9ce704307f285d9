"""
Payload models for the t-learn API.

Unknown fields sent by the server are ignored.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class _Payload(BaseModel):
    model_config = {"extra": "ignore"}


class Course(_Payload):
    """A course as listed by GET /courses."""

    id: str
    title: str
    description: Optional[str] = None


class Lesson(_Payload):
    """A lesson as listed by GET /courses/{id}/lessons."""

    id: str
    title: str
    position: int = 0
    completed: bool = False


class TaskStep(_Payload):
    """One command the learner has to run."""

    position: Optional[int] = None
    command: str
    expected_output: str = ""


class Task(_Payload):
    """Task detail for a lesson (GET /lessons/{id}/task)."""

    lesson_id: Optional[str] = None
    lesson_title: str = ""
    lesson_content: str = ""
    task_id: str = Field(validation_alias=AliasChoices("task_id", "id"))
    task_description: str = ""
    steps: list[TaskStep] = Field(default_factory=list)

    @field_validator("steps", mode="before")
    @classmethod
    def _null_steps(cls, value):
        # A task without steps is sent as "steps": null
        return value or []


class UserInfo(_Payload):
    id: str
    username: str


class LoginResult(_Payload):
    token: str
    user: UserInfo


class RegisteredAccount(_Payload):
    id: str
    username: str
    email: str = ""


class ApiKey(_Payload):
    api_key: str
