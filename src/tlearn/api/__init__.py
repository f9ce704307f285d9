"""Remote API client for the t-learn platform."""

from tlearn.api.client import DEFAULT_API_URL, ApiClient
from tlearn.api.data_models import (
    ApiKey,
    Course,
    Lesson,
    LoginResult,
    RegisteredAccount,
    Task,
    TaskStep,
    UserInfo,
)

__all__ = [
    "ApiClient",
    "DEFAULT_API_URL",
    "ApiKey",
    "Course",
    "Lesson",
    "LoginResult",
    "RegisteredAccount",
    "Task",
    "TaskStep",
    "UserInfo",
]
