"""
Shared fixtures: an in-memory fake of the t-learn API and a ready interpreter.
"""

import pytest

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
from tlearn.cli.interpreter import Interpreter
from tlearn.core.exceptions import ApiError
from tlearn.session.credentials import MemoryCredentialStore
from tlearn.session.state import SessionState


class FakeApi:
    """Stands in for ApiClient; records calls and can be told to fail.

    Set `failures[method_name] = "message"` to make that method raise
    ApiError("message").
    """

    def __init__(self):
        self.calls: list[tuple] = []
        self.failures: dict[str, str] = {}
        self.courses: list[Course] = []
        self.lessons: dict[str, list[Lesson]] = {}
        self.tasks: dict[str, Task] = {}

    async def _call(self, name: str, *args):
        self.calls.append((name, *args))
        if name in self.failures:
            raise ApiError(self.failures[name], status_code=400)

    def called(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

    async def register(self, username, email, password):
        await self._call("register", username, email, password)
        return RegisteredAccount(id="u-new", username=username, email=email)

    async def login(self, username, password):
        await self._call("login", username, password)
        return LoginResult(token=f"token-{username}", user=UserInfo(id="u-1", username=username))

    async def generate_api_key(self):
        await self._call("generate_api_key")
        return ApiKey(api_key="k" * 64)

    async def list_courses(self):
        await self._call("list_courses")
        return list(self.courses)

    async def list_lessons(self, course_id):
        await self._call("list_lessons", course_id)
        return list(self.lessons.get(course_id, []))

    async def get_task(self, lesson_id):
        await self._call("get_task", lesson_id)
        if lesson_id not in self.tasks:
            raise ApiError("Error 404: Not Found", status_code=404)
        return self.tasks[lesson_id]

    async def complete_task(self, task_id):
        await self._call("complete_task", task_id)

    async def create_course(self, title, description):
        await self._call("create_course", title, description)
        self.courses.append(Course(id=f"c-{len(self.courses) + 1}", title=title, description=description))

    async def delete_course(self, course_id):
        await self._call("delete_course", course_id)
        self.courses = [c for c in self.courses if c.id != course_id]

    async def create_lesson(self, course_id, title, content, position):
        await self._call("create_lesson", course_id, title, content, position)
        lessons = self.lessons.setdefault(course_id, [])
        lessons.append(Lesson(id=f"l-{title}", title=title, position=position))

    async def delete_lesson(self, lesson_id):
        await self._call("delete_lesson", lesson_id)


@pytest.fixture
def fake_api():
    """Fake API preloaded with two courses, two Go lessons, and a task."""
    api = FakeApi()
    api.courses = [
        Course(id="c-go", title="Go Mastery", description="Learn Go"),
        Course(id="c-sql", title="Advanced SQL", description="Joins and more"),
    ]
    api.lessons["c-go"] = [
        Lesson(id="l-1", title="Hello World", position=1, completed=True),
        Lesson(id="l-2", title="HTTP Servers", position=2, completed=False),
    ]
    api.tasks["l-2"] = Task(
        task_id="t-2",
        lesson_id="l-2",
        lesson_title="HTTP Servers",
        lesson_content="Go ships with net/http.",
        task_description="Start a server on port 8080.",
        steps=[
            TaskStep(position=2, command="curl localhost:8080"),
            TaskStep(position=1, command="go run main.go"),
        ],
    )
    return api


@pytest.fixture
def credentials():
    return MemoryCredentialStore()


@pytest.fixture
def state():
    return SessionState()


@pytest.fixture
def interpreter(state, fake_api, credentials):
    """Interpreter over the built-in commands and the fake API."""
    return Interpreter(state, fake_api, credentials)
