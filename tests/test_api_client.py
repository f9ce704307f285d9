#!/usr/bin/env python3
"""
Tests for ApiClient against an httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from tlearn.api.client import ApiClient
from tlearn.core.exceptions import ApiConnectionError, ApiError
from tlearn.session.credentials import TOKEN_KEY, MemoryCredentialStore


class Recorder:
    """MockTransport handler that replays a canned response and keeps requests."""

    def __init__(self, status=200, payload=None, content=None):
        self.status = status
        self.payload = payload
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        if self.payload is None:
            return httpx.Response(self.status)
        return httpx.Response(self.status, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def run(credentials, handler, call):
    """Build a client over the handler and run one coroutine call."""

    async def go():
        async with ApiClient(
            credentials,
            base_url="http://api.test/",
            transport=httpx.MockTransport(handler),
        ) as api:
            return await call(api)

    return asyncio.run(go())


@pytest.fixture
def credentials():
    return MemoryCredentialStore()


# ============================================================================
# Transport Tests
# ============================================================================

class TestTransport:
    """Tests for headers, error mapping and empty bodies."""

    def test_no_token_no_authorization(self, credentials):
        handler = Recorder(payload=[])
        run(credentials, handler, lambda api: api.list_courses())
        assert "authorization" not in handler.last.headers

    def test_bearer_token_from_store(self, credentials):
        credentials.set(TOKEN_KEY, "abc")
        handler = Recorder(payload=[])
        run(credentials, handler, lambda api: api.list_courses())
        assert handler.last.headers["authorization"] == "Bearer abc"
        assert handler.last.url == "http://api.test/courses"

    def test_error_field_becomes_message(self, credentials):
        handler = Recorder(status=401, payload={"error": "invalid credentials"})
        with pytest.raises(ApiError) as exc_info:
            run(credentials, handler, lambda api: api.login("alice", "bad"))
        assert exc_info.value.message == "invalid credentials"
        assert exc_info.value.status_code == 401

    def test_error_without_body(self, credentials):
        handler = Recorder(status=500)
        with pytest.raises(ApiError) as exc_info:
            run(credentials, handler, lambda api: api.list_courses())
        assert exc_info.value.message == "Error 500: Internal Server Error"

    def test_error_with_non_json_body(self, credentials):
        handler = Recorder(status=404, content=b"<html>nope</html>")
        with pytest.raises(ApiError) as exc_info:
            run(credentials, handler, lambda api: api.get_task("l-1"))
        assert exc_info.value.message == "Error 404: Not Found"

    def test_no_content(self, credentials):
        handler = Recorder(status=204)
        assert run(credentials, handler, lambda api: api.complete_task("t-1")) is None
        assert handler.last.method == "POST"
        assert handler.last.url.path == "/tasks/t-1/complete"

    def test_invalid_json(self, credentials):
        handler = Recorder(content=b"not json")
        with pytest.raises(ApiError):
            run(credentials, handler, lambda api: api.me())

    def test_connection_error(self, credentials):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ApiConnectionError) as exc_info:
            run(credentials, handler, lambda api: api.list_courses())
        assert "http://api.test" in exc_info.value.message

    def test_connection_error_is_api_error(self):
        assert issubclass(ApiConnectionError, ApiError)


# ============================================================================
# Endpoint Tests
# ============================================================================

class TestEndpoints:
    """Tests for routes, bodies and payload parsing."""

    def test_login(self, credentials):
        handler = Recorder(payload={"token": "t", "user": {"id": "u1", "username": "alice"}})
        result = run(credentials, handler, lambda api: api.login("alice", "secret"))
        assert result.token == "t"
        assert result.user.username == "alice"
        assert json.loads(handler.last.content) == {"username": "alice", "password": "secret"}

    def test_register(self, credentials):
        handler = Recorder(status=201, payload={"id": "u1", "username": "alice", "email": "a@b.c"})
        account = run(credentials, handler, lambda api: api.register("alice", "a@b.c", "pw"))
        assert account.id == "u1"
        assert handler.last.url.path == "/auth/register"

    def test_list_lessons_ignores_unknown_fields(self, credentials):
        handler = Recorder(payload=[
            {"id": "l1", "title": "Intro", "position": 1, "completed": True, "extra": "x"},
        ])
        lessons = run(credentials, handler, lambda api: api.list_lessons("c1"))
        assert lessons[0].completed is True
        assert handler.last.url.path == "/courses/c1/lessons"

    def test_list_courses_null_body(self, credentials):
        handler = Recorder(content=b"null")
        assert run(credentials, handler, lambda api: api.list_courses()) == []

    def test_task_accepts_id_alias(self, credentials):
        handler = Recorder(payload={
            "id": "t9",
            "lesson_title": "Intro",
            "steps": [{"position": 1, "command": "ls"}],
        })
        task = run(credentials, handler, lambda api: api.get_task("l1"))
        assert task.task_id == "t9"
        assert task.steps[0].command == "ls"

    def test_task_with_null_steps(self, credentials):
        """Test that a task sent with "steps": null has no steps."""
        handler = Recorder(payload={"id": "t-1", "steps": None})
        task = run(credentials, handler, lambda api: api.get_task("l-1"))
        assert task.task_id == "t-1"
        assert task.steps == []

    def test_unexpected_payload(self, credentials):
        handler = Recorder(payload=[{"title": "no id"}])
        with pytest.raises(ApiError) as exc_info:
            run(credentials, handler, lambda api: api.list_courses())
        assert "/courses" in exc_info.value.message

    def test_admin_routes(self, credentials):
        handler = Recorder(status=201, payload={"id": "c1"})
        run(credentials, handler, lambda api: api.create_lesson("c1", "T", "Body", 2))
        assert handler.last.url.path == "/admin/courses/c1/lessons"
        assert json.loads(handler.last.content) == {"title": "T", "content": "Body", "position": 2}

        handler = Recorder(status=204)
        run(credentials, handler, lambda api: api.delete_lesson("l1"))
        assert handler.last.method == "DELETE"
        assert handler.last.url.path == "/admin/lessons/l1"

    def test_generate_api_key(self, credentials):
        handler = Recorder(payload={"api_key": "k" * 64})
        key = run(credentials, handler, lambda api: api.generate_api_key())
        assert key.api_key == "k" * 64
        assert handler.last.url.path == "/auth/token"
