"""
Async client for the t-learn REST API.

Every call either returns a typed payload or raises ApiError with a message
fit for display.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from tlearn.api.data_models import (
    ApiKey,
    Course,
    Lesson,
    LoginResult,
    RegisteredAccount,
    Task,
    UserInfo,
)
from tlearn.core.exceptions import ApiConnectionError, ApiError
from tlearn.session.credentials import TOKEN_KEY, CredentialStore

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080"

T = TypeVar("T")


class ApiClient:
    """Thin wrapper around httpx.AsyncClient for the t-learn endpoints.

    The bearer token is read from the credential store on every request, so
    a login or logout takes effect immediately.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # =========================================================================
    # Transport
    # =========================================================================

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self.credentials.get(TOKEN_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, endpoint: str, body: dict[str, Any] | None = None) -> Any:
        """Send a request and return the decoded JSON body (None when empty)."""
        logger.debug(f"{method} {endpoint}")
        try:
            response = await self.client.request(
                method, endpoint, json=body, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {endpoint} failed: {e}")
            raise ApiConnectionError(f"Could not reach {self.base_url}: {e}") from e

        if response.is_error:
            message = f"Error {response.status_code}: {response.reason_phrase}"
            try:
                data = response.json()
                if isinstance(data, dict) and data.get("error"):
                    message = str(data["error"])
            except ValueError:
                pass
            logger.warning(f"{method} {endpoint} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid response from {endpoint}") from e

    @staticmethod
    def _parse(model: type[T], data: Any, endpoint: str) -> T:
        try:
            return TypeAdapter(model).validate_python(data)
        except ValidationError as e:
            logger.warning(f"Unexpected payload from {endpoint}: {e}")
            raise ApiError(f"Unexpected response from {endpoint}") from e

    # =========================================================================
    # Auth
    # =========================================================================

    async def register(self, username: str, email: str, password: str) -> RegisteredAccount:
        data = await self._request(
            "POST",
            "/auth/register",
            {"username": username, "email": email, "password": password},
        )
        return self._parse(RegisteredAccount, data, "/auth/register")

    async def login(self, username: str, password: str) -> LoginResult:
        data = await self._request(
            "POST", "/auth/login", {"username": username, "password": password}
        )
        return self._parse(LoginResult, data, "/auth/login")

    async def generate_api_key(self) -> ApiKey:
        data = await self._request("POST", "/auth/token")
        return self._parse(ApiKey, data, "/auth/token")

    async def me(self) -> UserInfo:
        data = await self._request("GET", "/auth/me")
        return self._parse(UserInfo, data, "/auth/me")

    # =========================================================================
    # Content
    # =========================================================================

    async def list_courses(self) -> list[Course]:
        data = await self._request("GET", "/courses")
        return self._parse(list[Course], data or [], "/courses")

    async def list_lessons(self, course_id: str) -> list[Lesson]:
        endpoint = f"/courses/{course_id}/lessons"
        data = await self._request("GET", endpoint)
        return self._parse(list[Lesson], data or [], endpoint)

    async def get_task(self, lesson_id: str) -> Task:
        endpoint = f"/lessons/{lesson_id}/task"
        data = await self._request("GET", endpoint)
        return self._parse(Task, data, endpoint)

    async def complete_task(self, task_id: str) -> None:
        await self._request("POST", f"/tasks/{task_id}/complete")

    # =========================================================================
    # Admin
    # =========================================================================

    async def create_course(self, title: str, description: str) -> Any:
        return await self._request(
            "POST", "/admin/courses", {"title": title, "description": description}
        )

    async def delete_course(self, course_id: str) -> None:
        await self._request("DELETE", f"/admin/courses/{course_id}")

    async def create_lesson(self, course_id: str, title: str, content: str, position: int) -> Any:
        return await self._request(
            "POST",
            f"/admin/courses/{course_id}/lessons",
            {"title": title, "content": content, "position": position},
        )

    async def delete_lesson(self, lesson_id: str) -> None:
        await self._request("DELETE", f"/admin/lessons/{lesson_id}")
