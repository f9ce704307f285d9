"""
Session state for a running shell.

One SessionState lives for the lifetime of the shell. It is owned by the
Interpreter and handed to every command handler; nothing else mutates it.
Handlers run one at a time, so no locking is done here. If commands are
ever dispatched concurrently, cache and path writes need a single writer.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from tlearn.api.data_models import Course, Lesson, Task

ROOT_PROMPT = "$"


def compute_prompt(path: list[str]) -> str:
    """Derive the prompt from the navigation path.

    >>> compute_prompt([])
    '$'
    >>> compute_prompt(["Go Mastery"])
    'Go Mastery $'
    """
    if not path:
        return ROOT_PROMPT
    return f"{path[-1]} {ROOT_PROMPT}"


class SessionState(BaseModel):
    """Mutable state of one shell session."""

    user: Optional[str] = None
    path: list[str] = Field(default_factory=list)

    # Snapshots of the last fetch; replaced wholesale, never merged
    cached_courses: list[Course] = Field(default_factory=list)
    cached_lessons: list[Lesson] = Field(default_factory=list)
    lessons_course_id: Optional[str] = None
    current_task: Optional[Task] = None

    command_history: list[str] = Field(default_factory=list)
    history_pointer: Optional[int] = None  # None = not recalling

    @property
    def prompt(self) -> str:
        return compute_prompt(self.path)

    # =========================================================================
    # Navigation
    # =========================================================================

    def enter(self, segment: str) -> None:
        """Push a navigation segment."""
        self.path.append(segment)

    def leave(self) -> Optional[str]:
        """Pop the innermost navigation segment, if any."""
        if not self.path:
            return None
        return self.path.pop()

    def reset_path(self) -> None:
        self.path = []

    # =========================================================================
    # Caches
    # =========================================================================

    def replace_courses(self, courses: list[Course]) -> None:
        self.cached_courses = list(courses)

    def replace_lessons(self, course_id: Optional[str], lessons: list[Lesson]) -> None:
        self.lessons_course_id = course_id
        self.cached_lessons = list(lessons)

    def clear_lessons(self) -> None:
        self.lessons_course_id = None
        self.cached_lessons = []

    def logout(self) -> None:
        """Forget the user, the navigation path and the open task."""
        self.user = None
        self.reset_path()
        self.current_task = None

    # =========================================================================
    # Command history and recall
    # =========================================================================

    def record_command(self, raw: str) -> None:
        """Append a submitted line and stop recalling."""
        self.command_history.append(raw)
        self.history_pointer = None

    def recall_previous(self) -> str:
        """Move the recall pointer to an older entry and return it.

        Starting from "not recalling" goes to the newest entry; the pointer
        stops at the oldest entry. An empty history yields "".
        """
        if not self.command_history:
            self.history_pointer = None
            return ""
        if self.history_pointer is None:
            self.history_pointer = len(self.command_history) - 1
        else:
            self.history_pointer = max(0, self.history_pointer - 1)
        return self.command_history[self.history_pointer]

    def recall_next(self) -> str:
        """Move the recall pointer to a newer entry and return it.

        Moving past the newest entry stops recalling and yields "".
        """
        if self.history_pointer is None:
            return ""
        if self.history_pointer >= len(self.command_history) - 1:
            self.history_pointer = None
            return ""
        self.history_pointer += 1
        return self.command_history[self.history_pointer]
