"""
Helpers shared by the course and admin commands: cache fill and formatting.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tlearn.api.data_models import Course, Lesson, Task

if TYPE_CHECKING:
    from tlearn.cli.commands.registry import CommandContext

DONE_MARK = "[x]"
TODO_MARK = "[ ]"


async def ensure_courses(ctx: "CommandContext") -> list[Course]:
    """Return cached courses, fetching them first when the cache is empty.

    Raises:
        ApiError: If the fetch fails.
    """
    if not ctx.state.cached_courses:
        ctx.state.replace_courses(await ctx.api.list_courses())
    return ctx.state.cached_courses


async def refresh_courses(ctx: "CommandContext") -> list[Course]:
    """Refetch the course list, replacing the cache."""
    ctx.state.replace_courses(await ctx.api.list_courses())
    return ctx.state.cached_courses


def format_courses(courses: list[Course]) -> str:
    if not courses:
        return "No courses available."
    id_width = max(len("ID"), *(len(c.id) for c in courses))
    title_width = max(len("TITLE"), *(len(c.title) for c in courses))
    lines = [
        f"{'ID':<{id_width}} | TITLE",
        f"{'-' * id_width}-+-{'-' * title_width}",
    ]
    for course in courses:
        lines.append(f"{course.id:<{id_width}} | {course.title}")
    return "\n".join(lines)


def format_lessons(course_title: str, lessons: list[Lesson]) -> str:
    if not lessons:
        return f"No lessons in {course_title} yet."
    lines = [f"Lessons in {course_title}:"]
    for lesson in lessons:
        mark = DONE_MARK if lesson.completed else TODO_MARK
        lines.append(f"  {mark} {lesson.position}. {lesson.title}")
    done = sum(1 for lesson in lessons if lesson.completed)
    lines.append(f"{done}/{len(lessons)} completed. Open one with: start <lesson>")
    return "\n".join(lines)


def format_task(task: Task) -> str:
    """Render a task as markdown: lesson text, task, steps, verification."""
    parts = []
    if task.lesson_title:
        parts.append(f"# {task.lesson_title}")
    if task.lesson_content:
        parts.append(task.lesson_content.strip())
    if task.task_description:
        parts.append(f"## Task\n\n{task.task_description.strip()}")

    if task.steps:
        steps = sorted(
            enumerate(task.steps, 1),
            key=lambda item: item[1].position if item[1].position is not None else item[0],
        )
        step_lines = []
        for index, step in steps:
            number = step.position if step.position is not None else index
            step_lines.append(f"{number}. `{step.command}`")
        parts.append("## Steps\n\n" + "\n".join(step_lines))

    parts.append(
        "## Verify\n\n"
        f"Run `t-learn verify {task.task_id}` in your terminal, "
        "then type `complete` here."
    )
    return "\n\n".join(parts)
