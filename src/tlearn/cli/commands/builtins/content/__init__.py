"""Course commands - courses, lessons, start, complete, back."""
from __future__ import annotations

from tlearn.cli.commands.helpers import (
    ensure_courses,
    format_courses,
    format_lessons,
    format_task,
    refresh_courses,
)
from tlearn.cli.commands.registry import CommandContext, command_registry
from tlearn.core.datamodels import CommandResponse
from tlearn.core.exceptions import ApiError
from tlearn.core.resolver import find, resolve


@command_registry.register("courses", "List available courses")
async def cmd_courses(ctx: CommandContext, args: list[str]) -> CommandResponse:
    try:
        courses = await refresh_courses(ctx)
    except ApiError as e:
        return CommandResponse.error(f"Could not fetch courses: {e.message}")
    return CommandResponse.info(format_courses(courses))


@command_registry.register("lessons", "List lessons of a course", usage="lessons <course>")
async def cmd_lessons(ctx: CommandContext, args: list[str]) -> CommandResponse:
    """Resolve a course by id or title and list its lessons.

    Entering a course makes it the navigation context.
    """
    if not args:
        return CommandResponse.usage("lessons <course name or id>")
    query = " ".join(args)

    try:
        courses = await ensure_courses(ctx)
    except ApiError as e:
        return CommandResponse.error(f"Could not fetch courses: {e.message}")

    course = find(resolve(query, courses), courses)
    if course is None:
        return CommandResponse.error(
            f"Course not found: {query}. Run 'courses' to see what is available."
        )

    try:
        lessons = await ctx.api.list_lessons(course.id)
    except ApiError as e:
        return CommandResponse.error(f"Could not fetch lessons: {e.message}")

    lessons = sorted(lessons, key=lambda lesson: lesson.position)
    ctx.state.replace_lessons(course.id, lessons)
    ctx.state.reset_path()
    ctx.state.enter(course.title)
    return CommandResponse.info(format_lessons(course.title, lessons))


@command_registry.register("start", "Open a lesson and its task", usage="start <lesson>")
async def cmd_start(ctx: CommandContext, args: list[str]) -> CommandResponse:
    if not args:
        return CommandResponse.usage("start <lesson name or id>")
    query = " ".join(args)

    # Lessons are never fetched here; the user lists them first
    lesson = find(resolve(query, ctx.state.cached_lessons), ctx.state.cached_lessons)
    if lesson is None:
        return CommandResponse.error(
            f"Lesson not found: {query}. Run 'lessons <course>' first."
        )

    try:
        task = await ctx.api.get_task(lesson.id)
    except ApiError as e:
        return CommandResponse.error(f"Could not fetch task: {e.message}")

    missing = {}
    if not task.lesson_title:
        missing["lesson_title"] = lesson.title
    if task.lesson_id is None:
        missing["lesson_id"] = lesson.id
    if missing:
        task = task.model_copy(update=missing)
    ctx.state.current_task = task
    course = find(ctx.state.lessons_course_id, ctx.state.cached_courses)
    ctx.state.reset_path()
    if course is not None:
        ctx.state.enter(course.title)
    ctx.state.enter(lesson.title)
    return CommandResponse.output(format_task(task))


@command_registry.register("complete", "Mark the current task as done")
async def cmd_complete(ctx: CommandContext, args: list[str]) -> CommandResponse:
    task = ctx.state.current_task
    if task is None:
        return CommandResponse.error("No task open. Run 'start <lesson>' first.")
    if ctx.state.user is None:
        return CommandResponse.error("Not logged in. Use: login <username> <password>")

    try:
        await ctx.api.complete_task(task.task_id)
    except ApiError as e:
        return CommandResponse.error(f"Could not complete task: {e.message}")

    if task.lesson_id is not None:
        ctx.state.cached_lessons = [
            lesson.model_copy(update={"completed": True}) if lesson.id == task.lesson_id else lesson
            for lesson in ctx.state.cached_lessons
        ]
    title = task.lesson_title or task.task_id
    return CommandResponse.success(f"Completed: {title}")


@command_registry.register("back", "Leave the current course or lesson", aliases=["up"])
async def cmd_back(ctx: CommandContext, args: list[str]) -> CommandResponse:
    left = ctx.state.leave()
    if left is None:
        return CommandResponse.info("Already at the top.")
    if ctx.state.current_task is not None and ctx.state.current_task.lesson_title == left:
        ctx.state.current_task = None
    return CommandResponse.info(f"Left {left}.")
