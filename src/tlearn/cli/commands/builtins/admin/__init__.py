"""Admin commands - create and delete courses and lessons.

Every mutation leaves the caches consistent before returning: course
changes refetch the course list, a new lesson refetches the lessons of its
course when they are cached, and a deleted lesson is filtered out locally.
"""
from __future__ import annotations

from tlearn.cli.commands.helpers import ensure_courses, refresh_courses
from tlearn.cli.commands.registry import CommandContext, command_registry
from tlearn.core.datamodels import CommandResponse
from tlearn.core.exceptions import ApiError
from tlearn.core.resolver import find, resolve


@command_registry.register(
    "mkcourse", "Create a course", usage='mkcourse "<title>" "<description>"', admin=True
)
async def cmd_mkcourse(ctx: CommandContext, args: list[str]) -> CommandResponse:
    if len(args) != 2:
        return CommandResponse.usage('mkcourse "<title>" "<description>"')
    title, description = args

    try:
        await ctx.api.create_course(title, description)
    except ApiError as e:
        return CommandResponse.error(f"Could not create course: {e.message}")

    try:
        await refresh_courses(ctx)
    except ApiError as e:
        return CommandResponse.error(f"Course created, but refreshing the list failed: {e.message}")
    return CommandResponse.success(f"Course created: {title}")


@command_registry.register("rmcourse", "Delete a course", usage="rmcourse <course>", admin=True)
async def cmd_rmcourse(ctx: CommandContext, args: list[str]) -> CommandResponse:
    if not args:
        return CommandResponse.usage("rmcourse <course name or id>")
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
        await ctx.api.delete_course(course.id)
    except ApiError as e:
        return CommandResponse.error(f"Could not delete course: {e.message}")

    if ctx.state.lessons_course_id == course.id:
        ctx.state.clear_lessons()
    if course.title in ctx.state.path:
        ctx.state.reset_path()
        ctx.state.current_task = None

    try:
        await refresh_courses(ctx)
    except ApiError as e:
        return CommandResponse.error(f"Course deleted, but refreshing the list failed: {e.message}")
    return CommandResponse.success(f"Course deleted: {course.title}")


@command_registry.register(
    "mklesson",
    "Add a lesson to a course",
    usage='mklesson <course> "<title>" "<content>" <position>',
    admin=True,
)
async def cmd_mklesson(ctx: CommandContext, args: list[str]) -> CommandResponse:
    usage = 'mklesson <course> "<title>" "<content>" <position>'
    if len(args) != 4:
        return CommandResponse.usage(usage)
    course_query, title, content, position_text = args

    try:
        position = int(position_text)
    except ValueError:
        return CommandResponse.error(f"Position must be a number, got '{position_text}'. Usage: {usage}")

    try:
        courses = await ensure_courses(ctx)
    except ApiError as e:
        return CommandResponse.error(f"Could not fetch courses: {e.message}")

    course = find(resolve(course_query, courses), courses)
    if course is None:
        return CommandResponse.error(
            f"Course not found: {course_query}. Run 'courses' to see what is available."
        )

    try:
        await ctx.api.create_lesson(course.id, title, content, position)
    except ApiError as e:
        return CommandResponse.error(f"Could not create lesson: {e.message}")

    if ctx.state.lessons_course_id == course.id:
        try:
            lessons = await ctx.api.list_lessons(course.id)
        except ApiError as e:
            return CommandResponse.error(f"Lesson created, but refreshing lessons failed: {e.message}")
        ctx.state.replace_lessons(course.id, sorted(lessons, key=lambda lesson: lesson.position))

    return CommandResponse.success(f"Lesson created in {course.title}: {title}")


@command_registry.register("rmlesson", "Delete a lesson", usage="rmlesson <lesson>", admin=True)
async def cmd_rmlesson(ctx: CommandContext, args: list[str]) -> CommandResponse:
    if not args:
        return CommandResponse.usage("rmlesson <lesson name or id>")
    query = " ".join(args)

    lessons = ctx.state.cached_lessons
    lesson = find(resolve(query, lessons), lessons)
    if lesson is None:
        return CommandResponse.error(
            f"Lesson not found: {query}. Run 'lessons <course>' first."
        )

    try:
        await ctx.api.delete_lesson(lesson.id)
    except ApiError as e:
        return CommandResponse.error(f"Could not delete lesson: {e.message}")

    ctx.state.cached_lessons = [item for item in lessons if item.id != lesson.id]
    task = ctx.state.current_task
    if task is not None and task.lesson_id == lesson.id:
        ctx.state.current_task = None
    if ctx.state.path and ctx.state.path[-1] == lesson.title:
        ctx.state.leave()
    return CommandResponse.success(f"Lesson deleted: {lesson.title}")
