#!/usr/bin/env python3
"""
Tests for the Interpreter dispatch loop and DisplayHistory.
"""

import asyncio

import pytest

from tlearn.cli.commands.registry import CommandRegistry
from tlearn.cli.interpreter import DisplayHistory, Interpreter
from tlearn.core.datamodels import CommandResponse, DisplayLine, LineKind
from tlearn.session.credentials import TOKEN_KEY, USERNAME_KEY


def kinds(interpreter):
    return [line.kind for line in interpreter.lines]


# ============================================================================
# DisplayHistory Tests
# ============================================================================

class TestDisplayHistory:
    """Tests for DisplayHistory."""

    def test_append_and_clear_notify(self):
        appended, cleared = [], []
        display = DisplayHistory(on_append=appended.append, on_clear=lambda: cleared.append(True))
        line = DisplayLine(kind=LineKind.INFO, content="hi")
        display.append(line)
        assert display.lines == [line]
        assert appended == [line]
        display.clear()
        assert len(display) == 0
        assert cleared == [True]

    def test_lines_is_a_copy(self):
        display = DisplayHistory()
        display.append(DisplayLine(kind=LineKind.INFO, content="hi"))
        display.lines.clear()
        assert len(display) == 1


# ============================================================================
# Dispatch Tests
# ============================================================================

class TestExecute:
    """Tests for Interpreter.execute()."""

    def test_blank_line_is_noop(self, interpreter, state):
        """Test that blank input records nothing and shows nothing."""
        asyncio.run(interpreter.execute("   "))
        assert interpreter.lines == []
        assert state.command_history == []

    def test_command_is_echoed_and_recorded(self, interpreter, state):
        asyncio.run(interpreter.execute("whoami"))
        assert interpreter.lines[0].kind == LineKind.COMMAND
        assert interpreter.lines[0].content == "whoami"
        assert state.command_history == ["whoami"]

    def test_raw_line_is_recorded_verbatim(self, interpreter, state):
        asyncio.run(interpreter.execute('  LESSONS "Go Mastery"  '))
        assert state.command_history == ['  LESSONS "Go Mastery"  ']

    def test_execute_resets_recall_pointer(self, interpreter, state):
        asyncio.run(interpreter.execute("help"))
        interpreter.recall_previous()
        assert state.history_pointer == 0
        asyncio.run(interpreter.execute("whoami"))
        assert state.history_pointer is None

    def test_unknown_command(self, interpreter):
        asyncio.run(interpreter.execute("frobnicate now"))
        assert kinds(interpreter) == [LineKind.COMMAND, LineKind.ERROR]
        assert "Command not found: frobnicate" in interpreter.lines[1].content

    def test_command_name_is_case_insensitive(self, interpreter):
        asyncio.run(interpreter.execute("HELP"))
        assert kinds(interpreter) == [LineKind.COMMAND, LineKind.INFO]

    def test_clear_twice(self, interpreter):
        """Test that clear is idempotent and never errors."""
        asyncio.run(interpreter.execute("help"))
        asyncio.run(interpreter.execute("clear"))
        assert interpreter.lines == []
        asyncio.run(interpreter.execute("clear"))
        assert interpreter.lines == []

    def test_clear_is_recorded_in_history(self, interpreter, state):
        asyncio.run(interpreter.execute("clear"))
        assert state.command_history == ["clear"]

    def test_display_line_ids_are_unique(self, interpreter):
        for _ in range(3):
            asyncio.run(interpreter.execute("help"))
        ids = [line.id for line in interpreter.lines]
        assert len(ids) == len(set(ids))

    def test_welcome_line(self, state, fake_api, credentials):
        interp = Interpreter(state, fake_api, credentials, welcome="Welcome!")
        assert kinds(interp) == [LineKind.INFO]
        assert interp.lines[0].content == "Welcome!"


class TestSafetyNet:
    """Tests for handlers that misbehave."""

    @pytest.fixture
    def registry(self):
        registry = CommandRegistry()

        @registry.register("boom", "Raise")
        async def cmd_boom(ctx, args):
            raise RuntimeError("kaboom")

        @registry.register("bad", "Return the wrong type")
        async def cmd_bad(ctx, args):
            return "not a response"

        @registry.register("cd", "Enter a context")
        async def cmd_cd(ctx, args):
            ctx.state.enter(args[0])
            return CommandResponse.info("ok")

        return registry

    @pytest.fixture
    def interp(self, registry, state, fake_api, credentials):
        return Interpreter(state, fake_api, credentials, registry=registry)

    def test_raising_handler_becomes_error_line(self, interp):
        asyncio.run(interp.execute("boom"))
        assert kinds(interp) == [LineKind.COMMAND, LineKind.ERROR]
        assert "kaboom" in interp.lines[1].content
        assert not interp.busy

    def test_shell_survives_faults(self, interp):
        asyncio.run(interp.execute("boom"))
        asyncio.run(interp.execute("cd Go"))
        assert interp.lines[-1].kind == LineKind.INFO

    def test_wrong_return_type(self, interp):
        asyncio.run(interp.execute("bad"))
        assert interp.lines[-1].kind == LineKind.ERROR

    def test_prompt_recomputed_after_command(self, interp):
        assert interp.prompt == "$"
        asyncio.run(interp.execute('cd "Go Mastery"'))
        assert interp.prompt == "Go Mastery $"

    def test_handler_receives_arguments(self, registry, interp):
        received = []

        @registry.register("echo", "Echo")
        async def cmd_echo(ctx, args):
            received.append(args)
            return CommandResponse.output(" ".join(args))

        asyncio.run(interp.execute('echo a "b c" d'))
        assert received == [["a", "b c", "d"]]


# ============================================================================
# End-to-end Tests
# ============================================================================

class TestEndToEnd:
    """Scenarios that go through the built-in commands."""

    def test_login_success(self, interpreter, state, credentials, fake_api):
        asyncio.run(interpreter.execute("login alice secret"))
        assert state.user == "alice"
        assert kinds(interpreter) == [LineKind.COMMAND, LineKind.SUCCESS]
        assert credentials.get(TOKEN_KEY) == "token-alice"
        assert credentials.get(USERNAME_KEY) == "alice"
        assert fake_api.called("login") == [("login", "alice", "secret")]

    def test_login_failure(self, interpreter, state, fake_api, credentials):
        fake_api.failures["login"] = "invalid credentials"
        asyncio.run(interpreter.execute("login alice wrong"))
        assert state.user is None
        assert kinds(interpreter) == [LineKind.COMMAND, LineKind.ERROR]
        assert "invalid credentials" in interpreter.lines[1].content
        assert credentials.get(TOKEN_KEY) is None

    def test_lessons_with_empty_cache(self, interpreter, state, fake_api):
        asyncio.run(interpreter.execute("lessons Go Mastery"))
        assert [l.id for l in state.cached_lessons] == ["l-1", "l-2"]
        assert kinds(interpreter) == [LineKind.COMMAND, LineKind.INFO]
        listing = interpreter.lines[1].content
        assert "[x] 1. Hello World" in listing
        assert "[ ] 2. HTTP Servers" in listing
        assert interpreter.prompt == "Go Mastery $"

    def test_mkcourse_usage_makes_no_call(self, interpreter, fake_api):
        asyncio.run(interpreter.execute("mkcourse OnlyTitle"))
        assert kinds(interpreter) == [LineKind.COMMAND, LineKind.ERROR]
        assert interpreter.lines[1].content.startswith("Usage:")
        assert fake_api.calls == []

    def test_course_walkthrough(self, interpreter, state, fake_api):
        """Test login, lessons, start, complete, back, logout."""
        for line in [
            "login alice secret",
            "lessons go",
            "start http",
            "complete",
        ]:
            asyncio.run(interpreter.execute(line))
        assert interpreter.prompt == "HTTP Servers $"
        assert fake_api.called("complete_task") == [("complete_task", "t-2")]
        assert all(lesson.completed for lesson in state.cached_lessons)

        asyncio.run(interpreter.execute("back"))
        assert interpreter.prompt == "Go Mastery $"

        asyncio.run(interpreter.execute("logout"))
        assert interpreter.prompt == "$"
        assert state.user is None
