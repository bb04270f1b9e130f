"""Tests for springprobe.build.invoker module.

A small Python script stands in for Maven so the real subprocess plumbing
(combined output, exit codes, timeouts) is exercised.
"""

import asyncio
import os
import sys
import textwrap
from pathlib import Path

import pytest

from springprobe.build import invoker
from springprobe.build.output_parser import (
    CompileOutcome,
    SubprocessFailure,
    TestOutcome,
    UnparseableOutput,
)


@pytest.fixture
def fake_maven(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Install a fake build tool; returns a function taking its script."""

    def install(body: str) -> Path:
        script = tmp_path / "fake_mvn.py"
        script.write_text(textwrap.dedent(body))
        monkeypatch.setattr(
            invoker,
            "maven_command",
            lambda root=None: [sys.executable, str(script)],
        )
        return script

    return install


class TestMavenCommand:
    """Tests for maven_command."""

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPRINGPROBE_MAVEN_CMD", "mvn -B -q")
        assert invoker.maven_command() == ["mvn", "-B", "-q"]

    def test_wrapper_preferred(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(invoker, "IS_WINDOWS", False)
        (tmp_path / "mvnw").write_text("#!/bin/sh\n")
        assert invoker.maven_command(tmp_path) == [str(tmp_path / "mvnw")]

    def test_falls_back_to_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(invoker, "IS_WINDOWS", False)
        assert invoker.maven_command(tmp_path) == ["mvn"]
        assert invoker.maven_command() == ["mvn"]

    def test_windows_names(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(invoker, "IS_WINDOWS", True)
        assert invoker.wrapper_script_name() == "mvnw.cmd"
        assert invoker.maven_command(tmp_path) == ["mvn.cmd"]


class TestSelectorAndTimeouts:
    """Tests for test selection and timeout settings."""

    @pytest.mark.parametrize(
        ("test_class", "test_method", "expected"),
        [
            ("UserTest", None, "UserTest"),
            ("UserTest", "shouldWork", "UserTest#shouldWork"),
            (None, None, None),
            (None, "shouldWork", None),
        ],
    )
    def test_selector(self, test_class, test_method, expected) -> None:
        assert invoker.selector_for_tests(test_class, test_method) == expected

    def test_default_timeouts(self) -> None:
        assert invoker.compile_timeout() == 180.0
        assert invoker.timeout_for_tests() == 120.0

    def test_env_timeouts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPRINGPROBE_COMPILE_TIMEOUT", "30")
        monkeypatch.setenv("SPRINGPROBE_TEST_TIMEOUT", "bogus")
        assert invoker.compile_timeout() == 30.0
        assert invoker.timeout_for_tests() == 120.0

    def test_non_positive_timeout_uses_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SPRINGPROBE_COMPILE_TIMEOUT", "0")
        assert invoker.compile_timeout() == 180.0


@pytest.mark.asyncio
class TestRunBuild:
    """Tests for run_build."""

    async def test_combined_output(self, tmp_path: Path) -> None:
        code = (
            "import sys\n"
            "print('to stdout', flush=True)\n"
            "print('to stderr', file=sys.stderr, flush=True)\n"
            "sys.exit(3)\n"
        )
        result = await invoker.run_build(
            [sys.executable, "-c", code], tmp_path, timeout=30
        )
        assert "to stdout" in result.output
        assert "to stderr" in result.output
        assert result.returncode == 3
        assert result.timed_out is False

    async def test_timeout_keeps_partial_output(self, tmp_path: Path) -> None:
        code = "import time\nprint('started', flush=True)\ntime.sleep(30)\n"
        result = await invoker.run_build(
            [sys.executable, "-c", code], tmp_path, timeout=0.5
        )
        assert result.timed_out is True
        assert "started" in result.output
        assert result.duration < 10

    async def test_missing_binary_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            await invoker.run_build(
                [str(tmp_path / "no-such-mvn")], tmp_path, timeout=5
            )

    async def test_cancel_kills_build(self, tmp_path: Path, sleeper) -> None:
        cmd, wait_pid = sleeper
        task = asyncio.create_task(invoker.run_build(cmd, tmp_path, 60))
        pid = await wait_pid()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        with pytest.raises(ProcessLookupError):
            os.kill(pid, 0)


@pytest.mark.asyncio
class TestValidateCompile:
    """Tests for validate_compile."""

    async def test_success(self, project, fake_maven) -> None:
        fake_maven("print('[INFO] BUILD SUCCESS')\n")
        outcome = await invoker.validate_compile(project.root)
        assert outcome == CompileOutcome(success=True)

    async def test_compile_errors(self, project, fake_maven) -> None:
        fake_maven(
            """\
            import sys
            print("[ERROR] Foo.java:[3,1] cannot find symbol")
            print("[INFO] BUILD FAILURE")
            sys.exit(1)
            """
        )
        outcome = await invoker.validate_compile(project.root)
        assert outcome.success is False
        assert outcome.errors == ["Foo.java:[3,1] cannot find symbol"]

    async def test_goals_passed(self, project, fake_maven, tmp_path) -> None:
        args_file = tmp_path / "args.txt"
        fake_maven(
            f"""\
            import sys
            open({str(args_file)!r}, "w").write(" ".join(sys.argv[1:]))
            print("BUILD SUCCESS")
            """
        )
        await invoker.validate_compile(project.root)
        assert args_file.read_text() == "clean compile test-compile"

    async def test_missing_project(self, tmp_path: Path) -> None:
        outcome = await invoker.validate_compile(tmp_path / "missing")
        assert isinstance(outcome, SubprocessFailure)
        assert "is not a directory" in outcome.message

    async def test_build_tool_missing(
        self, project, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            invoker,
            "maven_command",
            lambda root=None: [str(project.root / "definitely-not-mvn")],
        )
        outcome = await invoker.validate_compile(project.root)
        assert isinstance(outcome, SubprocessFailure)
        assert outcome.message.startswith("Failed to start")
        assert outcome.to_dict()["success"] is False


@pytest.mark.asyncio
class TestRunTests:
    """Tests for run_tests."""

    async def test_selector_and_counts(
        self, project, fake_maven, tmp_path
    ) -> None:
        args_file = tmp_path / "args.txt"
        fake_maven(
            f"""\
            import sys
            open({str(args_file)!r}, "w").write(" ".join(sys.argv[1:]))
            print("Tests run: 3, Failures: 0, Errors: 0, Skipped: 1")
            """
        )
        outcome = await invoker.run_tests(
            project.root, "UserTest", "shouldWork"
        )
        assert args_file.read_text() == "test -Dtest=UserTest#shouldWork"
        assert isinstance(outcome, TestOutcome)
        assert outcome.success is True
        assert outcome.skipped == 1

    async def test_failing_run_is_still_parsed(
        self, project, fake_maven
    ) -> None:
        fake_maven(
            """\
            import sys
            print("Tests run: 4, Failures: 1, Errors: 0, Skipped: 0")
            sys.exit(1)
            """
        )
        outcome = await invoker.run_tests(project.root)
        assert isinstance(outcome, TestOutcome)
        assert outcome.failures == 1
        assert outcome.success is False

    async def test_no_summary(self, project, fake_maven) -> None:
        fake_maven("print('[ERROR] could not resolve dependencies')\n")
        outcome = await invoker.run_tests(project.root)
        assert isinstance(outcome, UnparseableOutput)
        assert "could not resolve" in outcome.output

    async def test_timeout(
        self, project, fake_maven, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SPRINGPROBE_TEST_TIMEOUT", "0.5")
        fake_maven(
            """\
            import time
            print("Running com.example.SlowTest", flush=True)
            time.sleep(30)
            """
        )
        outcome = await invoker.run_tests(project.root)
        assert isinstance(outcome, SubprocessFailure)
        assert outcome.message == "Build timed out after 0.5s"
        assert "SlowTest" in outcome.output
