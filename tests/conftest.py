"""Shared fixtures: throwaway Maven/Spring project trees."""

from __future__ import annotations

import asyncio
import os
import sys
import textwrap
from pathlib import Path

import pytest
import structlog

from springprobe import environment


class JavaProject:
    """Builds a Maven-style project tree under a temporary directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def add(self, rel_path: str, source: str, scope: str = "main") -> Path:
        """Write a Java file under src/<scope>/java/<rel_path>."""
        path = self.root / "src" / scope / "java" / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    def add_test_resource(self, name: str, text: str) -> Path:
        path = self.root / "src" / "test" / "resources" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    def add_pom(self, text: str) -> Path:
        path = self.root / "pom.xml"
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path


@pytest.fixture
def project(tmp_path: Path) -> JavaProject:
    root = tmp_path / "app"
    root.mkdir()
    return JavaProject(root)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host SPRINGPROBE_* settings and cached probes out of tests."""
    for name in list(os.environ):
        if name.startswith("SPRINGPROBE_"):
            monkeypatch.delenv(name, raising=False)
    environment._runtime_cache.clear()


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop logging config bound to streams captured by one test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sleeper(tmp_path: Path):
    """A long-running child that records its pid; returns (cmd, wait_pid)."""
    pid_file = tmp_path / "child.pid"
    code = (
        "import os, pathlib, time\n"
        f"pathlib.Path({str(pid_file)!r}).write_text(str(os.getpid()))\n"
        "time.sleep(30)\n"
    )

    async def wait_pid() -> int:
        for _ in range(200):
            if pid_file.exists() and pid_file.read_text():
                return int(pid_file.read_text())
            await asyncio.sleep(0.05)
        raise AssertionError("child never started")

    return [sys.executable, "-c", code], wait_pid
