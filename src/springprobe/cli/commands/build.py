"""Build commands - run Maven compile or tests and print the outcome."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from springprobe.build import run_tests, validate_compile
from springprobe.cli._common import emit, resolve_project


@dataclass
class Compile:
    """Run `mvn clean compile test-compile`; exit 1 on failure."""

    directory: Path | None = field(
        default=None,
        metadata={"help": "Project root (default: current directory)"},
    )

    def run(self) -> int:
        project = resolve_project(self.directory)
        outcome = asyncio.run(validate_compile(project))
        emit(outcome.to_dict())
        return 0 if outcome.success else 1


@dataclass
class Test:
    """Run `mvn test` for all tests, one class or one method."""

    directory: Path | None = field(
        default=None,
        metadata={"help": "Project root (default: current directory)"},
    )
    test_class: str | None = field(
        default=None, metadata={"help": "Test class, e.g. UserControllerIT"}
    )
    test_method: str | None = field(
        default=None, metadata={"help": "Test method within --test-class"}
    )

    __test__ = False  # not a pytest class

    def run(self) -> int:
        outcome = asyncio.run(
            run_tests(
                resolve_project(self.directory),
                self.test_class,
                self.test_method,
            )
        )
        emit(outcome.to_dict())
        return 0 if outcome.success else 1
