"""Shared test fixtures for tower-installer tests.

- FakeShell: records shell invocations and returns scripted exit codes
- config: default InstallerConfig
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from tower_installer.config import InstallerConfig


@dataclass
class ShellCall:
    """One recorded run_shell invocation."""

    line: str
    cwd: Path | None = None
    env: dict[str, str] | None = None
    stdin: str | None = None
    quiet: bool = False


@dataclass
class FakeShell:
    """Stand-in for run_shell.

    ``returncodes`` maps a substring of the command line to the exit code
    returned for lines containing it. ``raises`` maps a substring to an
    exception raised instead.
    """

    returncodes: dict[str, int] = field(default_factory=dict)
    raises: dict[str, Exception] = field(default_factory=dict)
    calls: list[ShellCall] = field(default_factory=list)

    def __call__(self, line: str, **kwargs: Any) -> int:
        self.calls.append(ShellCall(line, **kwargs))
        for fragment, error in self.raises.items():
            if fragment in line:
                raise error
        for fragment, code in self.returncodes.items():
            if fragment in line:
                return code
        return 0

    @property
    def lines(self) -> list[str]:
        return [c.line for c in self.calls]

    def count(self, fragment: str) -> int:
        return sum(1 for line in self.lines if fragment in line)


@pytest.fixture
def fake_shell() -> FakeShell:
    """Fake shell runner where every command succeeds by default."""
    return FakeShell()


@pytest.fixture
def config() -> InstallerConfig:
    """Default installer configuration."""
    return InstallerConfig()


@pytest.fixture
def make_source_tree(tmp_path: Path) -> Callable[[], Path]:
    """Create a minimal tower source checkout."""

    def _make() -> Path:
        source_dir = tmp_path / "tower"
        scripts = source_dir / "packages" / "server" / "scripts"
        scripts.mkdir(parents=True)
        (source_dir / "packages" / "server" / "docker-compose.yml").write_text("services: {}\n")
        (scripts / "setup.js").write_text("")
        return source_dir

    return _make
