"""Integration tests for the from-source chain.

Runs the real shell with stand-in docker-compose, yarn and node scripts on
PATH. Each stand-in appends its arguments to a call log.
"""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from tower_installer.config import InstallerConfig
from tower_installer.deploy import DeploymentSequencer, FromSource, SequencerState, StackManager
from tower_installer.errors import ExternalStepFailed

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell"),
]

TOOL_SCRIPT = """#!/bin/sh
echo "{name} $* PRISMA_PORT=$PRISMA_PORT" >> "$TOWER_TEST_CALL_LOG"
{body}
exit 0
"""


def write_tool(bin_dir: Path, name: str, body: str = "") -> None:
    tool = bin_dir / name
    tool.write_text(TOOL_SCRIPT.format(name=name, body=body))
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture
def tools(tmp_path, monkeypatch):
    """Install stand-in tools and return the call log path."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    call_log = tmp_path / "calls.log"
    call_log.touch()

    write_tool(bin_dir, "docker-compose")
    write_tool(bin_dir, "yarn")
    write_tool(bin_dir, "node")

    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("TOWER_TEST_CALL_LOG", str(call_log))
    return bin_dir, call_log


def calls(call_log: Path) -> list[str]:
    return call_log.read_text().splitlines()


class TestFromSourceChain:
    """The from-source chain against stand-in tools."""

    def test_full_chain(self, tools, make_source_tree):
        _, call_log = tools
        source_dir = make_source_tree()

        sequencer = DeploymentSequencer(InstallerConfig(), force=True)
        sequencer.deploy(FromSource(source_dir))

        log = calls(call_log)
        assert sequencer.state is SequencerState.SUCCEEDED
        assert log[0].startswith("docker-compose -p tower -f ")
        assert log[1].startswith("yarn ")
        assert log[2].startswith("yarn lerna run prepublish")
        assert log[3] == "yarn prisma deploy PRISMA_PORT=8811"
        assert log[4] == "yarn prisma reset -f PRISMA_PORT=8811"
        assert log[5].startswith("node ")
        assert log[5].endswith("setup.js PRISMA_PORT=8811")

    def test_migration_failure_skips_setup_script(self, tools, make_source_tree):
        bin_dir, call_log = tools
        write_tool(bin_dir, "yarn", body='[ "$1 $2" = "prisma deploy" ] && exit 1')
        source_dir = make_source_tree()

        sequencer = DeploymentSequencer(InstallerConfig())
        with pytest.raises(ExternalStepFailed) as exc_info:
            sequencer.deploy(FromSource(source_dir))

        assert exc_info.value.step == "setup"
        assert sequencer.state is SequencerState.FAILED
        assert sum(1 for line in calls(call_log) if line.startswith("node ")) == 0

    def test_no_force_skips_reset(self, tools, make_source_tree):
        _, call_log = tools
        DeploymentSequencer(InstallerConfig()).deploy(FromSource(make_source_tree()))
        assert not any("prisma reset" in line for line in calls(call_log))


class TestDownChain:
    """Teardown against a stand-in compose tool."""

    def test_down_idempotent(self, tools):
        _, call_log = tools
        manager = StackManager(InstallerConfig())
        manager.down()
        manager.down()
        assert calls(call_log) == [
            "docker-compose -p tower down PRISMA_PORT=",
            "docker-compose -p tower down PRISMA_PORT=",
        ]
