"""Step definitions for the deployment chain.

A step is one external shell invocation built from an ordered list of
sub-commands joined with ``&&``. Optional sub-commands are filtered out
before joining, so a failure anywhere short-circuits the rest of the line.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class SubStep:
    """One command inside a step's shell line."""

    command: str
    enabled: bool = True


@dataclass(frozen=True)
class Step:
    """An external invocation in the deployment chain."""

    name: str
    sub_steps: tuple[SubStep, ...]
    failure_message: str
    working_directory: Path | None = None
    environment: Mapping[str, str] = field(default_factory=dict)
    stdin: str | None = None

    def command_line(self) -> str:
        """Join the enabled sub-steps into one shell line."""
        return " && ".join(s.command for s in self.sub_steps if s.enabled)


def step(name: str, *commands: str | SubStep, failure_message: str, **kwargs) -> Step:
    """Build a Step from plain command strings and SubSteps."""
    sub_steps = tuple(c if isinstance(c, SubStep) else SubStep(c) for c in commands)
    return Step(name=name, sub_steps=sub_steps, failure_message=failure_message, **kwargs)
