"""Per-run execution state threaded through the engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from squirrel.core.config import TAB_SIZE, Config
from squirrel.core.utils import ArtifactWriter, Clock
from squirrel.driver.base import BrowserDriver
from squirrel.workflow.selection import SelectionStack, ValueLog


@dataclass
class ExecutionContext:
    """
    Everything a workflow run mutates. Created once per run and passed by
    reference through every recursive ``execute`` call; never shared between
    runs.
    """

    driver: BrowserDriver
    config: Config
    workflow_name: str
    selection: SelectionStack = field(default_factory=SelectionStack)
    values: ValueLog = field(default_factory=ValueLog)
    clock: Clock = field(default_factory=Clock)
    writer: ArtifactWriter = field(default_factory=ArtifactWriter)
    depth: int = 0  # current nesting, for log indentation only
    steps_dispatched: int = 0  # every execute() call, nested ones included

    @property
    def indent(self) -> str:
        return " " * (self.depth * TAB_SIZE)
