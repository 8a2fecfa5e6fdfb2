from __future__ import annotations

import pytest

from squirrel.core.config import Config
from squirrel.workflow.context import ExecutionContext
from squirrel.workflow.engine import StepEngine


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        workflow_file_path=str(tmp_path / "workflow.yaml"),
        headless_browser=False,
        temp_dir=str(tmp_path / "artifacts"),
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def engine(sleep) -> StepEngine:
    return StepEngine(sleep=sleep)


@pytest.fixture
def make_context(config):
    def _make(driver, name: str = "wf", **overrides) -> ExecutionContext:
        for key, value in overrides.items():
            setattr(config, key, value)
        return ExecutionContext(driver=driver, config=config, workflow_name=name)

    return _make
