"""Runs a whole workflow: top-level steps in order, stopping at the first failure."""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from squirrel.core.config import Config
from squirrel.core.errors import SquirrelError
from squirrel.core.utils import ArtifactWriter, Clock, timestamp
from squirrel.driver.base import BrowserDriver
from squirrel.driver.playwright_driver import open_driver
from squirrel.workflow.context import ExecutionContext
from squirrel.workflow.engine import StepEngine
from squirrel.workflow.loader import load_workflow
from squirrel.workflow.types import RunResult, StepResult, Workflow

logger = logging.getLogger(__name__)


class WorkflowRunner:
    """Executes a parsed Workflow against a live browser driver."""

    def __init__(
        self,
        driver: BrowserDriver,
        config: Config,
        *,
        engine: StepEngine | None = None,
        clock: Clock | None = None,
        writer: ArtifactWriter | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        if engine is not None and sleep is not None:
            raise ValueError("Pass either engine or sleep, not both")
        self._driver = driver
        self._config = config
        self._engine = engine or StepEngine(sleep=sleep)
        self._clock = clock
        self._writer = writer

    def new_context(self, workflow: Workflow) -> ExecutionContext:
        ctx = ExecutionContext(driver=self._driver, config=self._config, workflow_name=workflow.name)
        if self._clock is not None:
            ctx.clock = self._clock
        if self._writer is not None:
            ctx.writer = self._writer
        return ctx

    async def run(self, workflow: Workflow) -> RunResult:
        """
        Execute every top-level step of ``workflow``.

        The first failure that no step absorbed stops the run; remaining
        steps are skipped. Returns a RunResult with step-level detail.
        """
        ctx = self.new_context(workflow)
        step_results: list[StepResult] = []
        total_start = time.monotonic()
        error: str | None = None

        for index, step in enumerate(workflow.steps):
            logger.info("Step %d: %s (timestamp=%s)", index, step.describe(), timestamp())
            step_start = time.monotonic()
            try:
                await self._engine.execute(step, ctx)
            except SquirrelError as exc:
                latency = (time.monotonic() - step_start) * 1000
                error = f"{type(exc).__name__}: {exc}"
                step_results.append(
                    StepResult(
                        step_index=index,
                        success=False,
                        step=step.describe(),
                        error=error,
                        latency_ms=latency,
                    )
                )
                logger.error("Workflow failed with: %s", error)
                break
            latency = (time.monotonic() - step_start) * 1000
            step_results.append(
                StepResult(step_index=index, success=True, step=step.describe(), latency_ms=latency)
            )

        succeeded = sum(1 for r in step_results if r.success)
        return RunResult(
            workflow_name=workflow.name,
            success=error is None,
            steps_executed=len(step_results),
            steps_succeeded=succeeded,
            step_results=step_results,
            error=error,
            total_latency_ms=(time.monotonic() - total_start) * 1000,
            values=ctx.values.rendered(),
        )


async def run_workflow_file(config: Config) -> RunResult:
    """Load ``config.workflow_file_path`` and run it in a fresh browser session."""
    workflow = load_workflow(config.workflow_file_path)
    logger.info("Loaded workflow %r with %d steps", workflow.name, len(workflow.steps))
    async with open_driver(config) as driver:
        return await WorkflowRunner(driver, config).run(workflow)
