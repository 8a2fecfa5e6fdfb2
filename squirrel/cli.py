"""Command-line entry point: ``squirrel workflow.yaml [true|false] [options]``."""

from __future__ import annotations

import asyncio
import logging
import sys

from squirrel.core.config import Config, parse_args
from squirrel.core.errors import DriverError, WorkflowLoadError
from squirrel.workflow.runner import run_workflow_file

logger = logging.getLogger("squirrel")

EXIT_OK = 0
EXIT_WORKFLOW_FAILED = 1
EXIT_LOAD_ERROR = 2


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main(argv: list[str] | None = None) -> int:
    config = parse_args(argv)
    configure_logging(config)
    logger.info("Squirrel executing with configuration: %s", config)
    try:
        result = asyncio.run(run_workflow_file(config))
    except WorkflowLoadError as exc:
        logger.error("Could not load workflow: %s", exc)
        return EXIT_LOAD_ERROR
    except DriverError as exc:
        logger.error("Browser session failed: %s", exc)
        return EXIT_WORKFLOW_FAILED

    logger.info(
        "Workflow %r finished: %d/%d steps succeeded in %.0fms",
        result.workflow_name,
        result.steps_succeeded,
        result.steps_executed,
        result.total_latency_ms,
    )
    return EXIT_OK if result.success else EXIT_WORKFLOW_FAILED


if __name__ == "__main__":
    sys.exit(main())
