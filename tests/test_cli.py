"""Unit tests for the command-line entry point."""

from __future__ import annotations

from unittest.mock import patch

from squirrel import cli
from squirrel.core.errors import DriverError, WorkflowLoadError
from squirrel.workflow.types import RunResult


def fake_run(result=None, exc=None):
    async def _run(config):
        if exc is not None:
            raise exc
        return result

    return _run


class TestMain:
    def test_success_exit_code(self):
        result = RunResult(workflow_name="w", success=True, steps_executed=1, steps_succeeded=1)
        with patch.object(cli, "run_workflow_file", fake_run(result)):
            assert cli.main(["wf.yaml"]) == cli.EXIT_OK

    def test_failed_workflow_exit_code(self):
        result = RunResult(workflow_name="w", success=False, steps_executed=1, steps_succeeded=0, error="x")
        with patch.object(cli, "run_workflow_file", fake_run(result)):
            assert cli.main(["wf.yaml", "false"]) == cli.EXIT_WORKFLOW_FAILED

    def test_load_error_exit_code(self):
        with patch.object(cli, "run_workflow_file", fake_run(exc=WorkflowLoadError("bad yaml"))):
            assert cli.main(["wf.yaml"]) == cli.EXIT_LOAD_ERROR

    def test_session_error_exit_code(self):
        with patch.object(cli, "run_workflow_file", fake_run(exc=DriverError("no chromium"))):
            assert cli.main(["wf.yaml"]) == cli.EXIT_WORKFLOW_FAILED
