from squirrel.core.config import Config
from squirrel.core.errors import (
    ArtifactError,
    DriverError,
    SquirrelError,
    StepFailure,
    WorkflowDefinitionError,
    WorkflowLoadError,
)
from squirrel.driver.base import BrowserDriver
from squirrel.workflow.engine import StepEngine
from squirrel.workflow.loader import load_workflow, parse_workflow
from squirrel.workflow.runner import WorkflowRunner, run_workflow_file
from squirrel.workflow.types import RunResult, StepResult, Workflow, WorkflowStep

__all__ = [
    "ArtifactError",
    "BrowserDriver",
    "Config",
    "DriverError",
    "RunResult",
    "SquirrelError",
    "StepEngine",
    "StepFailure",
    "StepResult",
    "Workflow",
    "WorkflowDefinitionError",
    "WorkflowLoadError",
    "WorkflowRunner",
    "WorkflowStep",
    "load_workflow",
    "parse_workflow",
    "run_workflow_file",
]
