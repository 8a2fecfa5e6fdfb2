from squirrel.core.config import Config, launch_args, parse_args
from squirrel.core.errors import (
    ArtifactError,
    DriverError,
    SquirrelError,
    StepFailure,
    WorkflowDefinitionError,
    WorkflowLoadError,
)
from squirrel.core.utils import ArtifactWriter, Clock, timestamp, write_file

__all__ = [
    "ArtifactError",
    "ArtifactWriter",
    "Clock",
    "Config",
    "DriverError",
    "SquirrelError",
    "StepFailure",
    "WorkflowDefinitionError",
    "WorkflowLoadError",
    "launch_args",
    "parse_args",
    "timestamp",
    "write_file",
]
