"""Error taxonomy shared by the engine, the driver adapter and the loader."""

from __future__ import annotations


class SquirrelError(Exception):
    """Base class for every failure a workflow run can report."""


class DriverError(SquirrelError):
    """A browser-driver call failed (connection, navigation, interaction)."""


class StepFailure(SquirrelError):
    """A step ran but its outcome was not the expected one."""


class ArtifactError(SquirrelError):
    """An artifact (screenshot) could not be written to disk."""


class WorkflowDefinitionError(SquirrelError):
    """
    The step sequence is invalid for the current page state.

    Raised for an empty selection stack, a missing required attribute, or an
    element loop that exceeded its configured iteration limit. Never swallowed
    by ``PageLoop``.
    """


class WorkflowLoadError(SquirrelError):
    """The workflow definition could not be read or parsed."""


# Failures that ``PageLoop`` reinterprets as its exit signal.
RECOVERABLE_ERRORS = (DriverError, StepFailure, ArtifactError)
