"""Workflow step tree, execution engine and runner."""

from squirrel.workflow.context import ExecutionContext
from squirrel.workflow.engine import StepEngine
from squirrel.workflow.loader import load_workflow, parse_workflow
from squirrel.workflow.runner import WorkflowRunner, run_workflow_file
from squirrel.workflow.selection import SelectionStack, ValueEntry, ValueLog
from squirrel.workflow.types import (
    ElementClick,
    ElementClickOpenNewWindow,
    ElementPop,
    ElementSaveHtmlValue,
    ElementSendKeys,
    ElementsLoopThrough,
    ElementTakeScreenshot,
    LocateMode,
    PageBack,
    PageLocateElements,
    PageLoop,
    PageOpen,
    PageRefresh,
    PageScroll,
    PageSwitchBackWindow,
    PageTakeScreenshot,
    PageWait,
    PrintCurrentValues,
    RunResult,
    ScrollMode,
    StepKind,
    StepResult,
    Workflow,
    WorkflowStep,
)

__all__ = [
    "ElementClick",
    "ElementClickOpenNewWindow",
    "ElementPop",
    "ElementSaveHtmlValue",
    "ElementSendKeys",
    "ElementTakeScreenshot",
    "ElementsLoopThrough",
    "ExecutionContext",
    "LocateMode",
    "PageBack",
    "PageLocateElements",
    "PageLoop",
    "PageOpen",
    "PageRefresh",
    "PageScroll",
    "PageSwitchBackWindow",
    "PageTakeScreenshot",
    "PageWait",
    "PrintCurrentValues",
    "RunResult",
    "ScrollMode",
    "SelectionStack",
    "StepEngine",
    "StepKind",
    "StepResult",
    "ValueEntry",
    "ValueLog",
    "Workflow",
    "WorkflowRunner",
    "WorkflowStep",
    "load_workflow",
    "parse_workflow",
    "run_workflow_file",
]
