"""Workflow step tree and run result types."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class StepKind(str, Enum):
    PAGE_OPEN = "PageOpen"
    PAGE_BACK = "PageBack"
    PAGE_REFRESH = "PageRefresh"
    PAGE_SWITCH_BACK_WINDOW = "PageSwitchBackWindow"
    PAGE_LOCATE_ELEMENTS = "PageLocateElements"
    PAGE_SCROLL = "PageScroll"
    PAGE_TAKE_SCREENSHOT = "PageTakeScreenshot"
    PAGE_WAIT = "PageWait"
    PAGE_LOOP = "PageLoop"
    ELEMENTS_LOOP_THROUGH = "ElementsLoopThrough"
    ELEMENT_CLICK = "ElementClick"
    ELEMENT_CLICK_OPEN_NEW_WINDOW = "ElementClickOpenNewWindow"
    ELEMENT_SEND_KEYS = "ElementSendKeys"
    ELEMENT_SAVE_HTML_VALUE = "ElementSaveHtmlValue"
    ELEMENT_TAKE_SCREENSHOT = "ElementTakeScreenshot"
    ELEMENT_POP = "ElementPop"
    PRINT_CURRENT_VALUES = "PrintCurrentValues"


class LocateMode(str, Enum):
    ALL = "all"
    INDEX = "index"


class ScrollMode(str, Enum):
    FULL = "full"
    PAGE = "page"


@dataclass(frozen=True)
class WorkflowStep:
    """Base of the closed set of step variants. Instances are immutable."""

    kind: ClassVar[StepKind]

    def describe(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.name == "children":
                value = [child.to_dict() for child in value]
            elif isinstance(value, Enum):
                value = value.value
            data[f.name] = value
        return data


# ---------------------------------------------------------------------------
# Page-level steps
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageOpen(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.PAGE_OPEN
    url: str

    def describe(self) -> str:
        return f"{self.kind.value} {self.url}"


@dataclass(frozen=True)
class PageBack(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.PAGE_BACK


@dataclass(frozen=True)
class PageRefresh(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.PAGE_REFRESH


@dataclass(frozen=True)
class PageSwitchBackWindow(WorkflowStep):
    """Close the current window and focus the previous one."""

    kind: ClassVar[StepKind] = StepKind.PAGE_SWITCH_BACK_WINDOW


@dataclass(frozen=True)
class PageScroll(WorkflowStep):
    """
    ``full`` mode with size 1.0 scrolls to the bottom, -1.0 to the top;
    ``page`` mode scrolls by ``size`` viewport heights.
    """

    kind: ClassVar[StepKind] = StepKind.PAGE_SCROLL
    mode: str
    size: float

    def describe(self) -> str:
        return f"{self.kind.value} in {self.mode} mode by {self.size} pages"


@dataclass(frozen=True)
class PageTakeScreenshot(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.PAGE_TAKE_SCREENSHOT
    file_prefix: str

    def describe(self) -> str:
        return f"{self.kind.value} with file_prefix={self.file_prefix}"


@dataclass(frozen=True)
class PageWait(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.PAGE_WAIT
    duration_ms: int

    def describe(self) -> str:
        return f"{self.kind.value} for {self.duration_ms}ms"


@dataclass(frozen=True)
class PrintCurrentValues(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.PRINT_CURRENT_VALUES


# ---------------------------------------------------------------------------
# Query step
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageLocateElements(WorkflowStep):
    """
    Find elements by CSS selector and push them as a new selection frame.

    ``all`` mode pushes every match; ``index`` mode pushes only the match at
    ``index`` and fails when nothing matches, which is what lets a
    ``PageLoop`` detect the end of a pagination.
    """

    kind: ClassVar[StepKind] = StepKind.PAGE_LOCATE_ELEMENTS
    css: str
    mode: str = LocateMode.ALL.value
    index: int = 0

    def describe(self) -> str:
        return f"{self.kind.value} by {self.css} css in {self.mode} mode at {self.index} index"


# ---------------------------------------------------------------------------
# Composite steps
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageLoop(WorkflowStep):
    """
    Repeat ``children`` until one of them fails.

    The failure ends the loop and the loop itself succeeds: "click Next until
    there is no Next" is written as a locate in index mode followed by a click.
    """

    kind: ClassVar[StepKind] = StepKind.PAGE_LOOP
    children: tuple[WorkflowStep, ...] = ()

    def describe(self) -> str:
        return f"{self.kind.value} with {len(self.children)} sub_steps"


@dataclass(frozen=True)
class ElementsLoopThrough(WorkflowStep):
    """
    Run ``children`` once per element of the top selection frame.

    The body must remove the current element (``ElementPop``), otherwise the
    loop never ends. Any failure inside the body aborts the run.
    """

    kind: ClassVar[StepKind] = StepKind.ELEMENTS_LOOP_THROUGH
    children: tuple[WorkflowStep, ...] = ()

    def describe(self) -> str:
        return f"{self.kind.value} with {len(self.children)} sub_steps"


# ---------------------------------------------------------------------------
# Element-level steps (address the last element of the top frame)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ElementClick(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.ELEMENT_CLICK
    check_enabled: bool = False
    check_url_changed: bool = False

    def describe(self) -> str:
        return (
            f"{self.kind.value} with check_enabled={self.check_enabled} "
            f"check_url_changed={self.check_url_changed}"
        )


@dataclass(frozen=True)
class ElementClickOpenNewWindow(WorkflowStep):
    """Open the element's ``href`` in a new window and focus it."""

    kind: ClassVar[StepKind] = StepKind.ELEMENT_CLICK_OPEN_NEW_WINDOW


@dataclass(frozen=True)
class ElementSendKeys(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.ELEMENT_SEND_KEYS
    keys: str

    def describe(self) -> str:
        return f"{self.kind.value} with keys={self.keys}"


@dataclass(frozen=True)
class ElementSaveHtmlValue(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.ELEMENT_SAVE_HTML_VALUE
    label: str
    is_inner: bool = True

    def describe(self) -> str:
        return f"{self.kind.value} as {self.label} with inner={self.is_inner}"


@dataclass(frozen=True)
class ElementTakeScreenshot(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.ELEMENT_TAKE_SCREENSHOT
    file_prefix: str

    def describe(self) -> str:
        return f"{self.kind.value} with file_prefix={self.file_prefix}"


@dataclass(frozen=True)
class ElementPop(WorkflowStep):
    kind: ClassVar[StepKind] = StepKind.ELEMENT_POP


STEP_TYPES: dict[StepKind, type[WorkflowStep]] = {
    cls.kind: cls
    for cls in (
        PageOpen,
        PageBack,
        PageRefresh,
        PageSwitchBackWindow,
        PageLocateElements,
        PageScroll,
        PageTakeScreenshot,
        PageWait,
        PageLoop,
        ElementsLoopThrough,
        ElementClick,
        ElementClickOpenNewWindow,
        ElementSendKeys,
        ElementSaveHtmlValue,
        ElementTakeScreenshot,
        ElementPop,
        PrintCurrentValues,
    )
}


@dataclass(frozen=True)
class Workflow:
    name: str
    steps: tuple[WorkflowStep, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "steps": [s.to_dict() for s in self.steps]}


# ---------------------------------------------------------------------------
# Run reporting
# ---------------------------------------------------------------------------


@dataclass
class StepResult:
    step_index: int
    success: bool
    step: str
    error: str | None = None
    latency_ms: float = 0.0


@dataclass
class RunResult:
    workflow_name: str
    success: bool
    steps_executed: int
    steps_succeeded: int
    step_results: list[StepResult] = field(default_factory=list)
    error: str | None = None
    total_latency_ms: float = 0.0
    values: list[str] = field(default_factory=list)  # rendered ValueLog entries
