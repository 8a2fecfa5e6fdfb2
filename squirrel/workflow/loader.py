"""
Load workflow definitions from YAML.

Steps are written as YAML tags carrying their arguments::

    name: "sample workflow"
    steps:
      - !PageOpen "https://www.wikipedia.org/"
      - !PageLocateElements ["body div", "all", 0]
      - !ElementsLoopThrough
        - !ElementSaveHtmlValue ["title", true]
        - !ElementPop
      - !PrintCurrentValues
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from squirrel.core.errors import WorkflowLoadError
from squirrel.workflow.types import (
    ElementClick,
    ElementClickOpenNewWindow,
    ElementPop,
    ElementSaveHtmlValue,
    ElementSendKeys,
    ElementsLoopThrough,
    ElementTakeScreenshot,
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
    StepKind,
    Workflow,
    WorkflowStep,
)

_DEFAULT_HTML_LABEL = "html"


class _TaggedNode:
    """A YAML node tagged with a step name, resolved after parsing."""

    def __init__(self, tag: str, value: Any, mark: Any) -> None:
        self.tag = tag
        self.value = value
        self.mark = mark


class _WorkflowYamlLoader(yaml.SafeLoader):
    pass


def _construct_tagged(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> _TaggedNode:
    if isinstance(node, yaml.ScalarNode):
        if node.style:
            value = loader.construct_scalar(node)
        else:
            # Resolve plain scalars as if untagged: ints, bools, and null for bare tags
            tag = loader.resolve(yaml.ScalarNode, node.value, (True, False))
            value = loader.construct_object(
                yaml.ScalarNode(tag, node.value, node.start_mark, node.end_mark)
            )
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)
    return _TaggedNode(tag_suffix, value, node.start_mark)


_WorkflowYamlLoader.add_multi_constructor("!", _construct_tagged)


def _fail(node: _TaggedNode, message: str) -> WorkflowLoadError:
    where = f" (line {node.mark.line + 1})" if node.mark is not None else ""
    return WorkflowLoadError(f"!{node.tag}{where}: {message}")


def _args(node: _TaggedNode, count: int) -> list[Any]:
    if not isinstance(node.value, list) or len(node.value) != count:
        raise _fail(node, f"expected a list of {count} arguments, got {node.value!r}")
    return node.value


def _string(node: _TaggedNode, value: Any) -> str:
    if not isinstance(value, str):
        raise _fail(node, f"expected a string, got {value!r}")
    return value


def _bool(node: _TaggedNode, value: Any) -> bool:
    if not isinstance(value, bool):
        raise _fail(node, f"expected true/false, got {value!r}")
    return value


def _number(node: _TaggedNode, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _fail(node, f"expected a number, got {value!r}")
    return float(value)


def _no_args(node: _TaggedNode) -> None:
    if node.value is not None:
        raise _fail(node, f"takes no arguments, got {node.value!r}")


def _children(node: _TaggedNode) -> tuple[WorkflowStep, ...]:
    if not isinstance(node.value, list):
        raise _fail(node, "expected a list of sub-steps")
    return tuple(_build_step(child) for child in node.value)


def _build_step(node: Any) -> WorkflowStep:
    if not isinstance(node, _TaggedNode):
        raise WorkflowLoadError(f"Each step must be a tagged node like !PageOpen, got {node!r}")
    try:
        kind = StepKind(node.tag)
    except ValueError:
        raise _fail(node, "unknown step") from None

    if kind is StepKind.PAGE_OPEN:
        return PageOpen(url=_string(node, node.value))
    if kind is StepKind.PAGE_BACK:
        _no_args(node)
        return PageBack()
    if kind is StepKind.PAGE_REFRESH:
        _no_args(node)
        return PageRefresh()
    if kind is StepKind.PAGE_SWITCH_BACK_WINDOW:
        _no_args(node)
        return PageSwitchBackWindow()
    if kind is StepKind.PAGE_LOCATE_ELEMENTS:
        css, mode, index = _args(node, 3)
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise _fail(node, f"index must be a non-negative integer, got {index!r}")
        return PageLocateElements(css=_string(node, css), mode=_string(node, mode), index=index)
    if kind is StepKind.PAGE_SCROLL:
        mode, size = _args(node, 2)
        return PageScroll(mode=_string(node, mode), size=_number(node, size))
    if kind is StepKind.PAGE_TAKE_SCREENSHOT:
        return PageTakeScreenshot(file_prefix=_string(node, node.value))
    if kind is StepKind.PAGE_WAIT:
        duration = node.value
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
            raise _fail(node, f"duration must be a non-negative number of ms, got {duration!r}")
        return PageWait(duration_ms=duration)
    if kind is StepKind.PAGE_LOOP:
        return PageLoop(children=_children(node))
    if kind is StepKind.ELEMENTS_LOOP_THROUGH:
        return ElementsLoopThrough(children=_children(node))
    if kind is StepKind.ELEMENT_CLICK:
        if node.value is None:
            return ElementClick()
        check_enabled, check_url_changed = _args(node, 2)
        return ElementClick(
            check_enabled=_bool(node, check_enabled),
            check_url_changed=_bool(node, check_url_changed),
        )
    if kind is StepKind.ELEMENT_CLICK_OPEN_NEW_WINDOW:
        _no_args(node)
        return ElementClickOpenNewWindow()
    if kind is StepKind.ELEMENT_SEND_KEYS:
        return ElementSendKeys(keys=_string(node, node.value))
    if kind is StepKind.ELEMENT_SAVE_HTML_VALUE:
        if isinstance(node.value, bool):
            return ElementSaveHtmlValue(label=_DEFAULT_HTML_LABEL, is_inner=node.value)
        label, is_inner = _args(node, 2)
        return ElementSaveHtmlValue(label=_string(node, label), is_inner=_bool(node, is_inner))
    if kind is StepKind.ELEMENT_TAKE_SCREENSHOT:
        return ElementTakeScreenshot(file_prefix=_string(node, node.value))
    if kind is StepKind.ELEMENT_POP:
        _no_args(node)
        return ElementPop()
    if kind is StepKind.PRINT_CURRENT_VALUES:
        _no_args(node)
        return PrintCurrentValues()
    raise _fail(node, "unknown step")


def parse_workflow(text: str) -> Workflow:
    """Parse a YAML workflow document into an immutable step tree."""
    try:
        data = yaml.load(text, Loader=_WorkflowYamlLoader)
    except yaml.YAMLError as exc:
        raise WorkflowLoadError(f"Invalid workflow YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkflowLoadError("Workflow must be a mapping with 'name' and 'steps'")
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise WorkflowLoadError("Workflow 'name' must be a non-empty string")
    steps = data.get("steps")
    if not isinstance(steps, list):
        raise WorkflowLoadError("Workflow 'steps' must be a list")

    return Workflow(name=name, steps=tuple(_build_step(s) for s in steps))


def load_workflow(path: str) -> Workflow:
    """Read and parse the workflow file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise WorkflowLoadError(f"Cannot read workflow file {path!r}: {exc}") from exc
    return parse_workflow(text)
