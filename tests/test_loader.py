"""Unit tests for the YAML workflow loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from squirrel.core.errors import WorkflowLoadError
from squirrel.workflow.loader import load_workflow, parse_workflow
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
)

SAMPLE_WORKFLOW = """
name: "sample workflow"
steps:
    - !PageOpen "https://www.wikipedia.org/"
    - !PageLocateElements
      - "body div"
      - "all"
      - 0
    - !PageLocateElements
      - "body h1 strong"
      - "index"
      - 0
    - !ElementsLoopThrough
      - !ElementSaveHtmlValue true
      - !ElementTakeScreenshot "separate"
      - !ElementPop
      - !PageWait 100
    - !PrintCurrentValues
    - !PageScroll
      - "full"
      - 1.0
    - !PageWait 5000
    - !PageTakeScreenshot "page_stackoverflow_home"
"""

ALL_STEPS = """
name: everything
steps:
  - !PageOpen https://shop.test/
  - !PageBack
  - !PageRefresh
  - !PageLoop
    - !PageLocateElements [".next", "index", 0]
    - !ElementClick [true, true]
  - !PageLocateElements [".item a", "all", 0]
  - !ElementsLoopThrough
    - !ElementClickOpenNewWindow
    - !ElementSaveHtmlValue ["title", false]
    - !PageSwitchBackWindow
    - !ElementSendKeys "hello"
    - !ElementClick
    - !ElementPop
  - !PageScroll ["page", 2]
"""


class TestParseWorkflow:
    def test_sample_workflow(self):
        wf = parse_workflow(SAMPLE_WORKFLOW)
        assert wf.name == "sample workflow"
        assert wf.steps[0] == PageOpen(url="https://www.wikipedia.org/")
        assert wf.steps[1] == PageLocateElements(css="body div", mode="all", index=0)
        assert wf.steps[3] == ElementsLoopThrough(
            children=(
                ElementSaveHtmlValue(label="html", is_inner=True),
                ElementTakeScreenshot(file_prefix="separate"),
                ElementPop(),
                PageWait(duration_ms=100),
            )
        )
        assert wf.steps[4] == PrintCurrentValues()
        assert wf.steps[5] == PageScroll(mode="full", size=1.0)
        assert wf.steps[7] == PageTakeScreenshot(file_prefix="page_stackoverflow_home")

    def test_every_step_kind(self):
        wf = parse_workflow(ALL_STEPS)
        assert wf.steps[:3] == (PageOpen(url="https://shop.test/"), PageBack(), PageRefresh())
        assert wf.steps[3] == PageLoop(
            children=(
                PageLocateElements(css=".next", mode="index", index=0),
                ElementClick(check_enabled=True, check_url_changed=True),
            )
        )
        assert wf.steps[5].children == (
            ElementClickOpenNewWindow(),
            ElementSaveHtmlValue(label="title", is_inner=False),
            PageSwitchBackWindow(),
            ElementSendKeys(keys="hello"),
            ElementClick(check_enabled=False, check_url_changed=False),
            ElementPop(),
        )
        assert wf.steps[6] == PageScroll(mode="page", size=2.0)

    def test_quoted_numbers_stay_strings(self):
        wf = parse_workflow('name: n\nsteps:\n  - !ElementSendKeys "12345"\n')
        assert wf.steps[0] == ElementSendKeys(keys="12345")

    def test_empty_steps_list(self):
        wf = parse_workflow("name: nothing\nsteps: []\n")
        assert wf.steps == ()

    # ------------------------------------------------------------------ invalid documents

    @pytest.mark.parametrize(
        "text",
        [
            "just a string",
            "steps: []",
            "name: ''\nsteps: []",
            "name: n",
            "name: n\nsteps: {a: 1}",
            "name: n\nsteps:\n  - PageBack",
            "name: n\nsteps:\n  - !NoSuchStep 1",
            "name: n\nsteps:\n  - !PageBack 3",
            "name: n\nsteps:\n  - !PageLocateElements ['.a', 'all']",
            "name: n\nsteps:\n  - !PageLocateElements ['.a', 'all', -1]",
            "name: n\nsteps:\n  - !PageWait soon",
            "name: n\nsteps:\n  - !PageScroll ['full', 'far']",
            "name: n\nsteps:\n  - !ElementClick ['yes', true]",
            "name: n\nsteps:\n  - !PageLoop 5",
            "name: n\nsteps: [\n",
        ],
    )
    def test_invalid_documents_raise_load_error(self, text):
        with pytest.raises(WorkflowLoadError):
            parse_workflow(text)

    def test_error_mentions_step_and_line(self):
        with pytest.raises(WorkflowLoadError, match=r"!PageWait \(line 4\)"):
            parse_workflow("name: n\nsteps:\n  - !PageBack\n  - !PageWait -5\n")


class TestLoadWorkflow:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "wf.yaml"
        path.write_text(SAMPLE_WORKFLOW, encoding="utf-8")
        wf = load_workflow(str(path))
        assert len(wf.steps) == 8

    def test_bundled_sample_workflow_loads(self):
        path = Path(__file__).resolve().parent.parent / "workflows" / "sample_workflow.yaml"
        wf = load_workflow(str(path))
        assert wf.name == "sample workflow"
        assert isinstance(wf.steps[3], ElementsLoopThrough)
        assert wf.steps[3].children[0] == ElementSaveHtmlValue(label="heading", is_inner=True)

    def test_missing_file_raises_load_error(self):
        with pytest.raises(WorkflowLoadError, match="Cannot read"):
            load_workflow("/nonexistent/file.yaml")
