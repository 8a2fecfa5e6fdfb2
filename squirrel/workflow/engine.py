"""Recursive interpreter for the workflow step tree."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable
from urllib.parse import urljoin

from squirrel.core.config import TAB_SIZE
from squirrel.core.errors import (
    RECOVERABLE_ERRORS,
    DriverError,
    StepFailure,
    WorkflowDefinitionError,
)
from squirrel.core.utils import timestamp
from squirrel.workflow.context import ExecutionContext
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
    ScrollMode,
    WorkflowStep,
)

logger = logging.getLogger(__name__)

_SCROLL_TO_BOTTOM = "() => window.scrollTo(0, document.body.scrollHeight)"
_SCROLL_TO_TOP = "() => window.scrollTo(0, 0)"
_SCROLL_BY_PAGES = "(pages) => window.scrollBy(0, pages * window.innerHeight)"

Handler = Callable[[WorkflowStep, ExecutionContext], Awaitable[None]]


class StepEngine:
    """
    Executes one step, recursing into composite steps.

    A step succeeds by returning and fails by raising a ``SquirrelError``.
    Only two failures are absorbed here: any recoverable failure inside a
    ``PageLoop`` body (it ends the loop) and a driver error while taking an
    element screenshot.
    """

    def __init__(self, sleep: Callable[[float], Awaitable[None]] | None = None) -> None:
        self._sleep = sleep or asyncio.sleep
        self._handlers: dict[type[WorkflowStep], Handler] = {
            PageOpen: self._page_open,
            PageBack: self._page_back,
            PageRefresh: self._page_refresh,
            PageSwitchBackWindow: self._page_switch_back_window,
            PageLocateElements: self._page_locate_elements,
            PageScroll: self._page_scroll,
            PageTakeScreenshot: self._page_take_screenshot,
            PageWait: self._page_wait,
            PageLoop: self._page_loop,
            ElementsLoopThrough: self._elements_loop_through,
            ElementClick: self._element_click,
            ElementClickOpenNewWindow: self._element_click_open_new_window,
            ElementSendKeys: self._element_send_keys,
            ElementSaveHtmlValue: self._element_save_html_value,
            ElementTakeScreenshot: self._element_take_screenshot,
            ElementPop: self._element_pop,
            PrintCurrentValues: self._print_current_values,
        }

    def supports(self, step_type: type[WorkflowStep]) -> bool:
        return step_type in self._handlers

    async def execute(self, step: WorkflowStep, ctx: ExecutionContext) -> None:
        handler = self._handlers.get(type(step))
        if handler is None:
            raise WorkflowDefinitionError(f"Unsupported step: {step.describe()}")
        ctx.steps_dispatched += 1
        ctx.depth += 1
        try:
            await handler(step, ctx)
        finally:
            ctx.depth -= 1

    async def _run_children(self, children: tuple[WorkflowStep, ...], ctx: ExecutionContext) -> None:
        for index, child in enumerate(children):
            logger.info(
                "%sSubStep %d: %s (timestamp=%s)",
                ctx.indent + " " * TAB_SIZE, index, child.describe(), timestamp(),
            )
            await self.execute(child, ctx)

    # ------------------------------------------------------------------
    # Page-level steps
    # ------------------------------------------------------------------

    async def _page_open(self, step: PageOpen, ctx: ExecutionContext) -> None:
        if ctx.config.window_size is not None:
            await ctx.driver.set_window_size(*ctx.config.window_size)
        await ctx.driver.goto(step.url)

    async def _page_back(self, step: PageBack, ctx: ExecutionContext) -> None:
        await ctx.driver.back()

    async def _page_refresh(self, step: PageRefresh, ctx: ExecutionContext) -> None:
        await ctx.driver.refresh()

    async def _page_switch_back_window(self, step: PageSwitchBackWindow, ctx: ExecutionContext) -> None:
        await ctx.driver.close_current_window()
        handles = await ctx.driver.list_window_handles()
        if not handles:
            raise WorkflowDefinitionError("No window left to switch back to")
        await ctx.driver.switch_to_window(handles[-1])

    async def _page_locate_elements(self, step: PageLocateElements, ctx: ExecutionContext) -> None:
        elements = await ctx.driver.find_all(step.css)
        if step.mode == LocateMode.ALL:
            ctx.selection.push_frame(elements)
        elif step.mode == LocateMode.INDEX:
            # An empty result is the signal a surrounding PageLoop stops on
            if not elements:
                raise StepFailure(f"Element not found: {step.css!r}")
            if step.index >= len(elements):
                raise StepFailure(
                    f"Element not found: {step.css!r} has {len(elements)} matches, "
                    f"index {step.index} requested"
                )
            ctx.selection.push_frame([elements[step.index]])
        else:
            logger.warning("%sIncorrect arguments! Unknown locate mode %r", ctx.indent, step.mode)
            return
        logger.info("%sCurrent Element Size: %d", ctx.indent, ctx.selection.top_frame_len())

    async def _page_scroll(self, step: PageScroll, ctx: ExecutionContext) -> None:
        if step.mode == ScrollMode.FULL and step.size == 1.0:
            await ctx.driver.execute_script(_SCROLL_TO_BOTTOM)
        elif step.mode == ScrollMode.FULL and step.size == -1.0:
            await ctx.driver.execute_script(_SCROLL_TO_TOP)
        elif step.mode == ScrollMode.PAGE:
            await ctx.driver.execute_script(_SCROLL_BY_PAGES, step.size)
        else:
            logger.warning(
                "%sIncorrect arguments! Cannot scroll in %r mode by %s", ctx.indent, step.mode, step.size
            )

    async def _page_take_screenshot(self, step: PageTakeScreenshot, ctx: ExecutionContext) -> None:
        data = await ctx.driver.screenshot_page()
        file_name = f"{ctx.workflow_name}_{step.file_prefix}_{ctx.clock.now()}.png"
        path = ctx.writer.write(ctx.config.temp_dir, file_name, data)
        logger.info("%sSaved page screenshot to %s", ctx.indent, path)

    async def _page_wait(self, step: PageWait, ctx: ExecutionContext) -> None:
        duration_ms = float(step.duration_ms)
        if ctx.config.scales_waits:
            duration_ms *= ctx.config.wait_scale_factor
        await self._sleep(duration_ms / 1000)

    async def _print_current_values(self, step: PrintCurrentValues, ctx: ExecutionContext) -> None:
        for index, entry in enumerate(ctx.values):
            logger.info("%sValue at index %d: %s", ctx.indent, index, entry.render())

    # ------------------------------------------------------------------
    # Composite steps
    # ------------------------------------------------------------------

    async def _page_loop(self, step: PageLoop, ctx: ExecutionContext) -> None:
        if not step.children:
            logger.warning("%sPageLoop has no sub_steps, skipping", ctx.indent)
            return
        iteration = 0
        while True:
            logger.info("%sLoop No. %d", ctx.indent, iteration)
            iteration += 1
            try:
                await self._run_children(step.children, ctx)
            except RECOVERABLE_ERRORS as exc:
                logger.info("%sEnding the loop due to error: %s", ctx.indent, exc)
                return

    async def _elements_loop_through(self, step: ElementsLoopThrough, ctx: ExecutionContext) -> None:
        limit = ctx.config.element_loop_limit
        iterations = 0
        while ctx.selection.top_frame_len() > 0:
            if limit is not None and iterations >= limit:
                raise WorkflowDefinitionError(
                    f"ElementsLoopThrough exceeded {limit} iterations; "
                    "does its body end with ElementPop?"
                )
            iterations += 1
            logger.info("%sElement index %d:", ctx.indent, ctx.selection.top_frame_len() - 1)
            await self._run_children(step.children, ctx)
        ctx.selection.pop_frame()

    # ------------------------------------------------------------------
    # Element-level steps
    # ------------------------------------------------------------------

    async def _element_click(self, step: ElementClick, ctx: ExecutionContext) -> None:
        element = ctx.selection.peek_last_of_top()
        if step.check_enabled and not await ctx.driver.is_enabled(element):
            raise StepFailure("Element is not enabled")
        url_before = await ctx.driver.current_url()
        await ctx.driver.click(element)
        url_after = await ctx.driver.current_url()
        if step.check_url_changed and url_after == url_before:
            raise StepFailure(f"URL did not change after click: {url_before}")

    async def _element_click_open_new_window(
        self, step: ElementClickOpenNewWindow, ctx: ExecutionContext
    ) -> None:
        element = ctx.selection.peek_last_of_top()
        href = await ctx.driver.attribute(element, "href")
        if not href:
            raise WorkflowDefinitionError("Element has no href attribute to open in a new window")
        url = urljoin(await ctx.driver.current_url(), href)
        width, height = ctx.config.window_size or await ctx.driver.get_window_size()
        window = await ctx.driver.open_new_window(inherit_context=True)
        await ctx.driver.switch_to_window(window)
        await ctx.driver.set_window_size(width, height)
        await ctx.driver.goto(url)

    async def _element_send_keys(self, step: ElementSendKeys, ctx: ExecutionContext) -> None:
        element = ctx.selection.peek_last_of_top()
        await ctx.driver.send_keys(element, step.keys)

    async def _element_save_html_value(self, step: ElementSaveHtmlValue, ctx: ExecutionContext) -> None:
        element = ctx.selection.peek_last_of_top()
        html = await ctx.driver.html(element, step.is_inner)
        ctx.values.append(step.label, html)

    async def _element_take_screenshot(self, step: ElementTakeScreenshot, ctx: ExecutionContext) -> None:
        element = ctx.selection.peek_last_of_top()
        remaining = ctx.selection.top_frame_len() - 1
        try:
            data = await ctx.driver.screenshot(element)
        except DriverError as exc:
            # Zero-sized elements cannot be captured
            logger.warning("%sIgnoring the error: %s", ctx.indent, exc)
            return
        file_name = f"{step.file_prefix}_{ctx.clock.now()}_{remaining}.png"
        ctx.writer.write(ctx.config.temp_dir, file_name, data)

    async def _element_pop(self, step: ElementPop, ctx: ExecutionContext) -> None:
        if ctx.selection.pop_last_from_top() is None:
            logger.info("%sEnd of loop!", ctx.indent)
