"""Abstract browser driver the workflow engine talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

ElementHandle = Any
WindowHandle = Any


class BrowserDriver(ABC):
    """
    One browser session seen as a single focused window.

    Every method may raise ``DriverError``. The engine awaits one call at a
    time; implementations need no locking.
    """

    # Navigation

    @abstractmethod
    async def goto(self, url: str) -> None: ...

    @abstractmethod
    async def back(self) -> None: ...

    @abstractmethod
    async def refresh(self) -> None: ...

    @abstractmethod
    async def current_url(self) -> str: ...

    # Elements

    @abstractmethod
    async def find_all(self, selector: str) -> list[ElementHandle]: ...

    @abstractmethod
    async def click(self, element: ElementHandle) -> None: ...

    @abstractmethod
    async def send_keys(self, element: ElementHandle, text: str) -> None: ...

    @abstractmethod
    async def is_enabled(self, element: ElementHandle) -> bool: ...

    @abstractmethod
    async def attribute(self, element: ElementHandle, name: str) -> str | None: ...

    @abstractmethod
    async def html(self, element: ElementHandle, inner: bool) -> str: ...

    @abstractmethod
    async def screenshot(self, element: ElementHandle) -> bytes: ...

    # Page

    @abstractmethod
    async def screenshot_page(self) -> bytes: ...

    @abstractmethod
    async def execute_script(self, script: str, arg: Any = None) -> Any: ...

    # Windows

    @abstractmethod
    async def get_window_size(self) -> tuple[int, int]: ...

    @abstractmethod
    async def set_window_size(self, width: int, height: int) -> None: ...

    @abstractmethod
    async def open_new_window(self, inherit_context: bool = True) -> WindowHandle: ...

    @abstractmethod
    async def switch_to_window(self, handle: WindowHandle) -> None: ...

    @abstractmethod
    async def close_current_window(self) -> None: ...

    @abstractmethod
    async def list_window_handles(self) -> list[WindowHandle]: ...
