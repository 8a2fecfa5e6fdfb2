"""Selection stack and value log: the mutable state of a workflow run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from squirrel.core.errors import WorkflowDefinitionError

# Opaque element reference owned by the browser driver.
ElementHandle = Any


class SelectionStack:
    """
    Stack of frames, one frame per locate step.

    A frame is a list of element handles; element-level steps always address
    the last element of the top frame.
    """

    def __init__(self) -> None:
        self._frames: list[list[ElementHandle]] = []

    def __len__(self) -> int:
        return len(self._frames)

    def is_empty(self) -> bool:
        return not self._frames

    def push_frame(self, elements: list[ElementHandle]) -> None:
        self._frames.append(list(elements))

    def pop_frame(self) -> list[ElementHandle]:
        if not self._frames:
            raise WorkflowDefinitionError("No element selection to remove: run PageLocateElements first")
        return self._frames.pop()

    def top_frame_len(self) -> int:
        return len(self._top())

    def pop_last_from_top(self) -> ElementHandle | None:
        """Remove and return the current element, or None if the top frame is drained."""
        frame = self._top()
        if not frame:
            return None
        return frame.pop()

    def peek_last_of_top(self) -> ElementHandle:
        frame = self._top()
        if not frame:
            raise WorkflowDefinitionError("The current element selection is empty")
        return frame[-1]

    def _top(self) -> list[ElementHandle]:
        if not self._frames:
            raise WorkflowDefinitionError("No element is selected: run PageLocateElements first")
        return self._frames[-1]


@dataclass(frozen=True)
class ValueEntry:
    label: str
    value: str

    def render(self) -> str:
        return f"{self.label}::{self.value}"


class ValueLog:
    """Append-only record of extracted values, in extraction order."""

    def __init__(self) -> None:
        self._entries: list[ValueEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ValueEntry]:
        return iter(self._entries)

    def append(self, label: str, value: str) -> ValueEntry:
        entry = ValueEntry(label=label, value=value)
        self._entries.append(entry)
        return entry

    def rendered(self) -> list[str]:
        return [e.render() for e in self._entries]
