"""Explicit back-navigation history for cross-view jumps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from arangotui.browser.views import ViewState


@dataclass(frozen=True)
class NavigationEntry:
    view: ViewState
    index: int


class NavigationStack:
    """Last-in-first-out list of suspended ``(view, selection index)`` pairs.

    Needed because the collection list can be reached both from the database
    list and from a graph's edge definition, and "back" must return to
    whichever one the user actually came from.
    """

    def __init__(self) -> None:
        self._entries: list[NavigationEntry] = []

    def push(self, view: ViewState, index: int) -> NavigationEntry:
        entry = NavigationEntry(view, index)
        self._entries.append(entry)
        return entry

    def peek(self) -> Optional[NavigationEntry]:
        return self._entries[-1] if self._entries else None

    def pop(self) -> Optional[NavigationEntry]:
        return self._entries.pop() if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[NavigationEntry]:
        return iter(self._entries)
