"""Top-level menu shown before entering the database browser."""

from __future__ import annotations

import enum


class MenuItem(str, enum.Enum):
    BROWSE_DATABASE = "Browse database"
    GAE = "Graph Analytics Engine (GAE)"
    OPTIONS = "Options"
    QUIT = "Quit"


class MainMenu:
    def __init__(self) -> None:
        self.items: list[MenuItem] = list(MenuItem)
        self.selected = 0

    def down(self) -> None:
        self.selected = (self.selected + 1) % len(self.items)

    def up(self) -> None:
        self.selected = len(self.items) - 1 if self.selected == 0 else self.selected - 1

    @property
    def current(self) -> MenuItem:
        return self.items[self.selected]
