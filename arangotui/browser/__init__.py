"""Browser package — view state machine and its building blocks.

Public re-exports so callers can write::

    from arangotui.browser import BrowserController, MainMenu
"""

from arangotui.browser.controller import BrowserController, BrowserSnapshot
from arangotui.browser.indexer import GraphRow, GraphRowIndex, RowKind
from arangotui.browser.menu import MainMenu, MenuItem
from arangotui.browser.modal import InputModal
from arangotui.browser.navigation import NavigationEntry, NavigationStack

__all__ = [
    "BrowserController",
    "BrowserSnapshot",
    "GraphRow",
    "GraphRowIndex",
    "RowKind",
    "MainMenu",
    "MenuItem",
    "InputModal",
    "NavigationEntry",
    "NavigationStack",
]
