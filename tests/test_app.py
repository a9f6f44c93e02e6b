"""Smoke tests for the textual host, driven through textual's pilot."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from arangotui.browser.menu import MenuItem
from arangotui.browser.views import DatabaseList
from arangotui.config import ServerConfig
from arangotui.gateway.models import ServerVersion
from arangotui.models import DatabaseSummary
from cli.app import ArangoTuiApp

SERVER = ServerConfig(endpoint="http://arango.test:8529")
VERSION = ServerVersion(server="arango", license="community", version="3.12.0")


async def test_menu_navigation_and_browser_round_trip() -> None:
    app = ArangoTuiApp(SERVER, VERSION)
    databases = AsyncMock(return_value=[DatabaseSummary(name="shop")])

    with patch("arangotui.gateway.client.load_database_summaries", new=databases):
        async with app.run_test() as pilot:
            await pilot.press("down", "down")
            assert app.menu.current is MenuItem.OPTIONS
            await pilot.press("up", "up")
            assert app.menu.current is MenuItem.BROWSE_DATABASE

            await pilot.press("enter")
            assert app.browser is not None
            assert app.browser.view == DatabaseList()
            assert app.browser.databases[0].name == "shop"

            await pilot.press("q")
            assert app.browser is None

    databases.assert_awaited_once()


async def test_stub_menu_items_stay_on_menu() -> None:
    app = ArangoTuiApp(SERVER, VERSION)

    async with app.run_test() as pilot:
        await pilot.press("down", "enter")
        assert app.browser is None
        assert app.menu.current is MenuItem.GAE
