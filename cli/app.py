"""Textual host for the main menu and the database browser.

The app owns no browser state of its own: it forwards each key to the
:class:`BrowserController` (or the main menu) and redraws the body from a
fresh snapshot afterwards.  Key handlers await the controller, so a key that
triggers a fetch holds back the next one until the fetch settles.
"""

from __future__ import annotations

from typing import Optional

import structlog
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.events import Key, Resize
from textual.widgets import Static

from arangotui.browser.controller import BrowserController
from arangotui.browser.menu import MainMenu, MenuItem
from arangotui.config import ServerConfig
from arangotui.gateway.models import GaeVersion, ServerVersion
from cli.rendering import render_browser, render_header, render_menu

logger = structlog.get_logger(__name__)


class ArangoTuiApp(App[None]):
    ENABLE_COMMAND_PALETTE = False
    CSS = """
    #header {
        height: auto;
    }
    #body {
        height: 1fr;
    }
    """
    BINDINGS = [
        Binding("ctrl+c", "quit", show=False),
    ]

    def __init__(
        self,
        server: ServerConfig,
        server_version: ServerVersion,
        gae_version: Optional[GaeVersion] = None,
    ) -> None:
        super().__init__()
        self._server = server
        self._server_version = server_version
        self._gae_version = gae_version
        self.menu = MainMenu()
        self.browser: Optional[BrowserController] = None

    def compose(self) -> ComposeResult:
        yield Static(id="header")
        yield Static(id="body")

    def on_mount(self) -> None:
        self.query_one("#header", Static).update(
            render_header(self._server_version, self._gae_version)
        )
        self._redraw()

    def on_resize(self, event: Resize) -> None:
        # the body is resized after this event; list windows follow its height
        self.call_after_refresh(self._redraw)

    async def on_key(self, event: Key) -> None:
        event.stop()
        if self.browser is None:
            await self._on_menu_key(event.key)
        else:
            await self.browser.handle_key(event.key)
            if self.browser.closed:
                self.browser = None
        self._redraw()

    async def _on_menu_key(self, key: str) -> None:
        if key in ("q", "escape"):
            self.exit()
        elif key in ("down", "j"):
            self.menu.down()
        elif key in ("up", "k"):
            self.menu.up()
        elif key == "enter":
            item = self.menu.current
            if item is MenuItem.QUIT:
                self.exit()
            elif item is MenuItem.BROWSE_DATABASE:
                logger.info("browser_opened", endpoint=self._server.base_url)
                browser = BrowserController(self._server)
                await browser.start()
                self.browser = browser
            else:
                self.notify(f"{item.value} is not available yet.")

    def _redraw(self) -> None:
        body = self.query_one("#body", Static)
        if self.browser is None:
            body.update(render_menu(self.menu))
        else:
            height = body.size.height or None
            body.update(render_browser(self.browser.snapshot(), height))
