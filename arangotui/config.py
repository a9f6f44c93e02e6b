"""Centralised settings for arangotui.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ServerConfig:
    """Immutable connection parameters handed to every gateway call."""

    endpoint: str
    username: str = "root"
    password: str = ""
    timeout: float = 30.0
    verify_tls: bool = False

    @property
    def base_url(self) -> str:
        return self.endpoint.rstrip("/")

    @property
    def auth(self) -> tuple[str, str]:
        return (self.username, self.password)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Server / credentials
    # ------------------------------------------------------------------
    arango_endpoint: str = field(
        default_factory=lambda: os.environ.get("ARANGO_ENDPOINT", "http://localhost:8529")
    )
    gae_endpoint: str = field(
        default_factory=lambda: os.environ.get("ARANGO_GAE_ENDPOINT", "")
    )
    username: str = field(
        default_factory=lambda: os.environ.get("ARANGO_USERNAME", "root")
    )
    password: str = field(
        default_factory=lambda: os.environ.get("ARANGO_PASSWORD", "")
    )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("ARANGOTUI_REQUEST_TIMEOUT", "30.0"))
    )
    # Self-signed certificates are the norm on dev clusters.
    verify_tls: bool = field(
        default_factory=lambda: _env_flag("ARANGOTUI_VERIFY_TLS", "false")
    )

    # ------------------------------------------------------------------
    # Browser behaviour
    # ------------------------------------------------------------------
    page_size: int = field(
        default_factory=lambda: int(os.environ.get("ARANGOTUI_PAGE_SIZE", "10"))
    )

    # ------------------------------------------------------------------
    # Workspace / logging
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("ARANGOTUI_WORKSPACE", Path.home() / ".arangotui")
        )
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("ARANGOTUI_LOG_LEVEL", "INFO")
    )

    @property
    def log_path(self) -> Path:
        """Absolute path to the log file (the terminal belongs to the UI)."""
        return self.workspace_dir / "arangotui.log"

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)

    def server_config(
        self,
        endpoint: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> ServerConfig:
        """Build the immutable :class:`ServerConfig`, applying CLI overrides."""
        return ServerConfig(
            endpoint=endpoint or self.arango_endpoint,
            username=self.username if username is None else username,
            password=self.password if password is None else password,
            timeout=self.request_timeout,
            verify_tls=self.verify_tls,
        )


# Module-level singleton; import this everywhere:
#   from arangotui.config import settings
settings = Settings()
