"""Helper configuration loaded from VSCODE_MCP_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORAGE_DIR = Path("~/.config/Code/User/workspaceStorage")

DEFAULT_PROJECT_GLOBS = [
    "~/projects/*/*/{name}",
    "~/projects/*/{name}",
    "~/{name}",
]


class HelperSettings(BaseSettings):
    """vscode-helper settings.

    All fields are read from environment variables with the ``VSCODE_MCP_``
    prefix.  For example, ``VSCODE_MCP_DEBUG=true`` maps to ``debug`` and
    ``VSCODE_MCP_PROBE_TIMEOUT=1.5`` maps to ``probe_timeout``.
    """

    model_config = SettingsConfigDict(
        env_prefix="VSCODE_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    debug: bool = False
    """Shortcut for ``log_level=DEBUG``."""

    log_level: str = "WARNING"
    """Stdout carries command output, so only warnings reach stderr by default."""

    # -- Editor ----------------------------------------------------------------
    code_command: str = "code"
    product_name: str = "Visual Studio Code"
    """Trailing fragment of every editor window title."""

    storage_dir: Path = DEFAULT_STORAGE_DIR
    """Directory holding one ``<hash>/workspace.json`` per remembered folder."""

    # -- Workspace detection ---------------------------------------------------
    probe_timeout: float = 3.0
    """Seconds allowed for each external probe (wmctrl, ``code --status``)."""

    cache_ttl: float = 5.0
    recent_limit: int = 3
    """Number of newest recent-store entries consulted by the selector."""

    project_globs: list[str] = Field(default_factory=lambda: list(DEFAULT_PROJECT_GLOBS))
    """Patterns probed when a status-dump name has no recent-store match.

    ``{name}`` is replaced by the (glob-escaped) workspace name.
    """

    # -- Helpers ---------------------------------------------------------------

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()

    @property
    def resolved_storage_dir(self) -> Path:
        return self.storage_dir.expanduser()


def get_settings() -> HelperSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> HelperSettings:
    return HelperSettings()


