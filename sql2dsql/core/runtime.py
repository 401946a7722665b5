"""
Runtime context and configuration for sql2dsql.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from sql2dsql.core import paths
from sql2dsql.core.session import EditorSession, SessionStore
from sql2dsql.core.settings import load_settings, save_settings, Settings
from sql2dsql.core.translator import TranslationClient

BACKEND_URL_ENV = "SQL2DSQL_BACKEND_URL"


@dataclass
class Runtime:
    """Everything the CLI and the web UI share for one process."""
    settings_dir: Path
    settings: Settings
    client: TranslationClient
    sessions: SessionStore
    logger: logging.Logger

    def ensure_dirs(self) -> None:
        """Ensure all directories needed by the program exist."""
        self.settings_dir.mkdir(parents=True, exist_ok=True)

    # --- Session management ---

    def create_session(self) -> EditorSession:
        """Start a new editor session."""
        return self.sessions.create()

    def get_session(self, session_id: str) -> EditorSession:
        """Load an existing editor session by its ID. Raises KeyError."""
        return self.sessions.get(session_id)

    def get_or_create_session(self, session_id: str | None) -> EditorSession:
        """Load the session for `session_id`, starting a new one if needed."""
        return self.sessions.get_or_create(session_id)

    # --- Settings management ---

    def save_settings(self) -> Path:
        """Persist current settings and rebuild the client to match them."""
        path = save_settings(self.settings_dir, self.settings)
        self.reload_client()
        self.logger.info("Saved settings to %s", path)
        return path

    def reload_client(self) -> None:
        """Replace the translation client after a settings change."""
        self.client.close()
        self.client = TranslationClient.from_settings(self.settings)
        self.sessions.default_source = self.settings.default_source
        self.sessions.status_reset_seconds = self.settings.status_reset_seconds

# --- Runtime management ---

def build_runtime(
    *,
    settings_dir: Path | None = None,
    backend_url: str | None = None,
    verbose: bool = False,
) -> Runtime:
    """Builds and returns a Runtime object for sql2dsql."""
    # 1. Logging
    logger = logging.getLogger("sql2dsql")
    if not logging.getLogger().hasHandlers():
        # don't override uvicorn logging if it's already set up
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    # 2. Settings, CLI option > environment > settings file > default
    if settings_dir is None:
        settings_dir = paths.default_settings_dir()
    settings = load_settings(settings_dir)
    if backend_url:
        settings.backend_url = backend_url
    elif env := os.getenv(BACKEND_URL_ENV):
        settings.backend_url = env
    logger.debug("Using translation backend %s", settings.backend_url)
    # 3. Create context
    rt = Runtime(
        settings_dir=settings_dir,
        settings=settings,
        client=TranslationClient.from_settings(settings),
        sessions=SessionStore(
            default_source=settings.default_source,
            status_reset_seconds=settings.status_reset_seconds,
        ),
        logger=logger,
    )
    rt.ensure_dirs()
    return rt
