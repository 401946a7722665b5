"""
Utility functions for serving the sql2dsql web application.
"""
import os
import socket

import uvicorn

from sql2dsql.core.runtime import BACKEND_URL_ENV, Runtime
from sql2dsql.web.api import create_app
from sql2dsql.web.asgi import SETTINGS_DIR_ENV

def pick_free_port(host: str, port: int | None) -> int:
    """Find a free port on localhost."""
    if port is not None:
        return port
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))  # 0 = let OS choose
        return int(s.getsockname()[1])

def make_url(host: str, port: int) -> str:
    """Construct a URL string from host and port."""
    return f"http://{host}:{port}"

def run_ui(rt: Runtime, host: str = "127.0.0.1", port: int | None = None) -> None:
    """Launch the sql2dsql web service."""
    app = create_app(rt)
    port = pick_free_port(host, port)
    url = make_url(host, port)
    rt.logger.info("Starting sql2dsql UI at %s (backend: %s)", url, rt.settings.backend_url)
    uvicorn.run(app, host=host, port=port, log_level="info")

def run_ui_reload(rt: Runtime, host: str = "127.0.0.1", port=8080) -> None:
    """Launch the sql2dsql web service with auto-reload for development."""
    # the reloader imports the app fresh, so hand over the runtime's config
    os.environ[SETTINGS_DIR_ENV] = str(rt.settings_dir)
    os.environ[BACKEND_URL_ENV] = rt.settings.backend_url
    url = make_url(host, port)
    rt.logger.info("Starting sql2dsql UI (with reload) at %s", url)
    uvicorn.run("sql2dsql.web.asgi:create_app_factory", factory=True, host=host, port=port, log_level="info", reload=True)
