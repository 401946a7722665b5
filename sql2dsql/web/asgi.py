"""
sql2dsql ASGI app factory for development with uvicorn set to auto-reload.
"""
import os
from pathlib import Path
from fastapi import FastAPI

from sql2dsql.core.runtime import build_runtime
from sql2dsql.web.api import create_app

SETTINGS_DIR_ENV = "SQL2DSQL_SETTINGS_DIR"

def create_app_factory() -> FastAPI:
    """Create a FastAPI app factory for development with auto-reload."""
    settings_dir = os.environ.get(SETTINGS_DIR_ENV)
    rt = build_runtime(
        settings_dir=Path(settings_dir).resolve() if settings_dir else None,
        verbose=True,
    )
    return create_app(rt)
