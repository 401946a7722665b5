"""
FastAPI app instructions and entry point for the sql2dsql web UI.
"""
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from sql2dsql.core.runtime import Runtime
from sql2dsql.web.features.editor.routes import router as editor_router
from sql2dsql.web.features.editor.routes import api_router as editor_api_router
from sql2dsql.web.features.settings.routes import router as settings_router

def create_app(rt: Runtime) -> FastAPI:
    """Create and configure the FastAPI app for a sql2dsql Runtime."""
    app = FastAPI(title="sql2dsql")
    app.state.rt = rt
    app.mount("/static", StaticFiles(
        directory=Path(__file__).resolve().parent / "static"),
        name="static",
    )
    # Routers for different features
    app.include_router(editor_router)
    app.include_router(editor_api_router)
    app.include_router(settings_router)
    # Health check endpoint
    @app.get("/health")
    def health():
        return {"ok": True}
    return app
