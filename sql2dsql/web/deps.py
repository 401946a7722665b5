"""
Allows dependency injection of the Runtime and the caller's EditorSession
into FastAPI routes.

Example:
from sql2dsql.web.deps import RT, CurrentSession

def my_route(rt: RT, s: CurrentSession):
    # 'rt' and 's' are provided automatically
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, List, Optional

from fastapi import Request, Depends
from fastapi.responses import Response
from fastapi.templating import Jinja2Templates

from sql2dsql import __version__
from sql2dsql.core.runtime import Runtime
from sql2dsql.core.session import EditorSession

SESSION_COOKIE = "sql2dsql_session"

# --- Templates setup ---
TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["version"] = __version__

# --- Runtime Dependency injection ---
def get_runtime(request: Request) -> Runtime:
    """Dependency to retrieve the Runtime from the FastAPI request state."""
    return request.app.state.rt

# type alias for dependency injection
RT = Annotated[Runtime, Depends(get_runtime)]

# --- Session Dependency injection ---
def get_current_session(request: Request, rt: RT) -> EditorSession:
    """
    Dependency that finds the caller's editor session from its cookie.
    Unknown or missing ids get a fresh session rather than a 404.
    """
    return rt.get_or_create_session(request.cookies.get(SESSION_COOKIE))

CurrentSession = Annotated[EditorSession, Depends(get_current_session)]

def remember_session(response: Response, s: EditorSession) -> Response:
    """Attach the session cookie to an outgoing response."""
    response.set_cookie(SESSION_COOKIE, s.id, httponly=True, samesite="lax")
    return response

# --- Breadcrumbs ---

Crumb = tuple[str, Optional[str]]

# --- Page context collector ---

@dataclass
class PageContext:
    """
    Automatically collects Request and standard arguments required for almost
    every HTML page.
    FastAPI will automatically populates these from the Request/Query Params.
    """
    request: Request
    message: str | None = None  # query param: ?message=...
    message_type: str = "info"  # query param: ?message_type=...

    def __post_init__(self):
        """
        Runs automatically after __init__. Sets up internal state that doesn't
        come from HTTP parameters.
        """
        self.breadcrumbs: List[Crumb] = [("Editor", None)]
        self.messages: list[tuple[str, str]] = []
        if self.message:
            self.messages.append((self.message_type, self.message))

    def render(self, **kwargs):
        """Combine standard UI context with page-specific data passed as kwargs."""
        base_context = {
            "request": self.request,
            "messages": self.messages,
            "breadcrumbs": self.breadcrumbs,
        }
        return base_context | kwargs

    def add_msg(self, message: str = "", message_type: str = "info"):
        """
        Helper to add a message to the queue
        Types: success, danger, warning, info
        """
        self.messages.append((message_type, message))

    def page(self, name: str, **kwargs):
        """Render a template with the standard context."""
        return templates.TemplateResponse(self.request, name, self.render(**kwargs))
