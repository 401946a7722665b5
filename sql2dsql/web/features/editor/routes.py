"""
The editor: SQL on the left, reformatted DSQL on the right.

HTML routes drive the page (form posts, status line); the JSON routes under
/api are what the page's script and other tools call.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field
from fastapi.concurrency import run_in_threadpool

from sql2dsql.core.errors import TranslationError
from sql2dsql.core.pretty import reformat
from sql2dsql.core.session import SUBMITTED
from sql2dsql.web.deps import RT, CurrentSession, PageContext, remember_session
from sql2dsql.web.utils import get_form_str

router = APIRouter(tags=["editor"])
api_router = APIRouter(prefix="/api", tags=["api"])

# --- Models ---

class TranslateRequest(BaseModel):
    """SQL text to send to the backend."""
    sql: str

class TranslateResponse(BaseModel):
    """Reformatted backend reply."""
    output: str
    status: str = SUBMITTED

class PrettyRequest(BaseModel):
    """Compact notation to lay out."""
    text: str = Field("", description="Compact notation, e.g. [{a 1, b 2} {a 1, b 2}]")

class PrettyResponse(BaseModel):
    """Laid out text."""
    text: str

# --- Pages ---

def _editor_page(rt, s, ctx: PageContext):
    response = ctx.page(
        "core/editor.html",
        session=s,
        backend_url=rt.settings.backend_url,
        status_reset_ms=int(rt.settings.status_reset_seconds * 1000),
    )
    return remember_session(response, s)

@router.get("/", response_class=HTMLResponse)
def editor_page(rt: RT, s: CurrentSession, ctx: PageContext = Depends()):
    """Editor page for the caller's session."""
    return _editor_page(rt, s, ctx)

@router.post("/translate", response_class=HTMLResponse)
async def translate_action(rt: RT, s: CurrentSession, ctx: PageContext = Depends()):
    """Submit the left pane, show the reformatted reply (or the error) on the right."""
    form_data = await ctx.request.form()
    try:
        source = get_form_str(form_data, "source", strip=False)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if source is not None:
        s.source = source
    # blocking HTTP call with retries; keep it off the event loop
    if await run_in_threadpool(s.process, rt.client):
        ctx.add_msg(s.status, "success")
    else:
        ctx.add_msg(s.status, "danger")
    return _editor_page(rt, s, ctx)

# --- JSON API ---

@api_router.post("/translate", response_model=TranslateResponse)
def translate_api(body: TranslateRequest, rt: RT):
    """Translate SQL through the backend and lay out the reply."""
    try:
        raw = rt.client.translate(body.sql)
    except TranslationError as e:
        rt.logger.error("Error processing code: %s", e)
        raise HTTPException(status_code=502, detail=f"Error: {e}") from e
    return TranslateResponse(output=reformat(raw))

@api_router.post("/pretty", response_model=PrettyResponse)
def pretty_api(body: PrettyRequest):
    """Lay out compact notation without contacting the backend."""
    return PrettyResponse(text=reformat(body.text))
