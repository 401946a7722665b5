"""
Routes for the global settings page.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from sql2dsql.core.settings import Settings
from sql2dsql.web.deps import RT, PageContext
from sql2dsql.web.utils import get_form_str

router = APIRouter(prefix="/settings", tags=["settings"])

EDITABLE = ("backend_url", "timeout", "retries", "retry_delay", "status_reset_seconds", "default_source")


@router.get("/", response_class=HTMLResponse)
def settings_page(rt: RT, ctx: PageContext = Depends()):
    """Render the settings page."""
    ctx.breadcrumbs = [("Editor", "/"), ("Settings", None)]
    return ctx.page(
        "core/settings.html",
        settings=rt.settings,
        settings_dir=str(rt.settings_dir),
    )


@router.post("/", response_class=HTMLResponse)
async def save_settings_action(rt: RT, ctx: PageContext = Depends()):
    """Save all settings from the settings form."""
    form_data = await ctx.request.form()
    errors = []
    ctx.breadcrumbs = [("Editor", "/"), ("Settings", None)]

    # 1. Validate every submitted field before touching live settings
    staged = Settings.from_dict(rt.settings.to_dict())
    for key in EDITABLE:
        try:
            raw = get_form_str(form_data, key, strip=key != "default_source")
        except ValueError as e:
            errors.append(str(e))
            continue
        if raw is None or (raw == "" and key != "default_source"):
            continue
        try:
            staged.update(key, raw)
        except (KeyError, ValueError) as e:
            errors.append(f"{key}: {e}")

    # 2. Send back on error
    if errors:
        ctx.add_msg("; ".join(errors), "danger")
        return ctx.page(
            "core/settings.html",
            settings=staged,
            settings_dir=str(rt.settings_dir),
        )

    # 3. Save and success
    rt.settings = staged
    rt.save_settings()
    ctx.add_msg("Settings saved successfully!", "success")
    return ctx.page(
        "core/settings.html",
        settings=rt.settings,
        settings_dir=str(rt.settings_dir),
    )
