"""Configuration panel router."""

import logging
from typing import Dict, List
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from random_sample.panel import ConfigurationPanel
from random_sample.server.dependencies import get_configuration_panel

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

router = APIRouter(prefix="/RandomSample")


def _handle_submit(panel: ConfigurationPanel, form: Dict[str, List[str]], action_url: str) -> str:
    panel.init()
    panel.submit_form(form)

    action = form.get("action", [""])[0]
    if action == "save":
        panel.save()
    elif action == "test":
        panel.test()
    else:
        logger.debug(f"Panel form submitted without a known action: {action!r}")

    return panel.render(action_url)


@router.get("/ConfigPage", response_class=HTMLResponse)
def show_config_page(
    request: Request,
    panel: ConfigurationPanel = Depends(get_configuration_panel),
):
    """Render the configuration panel with the persisted settings."""
    panel.init()
    return HTMLResponse(panel.render(str(request.url)))


@router.post("/ConfigPage", response_class=HTMLResponse)
async def submit_config_page(
    request: Request,
    panel: ConfigurationPanel = Depends(get_configuration_panel),
):
    """Apply a submitted panel form, then save or test.

    Only urlencoded forms are accepted: an unparsed body would read as a
    form with every checkbox cleared.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != FORM_CONTENT_TYPE:
        raise HTTPException(status_code=415, detail=f"Panel form must be posted as {FORM_CONTENT_TYPE}")

    body = (await request.body()).decode("utf-8")
    form = parse_qs(body, keep_blank_values=True)
    html = await run_in_threadpool(_handle_submit, panel, form, str(request.url))
    return HTMLResponse(html)
