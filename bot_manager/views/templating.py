from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from bot_manager.core.config import settings
from bot_manager.services.notifications import pop_notifications

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def format_brl(value: Any) -> str:
    """pt-BR number formatting: 1234.5 -> 1.234,50"""
    if value is None or value == "":
        return "-"
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return str(value)
    formatted = f"{number:,.2f}"
    return formatted.replace(",", "_").replace(".", ",").replace("_", ".")


def format_percentage(value: Any) -> str:
    if value is None or value == "":
        return "-"
    return f"{value}%"


templates.env.filters["brl"] = format_brl
templates.env.filters["percentage"] = format_percentage


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    page_context = {
        "app_name": settings.app_name,
        "user": None,
    }
    page_context.update(context or {})
    # drained last so messages queued by the handler show on this page
    page_context["notifications"] = pop_notifications(request)
    return templates.TemplateResponse(request, name, page_context, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)
