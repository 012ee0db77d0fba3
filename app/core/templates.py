from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.templating import Jinja2Templates

from app.core.security import CSRF_COOKIE_NAME, CSRF_FORM_FIELD, get_or_create_csrf_token

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = status.HTTP_200_OK,
):
    """
    Render a page and (re)issue the anti-forgery cookie its forms post back.
    """
    token = get_or_create_csrf_token(request)
    page_context = {"csrf_token": token, "csrf_field": CSRF_FORM_FIELD}
    page_context.update(context or {})

    response = templates.TemplateResponse(
        request, name, page_context, status_code=status_code
    )
    response.set_cookie(CSRF_COOKIE_NAME, token, httponly=True, samesite="lax")
    return response
