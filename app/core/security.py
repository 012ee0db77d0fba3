"""
Request-forgery protection.

Every rendered page carries a signed random token in the ``csrftoken`` cookie
and in the hidden ``csrf_token`` form field. Mutating requests must echo the
cookie value back in the form.
"""

import hmac
import secrets
from typing import Optional

from fastapi import Request
from itsdangerous import BadSignature, URLSafeTimedSerializer

from app.core.config import settings
from app.core.exceptions import PermissionDeniedException

CSRF_COOKIE_NAME = "csrftoken"
CSRF_FORM_FIELD = "csrf_token"

_serializer = URLSafeTimedSerializer(settings.SECRET_KEY, salt="csrf-token")


def generate_csrf_token() -> str:
    return _serializer.dumps(secrets.token_hex(16))


def is_valid_csrf_token(token: Optional[str]) -> bool:
    if not token:
        return False
    try:
        _serializer.loads(token, max_age=settings.CSRF_TOKEN_MAX_AGE)
    except BadSignature:
        return False
    return True


def get_or_create_csrf_token(request: Request) -> str:
    """Reuse the token from the request cookie while it is still valid."""
    token = request.cookies.get(CSRF_COOKIE_NAME)
    if is_valid_csrf_token(token):
        return token
    return generate_csrf_token()


async def verify_csrf_token(request: Request) -> None:
    """
    Dependency for every POST route. Runs before the endpoint body.
    """
    form = await request.form()
    submitted = form.get(CSRF_FORM_FIELD)
    cookie = request.cookies.get(CSRF_COOKIE_NAME)

    if not isinstance(submitted, str) or not cookie:
        raise PermissionDeniedException("Missing request verification token")
    if not hmac.compare_digest(submitted.encode(), cookie.encode()) or not is_valid_csrf_token(cookie):
        raise PermissionDeniedException("Invalid request verification token")
