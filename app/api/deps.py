from typing import Dict, Generator

from fastapi import Request
from app.core.database import SessionLocal


def get_db() -> Generator:
    """
    Database session dependency.
    The session is closed automatically once the request is done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def get_form_data(request: Request) -> Dict[str, str]:
    """Submitted form fields (file uploads are ignored)."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
