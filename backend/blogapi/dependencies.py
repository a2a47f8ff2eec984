"""
Blog API Backend — Request Dependencies
=========================================

What:  FastAPI dependencies shared by the route modules.

    require_email  The caller's identity: the raw `Email` header. A missing or
                   empty header raises UnauthorizedError (401).
    get_settings   The Settings instance of the app serving the request.
"""

from typing import Optional

from fastapi import Header, Request

from blogapi.config import Settings
from blogapi.exceptions import UnauthorizedError


async def require_email(email: Optional[str] = Header(default=None)) -> str:
    if not email:
        raise UnauthorizedError()
    return email


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
