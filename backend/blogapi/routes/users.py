"""
Blog API Backend — User Route Handlers
========================================

What:  Login/registration by email and the caller's profile.

    POST /login          {email}  → 200   insert-or-ignore by email
    POST /user           User     → 201   register with names
    GET  /user/profile   Email    → 200   {user, articles}
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.database import get_db_session
from blogapi.dependencies import require_email
from blogapi.exceptions import MalformedBodyError
from blogapi.schemas.blog import LoginRequest, ProfileResponse, UserCreate
from blogapi.services.blog_service import blog_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/login",
    status_code=200,
    response_class=Response,
    summary="Log in or register by email",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """Creates the user if the email is new; otherwise does nothing."""
    if not body.email:
        raise MalformedBodyError(message="Missing email field", field="email")

    await blog_service.login_user(db, body.email)
    return Response(status_code=200)


@router.post(
    "/user",
    status_code=201,
    response_class=Response,
    summary="Register a user",
)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await blog_service.create_user(db, body)
    return Response(status_code=201)


@router.get(
    "/user/profile",
    response_model=ProfileResponse,
    summary="The caller's user record and articles",
)
async def user_profile(
    email: str = Depends(require_email),
    db: AsyncSession = Depends(get_db_session),
) -> ProfileResponse:
    return await blog_service.get_user_profile(db, email)
