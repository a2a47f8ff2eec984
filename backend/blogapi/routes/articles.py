"""
Blog API Backend — Article Route Handlers
===========================================

What:  Home feed, the caller's articles, creation, comments, likes and
       deletion.

    GET    /home                     —       → 200 [Article] (newest first)
    GET    /articles                 Email   → 200 [Article] (caller's own)
    POST   /articles/create          Email   → 201
    POST   /articles/{id}/comment    Email   → 201
    POST   /articles/{id}/like       Email   → 200
    POST   /articles/{id}/dislike    Email   → 200
    DELETE /articles/{id}            Email   → 200

Like, dislike and delete only require that some Email header is present;
they do not check that the caller owns the article.
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.config import Settings
from blogapi.database import get_db_session
from blogapi.dependencies import get_settings, require_email
from blogapi.schemas.blog import ArticleCreate, ArticleResponse, CommentCreate
from blogapi.services.blog_service import blog_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Articles"])

# Ids must fit the INTEGER primary key; anything wider is a malformed id (400)
ARTICLE_ID_MIN = -(2**31)
ARTICLE_ID_MAX = 2**31 - 1
ArticleId = Annotated[int, Path(ge=ARTICLE_ID_MIN, le=ARTICLE_ID_MAX)]


@router.get(
    "/home",
    response_model=List[ArticleResponse],
    summary="Most recent articles",
)
async def home(
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db_session),
) -> List[ArticleResponse]:
    return await blog_service.home_articles(db, limit=settings.home_feed_size)


@router.get(
    "/articles",
    response_model=List[ArticleResponse],
    summary="Articles written by the caller",
)
async def list_articles(
    email: str = Depends(require_email),
    db: AsyncSession = Depends(get_db_session),
) -> List[ArticleResponse]:
    return await blog_service.get_articles_by_email(db, email)


@router.post(
    "/articles/create",
    status_code=201,
    response_class=Response,
    summary="Create an article owned by the caller",
)
async def create_article(
    body: ArticleCreate,
    email: str = Depends(require_email),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    user_id = await blog_service.get_user_id_by_email(db, email)
    await blog_service.create_article(db, user_id, body.content)
    return Response(status_code=201)


@router.delete("/articles/create", include_in_schema=False)
async def create_article_wrong_method() -> Response:
    # Otherwise DELETE /articles/create would match /articles/{article_id}
    raise HTTPException(status_code=405, detail="Method Not Allowed", headers={"Allow": "POST"})


@router.post(
    "/articles/{article_id}/comment",
    status_code=201,
    response_class=Response,
    summary="Comment on an article",
)
async def add_comment(
    article_id: ArticleId,
    body: CommentCreate,
    email: str = Depends(require_email),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await blog_service.add_comment(db, article_id, email, body.content)
    return Response(status_code=201)


@router.post(
    "/articles/{article_id}/like",
    status_code=200,
    response_class=Response,
    summary="Increment an article's like counter",
    dependencies=[Depends(require_email)],
)
async def like_article(
    article_id: ArticleId,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await blog_service.like_article(db, article_id)
    return Response(status_code=200)


@router.post(
    "/articles/{article_id}/dislike",
    status_code=200,
    response_class=Response,
    summary="Decrement an article's like counter",
    dependencies=[Depends(require_email)],
)
async def dislike_article(
    article_id: ArticleId,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await blog_service.dislike_article(db, article_id)
    return Response(status_code=200)


@router.delete(
    "/articles/{article_id}",
    status_code=200,
    response_class=Response,
    summary="Delete an article",
    dependencies=[Depends(require_email)],
)
async def delete_article(
    article_id: ArticleId,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await blog_service.delete_article(db, article_id)
    return Response(status_code=200)
