"""
Blog API Backend — Blog Service (Data Access Layer)
=====================================================

What:  One method per domain operation, each issuing parameterized
       statements against users, articles and comments.
How:   Methods receive the per-request AsyncSession from the route. Each
       statement is atomic on its own; nothing here opens a transaction
       spanning several operations. Writes commit before returning, so a
       failed commit is reported to the caller. Rollback and close belong
       to the session dependency.
Who:   Called by route handlers in blogapi.routes.

Error Handling:
    SQLAlchemy errors are wrapped in DataAccessError carrying the driver's
    message. A missing user on an email lookup raises UserNotFoundError.
    Both surface as 500 responses.

Statements:
    home_articles          SELECT ... ORDER BY id DESC LIMIT :n
    login_user             INSERT ... ON CONFLICT/DUPLICATE KEY (ignore)
    create_user            INSERT INTO users (email, firstname, lastname)
    get_user_profile       SELECT user by email + get_articles_by_email
    get_articles_by_email  get_user_id_by_email + SELECT ... WHERE user_id
    create_article         INSERT INTO articles (user_id, content)
    add_comment            get_user_id_by_email + INSERT INTO comments
    like_article           UPDATE articles SET likes = likes + 1
    dislike_article        UPDATE articles SET likes = likes - 1
    delete_article         DELETE FROM articles WHERE id
    get_user_id_by_email   SELECT id FROM users WHERE email
"""

import logging
from typing import List

from sqlalchemy import delete, exists, insert, literal, select, update
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.exceptions import DataAccessError, UserNotFoundError
from blogapi.models.article import Article
from blogapi.models.comment import Comment
from blogapi.models.user import User
from blogapi.schemas.blog import (
    ArticleResponse,
    ProfileResponse,
    UserCreate,
    UserResponse,
)

logger = logging.getLogger(__name__)

HOME_FEED_SIZE = 5


def _data_access_error(operation: str, exc: SQLAlchemyError) -> DataAccessError:
    """Wrap a SQLAlchemy error, keeping the driver's own message."""
    original = getattr(exc, "orig", None) or exc
    logger.error("Database error in %s: %s", operation, original)
    return DataAccessError(
        message=str(original),
        context={"operation": operation, "error_type": type(exc).__name__},
    )


def _insert_user_ignoring_duplicate(dialect_name: str, email: str):
    """Build an insert of `email` into users that is a no-op if it exists."""
    if dialect_name == "postgresql":
        return pg_insert(User).values(email=email).on_conflict_do_nothing(index_elements=["email"])
    if dialect_name == "sqlite":
        return sqlite_insert(User).values(email=email).on_conflict_do_nothing(index_elements=["email"])
    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql_insert(User).values(email=email)
        return stmt.on_duplicate_key_update(email=stmt.inserted.email)
    # Portable fallback: INSERT ... SELECT :email WHERE NOT EXISTS (...)
    return insert(User).from_select(
        ["email"],
        select(literal(email)).where(~exists().where(User.email == email)),
    )


class BlogService:
    """
    Data access for the blog domain.

    Stateless: every method takes the session to run on, so one instance is
    shared by all requests.
    """

    async def home_articles(self, db: AsyncSession, limit: int = HOME_FEED_SIZE) -> List[ArticleResponse]:
        """Return the `limit` most recent articles, newest (highest id) first."""
        try:
            result = await db.execute(
                select(Article).order_by(Article.id.desc()).limit(limit)
            )
            articles = result.scalars().all()
        except SQLAlchemyError as e:
            raise _data_access_error("home_articles", e)
        return [ArticleResponse.model_validate(article) for article in articles]

    async def login_user(self, db: AsyncSession, email: str) -> None:
        """Register `email` unless a user with that email already exists."""
        try:
            stmt = _insert_user_ignoring_duplicate(db.get_bind().dialect.name, email)
            await db.execute(stmt)
            await db.commit()
        except SQLAlchemyError as e:
            raise _data_access_error("login_user", e)
        logger.info("Login accepted")

    async def create_user(self, db: AsyncSession, user: UserCreate) -> None:
        """Insert a user; a duplicate email fails with DataAccessError."""
        try:
            await db.execute(
                insert(User).values(
                    email=user.email,
                    firstname=user.firstname,
                    lastname=user.lastname,
                )
            )
            await db.commit()
        except SQLAlchemyError as e:
            raise _data_access_error("create_user", e)
        logger.info("User created")

    async def get_user_profile(self, db: AsyncSession, email: str) -> ProfileResponse:
        """
        Look up the user by email, then list the articles they own.

        Raises:
            UserNotFoundError: No user has this email
            DataAccessError:   Either query failed
        """
        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise _data_access_error("get_user_profile", e)

        if user is None:
            raise UserNotFoundError()

        articles = await self.get_articles_by_email(db, email)
        return ProfileResponse(user=UserResponse.model_validate(user), articles=articles)

    async def get_articles_by_email(self, db: AsyncSession, email: str) -> List[ArticleResponse]:
        """Resolve `email` to a user id and return that user's articles."""
        user_id = await self.get_user_id_by_email(db, email)
        try:
            result = await db.execute(
                select(Article).where(Article.user_id == user_id).order_by(Article.id)
            )
            articles = result.scalars().all()
        except SQLAlchemyError as e:
            raise _data_access_error("get_articles_by_email", e)
        return [ArticleResponse.model_validate(article) for article in articles]

    async def create_article(self, db: AsyncSession, user_id: int, content: str) -> None:
        """Insert an article owned by `user_id`; likes start at 0."""
        try:
            await db.execute(insert(Article).values(user_id=user_id, content=content))
            await db.commit()
        except SQLAlchemyError as e:
            raise _data_access_error("create_article", e)
        logger.info("Article created for user %d", user_id)

    async def add_comment(self, db: AsyncSession, article_id: int, email: str, content: str) -> None:
        """
        Attach a comment by the user with `email` to article `article_id`.

        The article's existence is checked only by the foreign key.
        """
        user_id = await self.get_user_id_by_email(db, email)
        try:
            await db.execute(
                insert(Comment).values(article_id=article_id, user_id=user_id, content=content)
            )
            await db.commit()
        except SQLAlchemyError as e:
            raise _data_access_error("add_comment", e)
        logger.info("Comment added to article %d by user %d", article_id, user_id)

    async def like_article(self, db: AsyncSession, article_id: int) -> None:
        """Increment the like counter by exactly 1. Missing ids are a no-op."""
        await self._adjust_likes(db, article_id, 1, "like_article")

    async def dislike_article(self, db: AsyncSession, article_id: int) -> None:
        """Decrement the like counter by exactly 1, with no floor."""
        await self._adjust_likes(db, article_id, -1, "dislike_article")

    async def _adjust_likes(self, db: AsyncSession, article_id: int, delta: int, operation: str) -> None:
        # Single in-row UPDATE; concurrent calls rely on the database's row atomicity
        try:
            await db.execute(
                update(Article)
                .where(Article.id == article_id)
                .values(likes=Article.likes + delta)
            )
            await db.commit()
        except SQLAlchemyError as e:
            raise _data_access_error(operation, e)
        logger.debug("%s: article %d (%+d)", operation, article_id, delta)

    async def delete_article(self, db: AsyncSession, article_id: int) -> None:
        """Delete an article by id. No ownership check; missing ids are a no-op."""
        try:
            await db.execute(delete(Article).where(Article.id == article_id))
            await db.commit()
        except SQLAlchemyError as e:
            raise _data_access_error("delete_article", e)
        logger.info("Article %d deleted", article_id)

    async def get_user_id_by_email(self, db: AsyncSession, email: str) -> int:
        """
        Resolve an email to its user id.

        Raises:
            UserNotFoundError: No user has this email
        """
        try:
            result = await db.execute(select(User.id).where(User.email == email))
            user_id = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise _data_access_error("get_user_id_by_email", e)

        if user_id is None:
            raise UserNotFoundError()
        return user_id


# ── Singleton Instance ────────────────────────────────────────────────────
blog_service = BlogService()
