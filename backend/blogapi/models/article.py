"""
Blog API Backend — Article SQLAlchemy Model
=============================================

What:  ORM model for the `articles` table.
Who:   Used by BlogService for the home feed, author listings, likes and
       deletion.

Query Patterns:
    - Home feed: ORDER BY id DESC LIMIT 5 (primary key index)
    - Author listing: WHERE user_id = ? (idx_articles_user_id)
    - Like/dislike: UPDATE ... SET likes = likes ± 1 WHERE id = ?
"""

from sqlalchemy import ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from blogapi.database import Base


class Article(Base):
    """
    A short text post owned by one user.

    `likes` is a signed counter with no floor; dislikes can push it below 0.
    Deleting an article removes its comments through ON DELETE CASCADE.
    """

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Likes minus dislikes; may be negative",
    )

    __table_args__ = (
        Index("idx_articles_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, user_id={self.user_id}, likes={self.likes})>"
