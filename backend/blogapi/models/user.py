"""
Blog API Backend — User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Who:   Used by BlogService for registration, login and email lookups.

Table Design:
    - email is UNIQUE and doubles as the caller's credential (Email header)
    - firstname/lastname are nullable: POST /login registers a user from an
      email alone
"""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from blogapi.database import Base


class User(Base):
    """
    A registered author.

    Lifecycle:
        Created by POST /user or on first POST /login; never updated or deleted.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Unique email; identifies the user on every request",
    )

    firstname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    lastname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
