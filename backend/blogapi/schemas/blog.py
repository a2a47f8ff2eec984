"""
Blog API Backend — Pydantic Request/Response Schemas
=====================================================

What:  The JSON shapes of the API: request bodies the handlers decode and the
       records they serialize.
How:   FastAPI validates request bodies against these models (type checks
       only) and serializes responses through them. Unknown fields in
       request bodies are ignored; server-assigned fields (`id`, `user_id`,
       `likes`) are not accepted from clients.

JSON field names:
    User:    id, email, firstname, lastname
    Article: id, user_id, content, likes
    Comment: id, article_id, user_id, content
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class LoginRequest(BaseModel):
    """
    Body of POST /login.

    `email` is optional at the schema level so that a missing or empty value
    is reported as "missing email field" rather than a generic decode error.
    """
    email: Optional[str] = Field(default=None, description="Email to log in or register")


class UserCreate(BaseModel):
    """Body of POST /user."""
    email: str = Field(default="", description="Unique email of the new user")
    firstname: Optional[str] = Field(default=None, description="First name")
    lastname: Optional[str] = Field(default=None, description="Last name")


class ArticleCreate(BaseModel):
    """Body of POST /articles/create. The author comes from the Email header."""
    content: str = Field(default="", description="Article text")


class CommentCreate(BaseModel):
    """Body of POST /articles/{id}/comment."""
    content: str = Field(default="", description="Comment text")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    id: int = Field(description="User identifier")
    email: str = Field(description="User email")
    firstname: Optional[str] = Field(default=None, description="First name (null for login-only users)")
    lastname: Optional[str] = Field(default=None, description="Last name (null for login-only users)")

    model_config = {"from_attributes": True}


class ArticleResponse(BaseModel):
    id: int = Field(description="Article identifier")
    user_id: int = Field(description="Identifier of the author")
    content: str = Field(description="Article text")
    likes: int = Field(description="Likes minus dislikes; may be negative")

    model_config = {"from_attributes": True}


class ProfileResponse(BaseModel):
    """Returned by GET /user/profile: the caller and every article they own."""
    user: UserResponse
    articles: List[ArticleResponse]


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
