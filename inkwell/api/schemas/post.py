"""Post schemas."""

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Body of POST /posts and PUT /posts/<id>.

    Any client-supplied user_id is not part of the model and is dropped.
    """

    title: str = Field(..., min_length=3, description="Post title")
    content: str = Field(..., min_length=12, description="Post body")


class PostResponse(BaseModel):
    id: int
    title: str
    content: str
    user_id: int
    created_at: str | None = None
