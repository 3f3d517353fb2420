"""Pydantic schemas for the posts API."""

from .post import PostCreate, PostResponse

__all__ = ["PostCreate", "PostResponse"]
