"""Post CRUD endpoints for Inkwell.

This module implements RESTful endpoints for the caller's own posts:
- GET    /posts       - List posts, newest first
- POST   /posts       - Create post
- PUT    /posts/{id}  - Update post
- DELETE /posts/{id}  - Delete post

Architecture Notes:
- Every endpoint requires a bearer token; g.user_id is the owner
- The owner is always taken from the token, never from the request body
- Update and delete are single statements filtered on id AND owner, so a
  post owned by another user answers 404 exactly like a missing one
"""

import logging

from flask import Blueprint, g, jsonify

from .schemas import PostCreate, PostResponse
from .validation import validate_request
from ..auth.decorators import auth_required
from ..db import get_db
from ..exceptions import ResourceNotFound

logger = logging.getLogger(__name__)


# Create Blueprint
posts_bp = Blueprint("posts", __name__, url_prefix="/posts")


def _post_not_found(post_id: int) -> ResourceNotFound:
    return ResourceNotFound("Post not found or unauthorized", {"post_id": post_id})


def _to_response(row: dict) -> dict:
    return PostResponse.model_validate(row).model_dump()


@posts_bp.get("")
@auth_required
def list_posts():
    """
    List the caller's posts ordered by id descending.

    Returns:
        200: {"posts": [PostResponse, ...]} (possibly empty)
    """
    rows = get_db().posts.list_by_owner(g.user_id)
    logger.debug(f"Found {len(rows)} posts for user {g.user_id}")
    return jsonify({"posts": [_to_response(row) for row in rows]})


@posts_bp.post("")
@auth_required
@validate_request
def create_post(data: PostCreate):
    """
    Create a post owned by the caller.

    Request Body (PostCreate):
        - title: str (min 3 characters)
        - content: str (min 12 characters)

    Returns:
        201: {"post": PostResponse}
        400: Validation or database error
    """
    row = get_db().posts.create(title=data.title, content=data.content, user_id=g.user_id)
    logger.info(f"Post {row['id']} created by user {g.user_id}")
    return jsonify({"post": _to_response(row)}), 201


@posts_bp.put("/<int:post_id>")
@auth_required
@validate_request
def update_post(post_id: int, data: PostCreate):
    """
    Replace title and content of one of the caller's posts.

    Returns:
        200: {"post": PostResponse}
        404: Post doesn't exist or belongs to someone else
    """
    row = get_db().posts.update_owned(post_id, g.user_id, data.model_dump())
    if row is None:
        raise _post_not_found(post_id)

    logger.info(f"Post {post_id} updated by user {g.user_id}")
    return jsonify({"post": _to_response(row)})


@posts_bp.delete("/<int:post_id>")
@auth_required
def delete_post(post_id: int):
    """
    Delete one of the caller's posts.

    Returns:
        200: {"message": "Post deleted successfully"}
        404: Post doesn't exist or belongs to someone else
    """
    if not get_db().posts.delete_owned(post_id, g.user_id):
        raise _post_not_found(post_id)

    logger.info(f"Post {post_id} deleted by user {g.user_id}")
    return jsonify({"message": "Post deleted successfully"})
