"""HTTP API for Inkwell.

- posts: CRUD for the authenticated user's posts
- validation: @validate_request decorator for JSON request bodies
"""
