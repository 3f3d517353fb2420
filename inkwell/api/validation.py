"""Request body validation for Flask endpoints.

The @validate_request decorator parses the JSON body into the pydantic model
named by the endpoint's annotated body parameter:

    @posts_bp.post("")
    @auth_required
    @validate_request
    def create_post(data: PostCreate):
        ...

Path parameters (e.g. post_id) are passed through unchanged.
"""

import inspect
import logging
from functools import wraps
from typing import get_type_hints

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


# Never echoed back in validation error details
REDACTED_FIELDS = {"password"}


def _is_model(annotation) -> bool:
    return inspect.isclass(annotation) and issubclass(annotation, BaseModel)


def _format_errors(exc: PydanticValidationError) -> list[dict]:
    """Flatten pydantic errors to {field, message, expected_type} dicts."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in exc.errors()
    ]


def validate_request(f):
    """
    Decorator that validates the JSON request body against a pydantic model.

    The model is taken from the type annotation of the endpoint parameter
    whose annotation is a BaseModel subclass. A missing or non-JSON body is
    validated as {}, so required fields are reported individually.

    Raises:
        TypeError: At decoration time, if the function has no parameters or
            its first parameter has no type annotation
        ValidationError: At request time, if the body fails validation
    """
    params = list(inspect.signature(f).parameters.values())
    if not params:
        raise TypeError(f"Function '{f.__name__}' has no parameters to validate")

    if params[0].annotation is inspect.Parameter.empty:
        raise TypeError(
            f"Parameter '{params[0].name}' of '{f.__name__}' lacks a type annotation"
        )

    hints = get_type_hints(f)
    body_params = [(p.name, hints[p.name]) for p in params if _is_model(hints.get(p.name))]

    if not body_params:
        # Only path parameters, nothing to validate
        return f

    param_name, model = body_params[0]

    @wraps(f)
    def wrapper(*args, **kwargs):
        received = request.get_json(silent=True)
        if not isinstance(received, dict):
            received = {}

        try:
            data = model.model_validate(received)
        except PydanticValidationError as e:
            logger.info(f"Validation failed for {model.__name__} on {request.path}")
            raise ValidationError(
                "Validation failed",
                {
                    "model": model.__name__,
                    "received": {
                        k: v for k, v in received.items() if k not in REDACTED_FIELDS
                    },
                    "errors": _format_errors(e),
                }
            )

        kwargs[param_name] = data
        return f(*args, **kwargs)

    return wrapper
