"""Request body validation for Flask views.

@validate_request parses the JSON (or form) body into the pydantic model
annotated on the view's ``data`` parameter and passes the instance in.
"""

import logging
from functools import wraps
from typing import get_type_hints

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_VALIDATION_MESSAGE = "Invalid request data"


def _request_payload() -> dict:
    """Return the request body as a dict, from JSON or form data."""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()
    if not isinstance(payload, dict):
        raise ValidationError(
            DEFAULT_VALIDATION_MESSAGE,
            {"errors": [{"loc": [], "msg": "Request body must be an object", "type": "dict_type"}]}
        )
    return payload


def validate_request(f):
    """
    Decorator that validates the request body against the view's schema.

    The schema is taken from the type annotation of the ``data`` parameter.
    Models may set a ``validation_message`` ClassVar to control the
    message of the resulting ValidationError.

    Error details list field locations and messages only; submitted values
    are never echoed back.

    Raises:
        ValidationError: If the body is missing, not an object, or fails
            schema validation
    """
    model: type[BaseModel] = get_type_hints(f)["data"]
    message = getattr(model, "validation_message", DEFAULT_VALIDATION_MESSAGE)

    @wraps(f)
    def wrapper(*args, **kwargs):
        payload = _request_payload()
        try:
            data = model.model_validate(payload)
        except PydanticValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            logger.info(f"Request validation failed on {request.path}: {len(errors)} error(s)")
            raise ValidationError(message, {"errors": errors})

        return f(*args, data=data, **kwargs)

    return wrapper
