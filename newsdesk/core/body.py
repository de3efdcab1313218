import json
from flask import request
from werkzeug.exceptions import HTTPException

from .errors import ValidationError


def read_json_body():
    """Parse the request body as a JSON object.

    An empty body reads as ``{}``, and so does valid JSON that is not an
    object. Anything unreadable or unparseable is a ValidationError.
    """
    try:
        raw = request.get_data(cache=True, as_text=True)
    except (OSError, HTTPException):
        raise ValidationError('Failed to read body')

    if not raw or not raw.strip():
        return {}

    try:
        body = json.loads(raw)
    except ValueError:
        raise ValidationError('Body must be JSON')

    return body if isinstance(body, dict) else {}
