from flask import request

from scoreboard.errors import ValidationError


def json_body() -> dict:
    """The request's JSON object, or ``{}`` when no JSON was sent."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
