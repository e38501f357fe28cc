"""
Domain errors raised by the service layer.

Services never raise ``HTTPException`` themselves.  They raise one of
the errors below and the endpoint translates it into a status code.
All of them derive from ``DevConnectorError``, so a handler that only
cares about "the request was rejected" can catch that one class.
"""

from typing import Dict, List


class DevConnectorError(ValueError):
    """Base class for errors a client can act on.

    Endpoints translate only these into 4xx answers.  Any other
    exception, including a stray ``ValueError`` from a library, is a
    server error.
    """


class NotFoundError(DevConnectorError):
    """A profile, post, comment or list entry does not exist."""


class NotAuthorizedError(DevConnectorError):
    """The caller is authenticated but does not own the resource."""


class ConflictError(DevConnectorError):
    """The requested change contradicts the current state (e.g. a second like)."""


class ValidationFailed(DevConnectorError):
    """One or more required fields are missing or empty.

    ``errors`` holds one entry per violated field in the shape the web
    client expects: ``{"msg": ..., "param": ..., "location": "body"}``.
    """

    def __init__(self, errors: List[Dict[str, str]]) -> None:
        super().__init__("; ".join(e["msg"] for e in errors))
        self.errors = errors


def require_fields(data: dict, messages: Dict[str, str]) -> None:
    """Check that every key of ``messages`` has a non-empty value in ``data``.

    Collects all violations before raising so the caller sees every
    missing field at once.
    """
    errors = []
    for field, msg in messages.items():
        value = data.get(field)
        if value is None or (isinstance(value, (str, list)) and not value):
            errors.append({"msg": msg, "param": field, "location": "body"})
    if errors:
        raise ValidationFailed(errors)
