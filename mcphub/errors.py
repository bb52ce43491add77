"""Error taxonomy and the handler error boundary.

Handlers raise :class:`ValidationError` or :class:`NotFoundError` for
expected failures. The :func:`handle_errors` decorator turns whatever a
handler returns or raises into a :class:`Reply`, so nothing but an
envelope ever reaches the transport layer.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, NamedTuple

from fastapi.responses import JSONResponse

from .models import Envelope

logger = logging.getLogger(__name__)


class ResourceError(Exception):
    status_code = 500


class ValidationError(ResourceError):
    """A required field is missing or malformed."""

    status_code = 400


class NotFoundError(ResourceError):
    """No record matches the requested id or natural key."""

    status_code = 404


class Reply(NamedTuple):
    status_code: int
    envelope: Envelope

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.envelope.to_json())


def handle_errors(failure_message: str, status_code: int = 200) -> Callable:
    """Wrap a handler method so it always produces a :class:`Reply`.

    Parameters
    ----------
    failure_message : str
        Generic message used for the 500 envelope when the handler fails
        unexpectedly. Exception details are logged, never returned.
    status_code : int
        Status used when the handler returns an envelope normally
        (201 for creations).
    """

    def decorator(func: Callable[..., Envelope]) -> Callable[..., Reply]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Reply:
            try:
                envelope = func(*args, **kwargs)
            except ResourceError as exc:
                logger.debug("%s rejected: %s", func.__qualname__, exc)
                return Reply(exc.status_code, Envelope.fail(str(exc)))
            except Exception:
                logger.exception("Unexpected error in %s", func.__qualname__)
                return Reply(500, Envelope.fail(failure_message))
            return Reply(status_code, envelope)

        return wrapper

    return decorator
