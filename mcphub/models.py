# mcphub/models.py
from typing import Any, Optional

from pydantic import BaseModel


class Meta(BaseModel):
    total: int
    page: int
    limit: int


class Envelope(BaseModel):
    """Uniform wrapper returned by every endpoint.

    ``data`` carries the payload on success, ``error`` a human readable
    message on failure. ``meta`` is only present on list responses.
    """

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    meta: Optional[Meta] = None

    @classmethod
    def ok(cls, data: Any = None, meta: Optional[Meta] = None) -> "Envelope":
        return cls(success=True, data=data, meta=meta)

    @classmethod
    def fail(cls, error: str) -> "Envelope":
        return cls(success=False, error=error)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
