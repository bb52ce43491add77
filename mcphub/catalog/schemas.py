"""
Pydantic schema definitions for the hub resources.

Each model describes one stored record. Records are created by the
handlers (which assign ids and timestamps) and returned to clients inside
an :class:`~mcphub.models.Envelope`. Optional fields left unset are
omitted from the JSON output.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tool(BaseModel):
    """A catalogue entry for an installable tool.

    ``downloads`` and ``rating`` start at 0 for newly created tools;
    ``rating`` is an average on a 0 to 5 scale.
    """

    id: str
    name: str
    description: str
    category: str
    tags: List[str] = Field(default_factory=list)
    version: str = "1.0.0"
    author: str = ""
    repository: Optional[str] = None
    documentation: Optional[str] = None
    install_command: Optional[str] = None
    usage_examples: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    downloads: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0, le=5)


class BlogPost(BaseModel):
    id: str
    title: str
    content: str
    excerpt: str = ""
    author: str
    tags: List[str] = Field(default_factory=list)
    featured_image: Optional[str] = None
    published: bool = False
    # Derived from the title at creation and never changed afterwards.
    slug: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class MessageStatus(str, Enum):
    NEW = "new"
    READ = "read"
    REPLIED = "replied"


class ContactMessage(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: MessageStatus = MessageStatus.NEW
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class DocumentationSection(BaseModel):
    """A page of the documentation; ``order`` is assigned by hand."""

    id: str
    title: str
    content: str
    category: str
    order: int = 0
    last_updated: datetime = Field(default_factory=utcnow)


class ContactReceipt(BaseModel):
    id: str
    message: str
