"""
Resource handlers for the hub API.

One handler class per resource composes the list query engine with
create/update/delete mutations and validation. Every public method is
wrapped by :func:`~mcphub.errors.handle_errors`, so callers always get a
:class:`~mcphub.errors.Reply` (status code plus envelope) and never an
exception. Mutations are applied directly to the injected repository.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, Union

import pydantic

from ..config import Settings
from ..errors import NotFoundError, ValidationError, handle_errors
from ..models import Envelope, Meta
from ..query import ListQuery, parse_limit, parse_offset, run_query, split_tags
from ..repository import Repository, new_id
from .schemas import (
    BlogPost,
    ContactMessage,
    ContactReceipt,
    DocumentationSection,
    MessageStatus,
    Tool,
    utcnow,
)
from .store import Store

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 5000
STATUS_VALUES = [s.value for s in MessageStatus]


def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()


def _present(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def slugify(title: str) -> str:
    """Derive a URL-safe slug: lowercase, non-alphanumeric runs become one hyphen."""
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def make_excerpt(content: str, length: int = 200) -> str:
    if len(content) > length:
        return content[:length] + "..."
    return content


def _describe(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ())) or "payload"
    return f"Invalid value for {location}: {error.get('msg', 'invalid')}"


class ResourceHandler:
    """Shared plumbing for the per-resource handlers."""

    label = "Record"
    record_type: Type[pydantic.BaseModel] = pydantic.BaseModel
    required_fields: Tuple[str, ...] = ()
    immutable_fields: Tuple[str, ...] = ("id", "created_at")
    stamp_field = "updated_at"
    search_fields: Tuple[str, ...] = ()

    def __init__(self, repository: Repository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings

    def _query(self, limit: Union[str, int, None], offset: Union[str, int, None], **kwargs) -> ListQuery:
        return ListQuery(
            limit=parse_limit(limit, self.settings.default_limit, self.settings.max_limit),
            offset=parse_offset(offset),
            **kwargs,
        )

    def _page(self, query: ListQuery) -> Envelope:
        items, total = run_query(self.repository.all(), query, self.search_fields)
        return Envelope.ok(items, Meta(total=total, page=query.page, limit=query.limit))

    def _payload(self, payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        return payload

    def _require(self, payload: Dict[str, Any], message: Optional[str] = None) -> None:
        missing = [name for name in self.required_fields if not _present(payload.get(name))]
        if missing:
            raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")

    def _lookup(self, key: str) -> Any:
        record = self.repository.get(key)
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        return record

    def _build(self, data: Dict[str, Any]) -> Any:
        try:
            return self.record_type.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ValidationError(_describe(exc)) from exc

    def _merge(self, record: Any, updates: Any) -> Any:
        """Shallow-merge ``updates`` over ``record`` and store the result."""
        updates = self._payload(updates)
        data = record.model_dump()
        data.update({k: v for k, v in updates.items() if k not in self.immutable_fields})
        data[self.stamp_field] = utcnow()
        return self.repository.replace(self._build(data))


class ToolHandler(ResourceHandler):
    label = "Tool"
    record_type = Tool
    required_fields = ("name", "description", "category")
    search_fields = ("name", "description")

    SORT_KEYS: Dict[str, Callable[[Tool], Any]] = {
        "rating": lambda t: t.rating,
        "downloads": lambda t: t.downloads,
    }

    @handle_errors("Failed to fetch tools")
    def list(
        self,
        q: Optional[str] = None,
        category: Optional[str] = None,
        tags: Union[str, Iterable[str], None] = None,
        sort: Optional[str] = None,
        limit: Union[str, int, None] = None,
        offset: Union[str, int, None] = None,
    ) -> Envelope:
        # Without a recognised sort the catalogue keeps store order.
        query = self._query(
            limit,
            offset,
            term=q,
            category=category,
            tags=split_tags(tags),
            sort_key=self.SORT_KEYS.get(_norm(sort)),
            descending=True,
        )
        return self._page(query)

    @handle_errors("Failed to fetch tool")
    def get(self, tool_id: str) -> Envelope:
        return Envelope.ok(self._lookup(tool_id))

    @handle_errors("Failed to create tool", status_code=201)
    def create(self, payload: Any) -> Envelope:
        payload = self._payload(payload)
        self._require(payload)
        now = utcnow()
        tool = self._build({
            **payload,
            "id": new_id(),
            "created_at": now,
            "updated_at": now,
            "downloads": 0,
            "rating": 0,
        })
        self.repository.add(tool)
        logger.info("Created tool %s (%s)", tool.id, tool.name)
        return Envelope.ok(tool)

    @handle_errors("Failed to update tool")
    def update(self, tool_id: str, updates: Any) -> Envelope:
        return Envelope.ok(self._merge(self._lookup(tool_id), updates))

    @handle_errors("Failed to delete tool")
    def delete(self, tool_id: str) -> Envelope:
        if not self.repository.remove(tool_id):
            raise NotFoundError("Tool not found")
        logger.info("Deleted tool %s", tool_id)
        return Envelope.ok({"message": "Tool deleted successfully"})


class BlogHandler(ResourceHandler):
    label = "Blog post"
    record_type = BlogPost
    required_fields = ("title", "content", "author")
    immutable_fields = ("id", "created_at", "slug")

    @staticmethod
    def _published_filter(published: Optional[str]) -> Dict[str, Any]:
        flag = _norm(published)
        if flag in ("true", "1", "yes"):
            return {"published": True}
        if flag in ("false", "0", "no"):
            return {"published": False}
        return {}

    @handle_errors("Failed to fetch blog posts")
    def list(
        self,
        published: Optional[str] = "true",
        tag: Union[str, Iterable[str], None] = None,
        limit: Union[str, int, None] = None,
        offset: Union[str, int, None] = None,
    ) -> Envelope:
        query = self._query(
            limit,
            offset,
            tags=split_tags(tag),
            filters=self._published_filter(published),
            sort_key=lambda p: p.created_at,
            descending=True,
        )
        return self._page(query)

    def _by_slug(self, slug: str) -> BlogPost:
        post = self.repository.find(lambda p: p.slug == slug)
        if post is None:
            raise NotFoundError("Blog post not found")
        return post

    def _add_with_unique_slug(self, post: BlogPost) -> BlogPost:
        # Check and insert happen under one repository lock per candidate.
        base, suffix = post.slug, 2
        candidate = post
        while not self.repository.add_if(candidate, lambda p: p.slug == candidate.slug):
            candidate = post.model_copy(update={"slug": f"{base}-{suffix}"})
            suffix += 1
        return candidate

    @handle_errors("Failed to fetch blog post")
    def get(self, slug: str) -> Envelope:
        return Envelope.ok(self._by_slug(slug))

    @handle_errors("Failed to create blog post", status_code=201)
    def create(self, payload: Any) -> Envelope:
        payload = self._payload(payload)
        self._require(payload)
        title = str(payload["title"])
        base = slugify(title)
        if not base:
            raise ValidationError("Title must contain at least one letter or digit")
        content = str(payload["content"])
        now = utcnow()
        post = self._build({
            **payload,
            "id": new_id(),
            "slug": base,
            "excerpt": payload.get("excerpt") or make_excerpt(content, self.settings.excerpt_length),
            "published": payload.get("published") or False,
            "created_at": now,
            "updated_at": now,
        })
        post = self._add_with_unique_slug(post)
        logger.info("Created blog post %s (%s)", post.id, post.slug)
        return Envelope.ok(post)

    @handle_errors("Failed to update blog post")
    def update(self, slug: str, updates: Any) -> Envelope:
        return Envelope.ok(self._merge(self._by_slug(slug), updates))


class ContactHandler(ResourceHandler):
    label = "Contact message"
    record_type = ContactMessage
    required_fields = ("name", "email", "subject", "message")

    @handle_errors("Failed to submit contact message. Please try again later.", status_code=201)
    def create(self, payload: Any) -> Envelope:
        payload = self._payload(payload)
        self._require(payload, "All fields are required: name, email, subject, message")
        name, email, subject, message = (str(payload[f]).strip() for f in self.required_fields)

        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Please provide a valid email address")
        if len(message) < MESSAGE_MIN_LENGTH:
            raise ValidationError(f"Message must be at least {MESSAGE_MIN_LENGTH} characters long")
        if len(message) > MESSAGE_MAX_LENGTH:
            raise ValidationError(f"Message must be less than {MESSAGE_MAX_LENGTH} characters")

        now = utcnow()
        record = ContactMessage(
            id=new_id(),
            name=name,
            email=email.lower(),
            subject=subject,
            message=message,
            status=MessageStatus.NEW,
            created_at=now,
            updated_at=now,
        )
        self.repository.add(record)
        logger.info(
            "New contact message received: id=%s name=%s email=%s subject=%s",
            record.id, record.name, record.email, record.subject,
        )
        return Envelope.ok(ContactReceipt(
            id=record.id,
            message="Thank you for your message! We'll get back to you within 24 hours.",
        ))

    @handle_errors("Failed to fetch contact messages")
    def list(
        self,
        status: Optional[str] = None,
        limit: Union[str, int, None] = None,
        offset: Union[str, int, None] = None,
    ) -> Envelope:
        # Unknown status values are ignored rather than rejected.
        filters = {"status": MessageStatus(status)} if status in STATUS_VALUES else {}
        query = self._query(
            limit,
            offset,
            filters=filters,
            sort_key=lambda m: m.created_at,
            descending=True,
        )
        return self._page(query)

    @handle_errors("Failed to update contact message")
    def update(self, message_id: str, payload: Any) -> Envelope:
        status = self._payload(payload).get("status")
        if status not in STATUS_VALUES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(STATUS_VALUES)}")
        record = self._lookup(message_id)
        updated = record.model_copy(update={"status": MessageStatus(status), "updated_at": utcnow()})
        return Envelope.ok(self.repository.replace(updated))


class DocumentationHandler(ResourceHandler):
    label = "Documentation section"
    record_type = DocumentationSection
    required_fields = ("title", "content", "category")
    immutable_fields = ("id",)
    stamp_field = "last_updated"

    @handle_errors("Failed to fetch documentation")
    def list(
        self,
        category: Optional[str] = None,
        limit: Union[str, int, None] = None,
        offset: Union[str, int, None] = None,
    ) -> Envelope:
        query = self._query(limit, offset, category=category, sort_key=lambda d: d.order)
        return self._page(query)

    @handle_errors("Failed to fetch documentation section")
    def get(self, section_id: str) -> Envelope:
        return Envelope.ok(self._lookup(section_id))

    @handle_errors("Failed to fetch documentation categories")
    def categories(self) -> Envelope:
        categories: List[str] = list(dict.fromkeys(d.category for d in self.repository.all()))
        return Envelope.ok(categories)

    @handle_errors("Failed to create documentation section", status_code=201)
    def create(self, payload: Any) -> Envelope:
        payload = self._payload(payload)
        self._require(payload)
        order = payload.get("order")
        if order is None:
            order = max((d.order for d in self.repository.all()), default=0) + 1
        section = self._build({**payload, "id": new_id(), "order": order, "last_updated": utcnow()})
        self.repository.add(section)
        return Envelope.ok(section)

    @handle_errors("Failed to update documentation section")
    def update(self, section_id: str, updates: Any) -> Envelope:
        return Envelope.ok(self._merge(self._lookup(section_id), updates))


@dataclass
class Handlers:
    tools: ToolHandler
    blog: BlogHandler
    contact: ContactHandler
    documentation: DocumentationHandler


def build_handlers(store: Store, settings: Settings) -> Handlers:
    return Handlers(
        tools=ToolHandler(store.tools, settings),
        blog=BlogHandler(store.blog, settings),
        contact=ContactHandler(store.contact, settings),
        documentation=DocumentationHandler(store.documentation, settings),
    )
