"""
Route definitions for the hub API.

Endpoints:
- /api/tools          : list, fetch, create, update, delete tools
- /api/blog           : list, fetch by slug, create, update posts
- /api/contact        : submit, list, update message status
- /api/documentation  : list, fetch, create, update sections and list categories

Routes only translate HTTP input into handler calls; every handler
returns a status code and envelope which are sent back unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse

from .handlers import Handlers, build_handlers


def get_handlers(request: Request) -> Handlers:
    return build_handlers(request.app.state.store, request.app.state.settings)


# Numeric parameters are taken as strings; the handlers coerce them and
# fall back to defaults on invalid input instead of rejecting the request.
def _limit():
    return Query(default=None, description="Page size (default 10)")


def _offset():
    return Query(default=None, description="Index of the first result (default 0)")


tools_router = APIRouter(prefix="/api/tools", tags=["tools"])
blog_router = APIRouter(prefix="/api/blog", tags=["blog"])
contact_router = APIRouter(prefix="/api/contact", tags=["contact"])
docs_router = APIRouter(prefix="/api/documentation", tags=["documentation"])


# ---------------------------------------------------------------------------
# Tools

@tools_router.get("")
def list_tools(
    q: Optional[str] = Query(default=None, description="Search name and description"),
    category: Optional[str] = Query(default=None, description="Filter by category"),
    tags: Optional[List[str]] = Query(default=None, description="Filter by tag (repeatable)"),
    tags_array: Optional[List[str]] = Query(default=None, alias="tags[]", include_in_schema=False),
    sort: Optional[str] = Query(default=None, description="'rating' or 'downloads'"),
    limit: Optional[str] = _limit(),
    offset: Optional[str] = _offset(),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    all_tags = (tags or []) + (tags_array or [])
    return handlers.tools.list(
        q=q, category=category, tags=all_tags, sort=sort, limit=limit, offset=offset
    ).to_response()


@tools_router.get("/{tool_id}")
def get_tool(tool_id: str, handlers: Handlers = Depends(get_handlers)) -> JSONResponse:
    return handlers.tools.get(tool_id).to_response()


@tools_router.post("")
def create_tool(
    payload: Dict[str, Any] = Body(...),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.tools.create(payload).to_response()


@tools_router.put("/{tool_id}")
def update_tool(
    tool_id: str,
    payload: Dict[str, Any] = Body(...),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.tools.update(tool_id, payload).to_response()


@tools_router.delete("/{tool_id}")
def delete_tool(tool_id: str, handlers: Handlers = Depends(get_handlers)) -> JSONResponse:
    return handlers.tools.delete(tool_id).to_response()


# ---------------------------------------------------------------------------
# Blog

@blog_router.get("")
def list_posts(
    published: Optional[str] = Query(default="true", description="'true', 'false' or 'all'"),
    tag: Optional[str] = Query(default=None, description="Filter by tag"),
    limit: Optional[str] = _limit(),
    offset: Optional[str] = _offset(),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.blog.list(
        published=published, tag=tag, limit=limit, offset=offset
    ).to_response()


@blog_router.get("/{slug}")
def get_post(slug: str, handlers: Handlers = Depends(get_handlers)) -> JSONResponse:
    return handlers.blog.get(slug).to_response()


@blog_router.post("")
def create_post(
    payload: Dict[str, Any] = Body(...),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.blog.create(payload).to_response()


@blog_router.put("/{slug}")
def update_post(
    slug: str,
    payload: Dict[str, Any] = Body(...),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.blog.update(slug, payload).to_response()


# ---------------------------------------------------------------------------
# Contact
#
# Listing and status updates are meant for administrators but, like the
# rest of the API, are not authenticated.

@contact_router.post("")
def submit_contact(
    payload: Dict[str, Any] = Body(...),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.contact.create(payload).to_response()


@contact_router.get("")
def list_contact_messages(
    status: Optional[str] = Query(default=None, description="'new', 'read' or 'replied'"),
    limit: Optional[str] = _limit(),
    offset: Optional[str] = _offset(),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.contact.list(status=status, limit=limit, offset=offset).to_response()


@contact_router.put("/{message_id}")
def update_contact_message(
    message_id: str,
    payload: Dict[str, Any] = Body(...),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.contact.update(message_id, payload).to_response()


# ---------------------------------------------------------------------------
# Documentation

@docs_router.get("")
def list_documentation(
    category: Optional[str] = Query(default=None, description="Filter by category"),
    limit: Optional[str] = _limit(),
    offset: Optional[str] = _offset(),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.documentation.list(
        category=category, limit=limit, offset=offset
    ).to_response()


@docs_router.get("/meta/categories")
def list_documentation_categories(handlers: Handlers = Depends(get_handlers)) -> JSONResponse:
    return handlers.documentation.categories().to_response()


@docs_router.get("/{section_id}")
def get_documentation(section_id: str, handlers: Handlers = Depends(get_handlers)) -> JSONResponse:
    return handlers.documentation.get(section_id).to_response()


@docs_router.post("")
def create_documentation(
    payload: Dict[str, Any] = Body(...),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.documentation.create(payload).to_response()


@docs_router.put("/{section_id}")
def update_documentation(
    section_id: str,
    payload: Dict[str, Any] = Body(...),
    handlers: Handlers = Depends(get_handlers),
) -> JSONResponse:
    return handlers.documentation.update(section_id, payload).to_response()


routers = [tools_router, blog_router, contact_router, docs_router]
