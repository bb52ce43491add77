"""
Data store for the hub API.

A :class:`Store` groups one repository per resource. ``build_store()``
fills them with the seed dataset from :mod:`.seed`; the application
factory keeps the result on ``app.state`` so that every app instance
(and every test) works on its own records.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..repository import InMemoryRepository, Repository
from .schemas import BlogPost, ContactMessage, DocumentationSection, Tool
from .seed import seed_blog_posts, seed_documentation, seed_tools


@dataclass
class Store:
    tools: Repository[Tool] = field(default_factory=InMemoryRepository)
    blog: Repository[BlogPost] = field(default_factory=InMemoryRepository)
    contact: Repository[ContactMessage] = field(default_factory=InMemoryRepository)
    documentation: Repository[DocumentationSection] = field(default_factory=InMemoryRepository)


def build_store(seed: bool = True) -> Store:
    """Create a store, optionally loaded with the seed records.

    Parameters
    ----------
    seed : bool
        When ``False`` every repository starts empty.

    Returns
    -------
    Store
        A store backed by in-memory repositories.
    """
    if not seed:
        return Store()
    return Store(
        tools=InMemoryRepository(seed_tools()),
        blog=InMemoryRepository(seed_blog_posts()),
        contact=InMemoryRepository(),
        documentation=InMemoryRepository(seed_documentation()),
    )
