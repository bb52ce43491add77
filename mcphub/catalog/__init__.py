"""
Catalog package for the hub API.

This package holds the record schemas, seed data, in-memory store,
resource handlers and route definitions for the four resources served
by the API: tools, blog posts, contact messages and documentation
sections. The store is built per application instance; swap the
repositories in :mod:`.store` to back a resource with real storage.
"""

from .router import routers  # noqa: F401
from .store import Store, build_store  # noqa: F401
