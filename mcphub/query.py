"""
List queries shared by every resource listing.

A :class:`ListQuery` bundles the free-text term, structured filters, sort
order and pagination window of a listing request. :func:`run_query`
applies it to a sequence of records: filters first, then sorting, then
an offset based slice of the filtered result. The total returned
alongside the page always counts the filtered records, never the raw
store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

T = TypeVar("T")

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0
MAX_LIMIT = 100


def _norm(s: Optional[str]) -> str:
    """Normalize a string for case-insensitive comparison."""
    return (s or "").strip().lower()


def _parse_int(raw: Union[str, int, None]) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def parse_limit(
    raw: Union[str, int, None],
    default: int = DEFAULT_LIMIT,
    maximum: int = MAX_LIMIT,
) -> int:
    """Coerce a page size from query input.

    Parameters
    ----------
    raw : str | int | None
        Value taken from the query string. Anything that is not a
        positive integer (missing, non-numeric, zero, negative) falls
        back to ``default``.
    default : int
        Page size used for invalid input.
    maximum : int
        Upper bound; larger values are clamped to it.

    Returns
    -------
    int
        A page size in ``[1, maximum]``.
    """
    value = _parse_int(raw)
    if value is None or value < 1:
        value = default
    return min(value, maximum)


def parse_offset(raw: Union[str, int, None], default: int = DEFAULT_OFFSET) -> int:
    """Coerce a start offset; invalid or negative input yields ``default``."""
    value = _parse_int(raw)
    if value is None or value < 0:
        return default
    return value


def split_tags(raw: Union[str, Iterable[str], None]) -> List[str]:
    """Normalise one-or-many tag input into a list of non-empty tags.

    Accepts a single string or a list of strings (repeated ``tags=`` query
    parameters). Commas are part of the tag, not separators.
    """
    if raw is None:
        return []
    values = [raw] if isinstance(raw, str) else list(raw)
    return [str(value).strip() for value in values if str(value).strip()]


@dataclass
class ListQuery:
    term: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    # Exact equality filters, e.g. {"status": "new"} or {"published": True}.
    filters: Dict[str, Any] = field(default_factory=dict)
    sort_key: Optional[Callable[[Any], Any]] = None
    descending: bool = False
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET

    @property
    def page(self) -> int:
        """1-indexed page number the offset falls on."""
        return self.offset // self.limit + 1


def _matches_term(record: Any, term: str, fields: Sequence[str]) -> bool:
    for name in fields:
        value = getattr(record, name, None)
        if isinstance(value, (list, tuple)):
            if any(term in _norm(str(v)) for v in value):
                return True
        elif term in _norm(value if isinstance(value, str) else str(value or "")):
            return True
    return False


def _matches_tags(record: Any, tags: Sequence[str]) -> bool:
    # Inclusive policy: any record tag containing any query tag matches.
    record_tags = [_norm(t) for t in (getattr(record, "tags", None) or [])]
    return any(tag in record_tag for tag in tags for record_tag in record_tags)


def run_query(
    records: Sequence[T],
    query: ListQuery,
    search_fields: Sequence[str] = (),
) -> Tuple[List[T], int]:
    """Filter, sort and paginate ``records``.

    Parameters
    ----------
    records : Sequence[T]
        Records in store order. The sequence itself is not modified.
    query : ListQuery
        The listing request.
    search_fields : Sequence[str]
        Attribute names searched by ``query.term`` (case-insensitive
        substring match). List valued attributes match when any element
        contains the term.

    Returns
    -------
    Tuple[List[T], int]
        The records in ``[offset, offset + limit)`` of the filtered and
        sorted sequence (empty when the offset is past the end) and the
        number of records that matched before pagination.
    """
    items = list(records)

    term = _norm(query.term)
    if term and search_fields:
        items = [r for r in items if _matches_term(r, term, search_fields)]

    category = _norm(query.category)
    if category:
        items = [r for r in items if _norm(getattr(r, "category", None)) == category]

    tags = [_norm(t) for t in query.tags if _norm(t)]
    if tags:
        items = [r for r in items if _matches_tags(r, tags)]

    for name, expected in query.filters.items():
        items = [r for r in items if getattr(r, name, None) == expected]

    # 'sorted' is stable, so ties keep store order.
    if query.sort_key is not None:
        items = sorted(items, key=query.sort_key, reverse=query.descending)

    total = len(items)
    start = query.offset
    return items[start:start + query.limit], total
