"""
Base class for catalog entries.

An entry wraps one textual reference (an artist name, ``ARTIST\\t-\\tALBUM``,
``ARTIST\\t-\\tTITLE``) and lazily resolves it against the catalog. Which
record the catalog id came from is tracked by ``EntryState``:

- ``UNRESOLVED``: nothing known yet
- ``ID_ONLY``: an id was supplied, or the reference itself looked like one
- ``SEARCH_CACHED``: the id is the first hit of a cached search result
- ``FULL_CACHED``: the id comes from a fetched catalog record

Once an id is known it is never replaced, and a resolved entry never searches
again.
"""

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, ClassVar, Optional, TypeVar

import structlog

from ..catalog.protocol import CatalogClient
from ..exceptions import CatalogError, CatalogNotFoundError, CatalogRequestError, EntryNotFoundError, ValidationError
from ..models.catalog_models import CatalogEntity, CatalogKind, CatalogSearchResult

if TYPE_CHECKING:
    from .queue import Queue

logger = structlog.get_logger(__name__)

_ID_SHAPE = re.compile(r"[0-9A-Za-z]+")

# Spotify answers unknown or malformed ids with one of these
_REJECTED_ID_STATUSES = {400, 404}

T = TypeVar("T")


class EntryState(str, Enum):
    """Where an entry's catalog id came from."""

    UNRESOLVED = "unresolved"
    ID_ONLY = "id_only"
    SEARCH_CACHED = "search_cached"
    FULL_CACHED = "full_cached"


def catalog_id_from_reference(reference: str, kind: CatalogKind) -> str | None:
    """Return the id if ``reference`` already looks like a catalog id.

    Accepts bare alphanumeric ids and ``spotify:<kind>:<id>`` URIs.
    """
    candidate = reference.strip()
    prefix = f"spotify:{kind.value}:"
    if candidate.lower().startswith(prefix):
        candidate = candidate[len(prefix) :]
    return candidate if _ID_SHAPE.fullmatch(candidate) else None


def _rejects_id(error: CatalogError) -> bool:
    if isinstance(error, CatalogNotFoundError):
        return True
    return isinstance(error, CatalogRequestError) and error.status_code in _REJECTED_ID_STATUSES


def validate_result_limit(limit: Any) -> int | None:
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValidationError("result_limit must be a non-negative integer", field="result_limit", value=limit)
    return limit


class Entry(ABC):
    """A reference to an artist, album or track that resolves lazily."""

    kind: ClassVar[CatalogKind]

    def __init__(
        self,
        catalog: CatalogClient,
        reference: str,
        entry_id: Optional[str] = None,
        result_limit: Optional[int] = None,
    ) -> None:
        self.catalog = catalog
        self.reference = reference.strip()
        self.result_limit = validate_result_limit(result_limit)
        self.state = EntryState.UNRESOLVED
        self.search_result: CatalogSearchResult | None = None
        self.full_result: CatalogEntity | None = None
        self._id: str | None = None
        if entry_id:
            self._record_id(entry_id, EntryState.ID_ONLY)

    @property
    def id(self) -> str | None:
        return self._id

    def _record_id(self, entity_id: str, state: EntryState) -> None:
        if self._id is None:
            self._id = entity_id
        elif entity_id != self._id:
            logger.warning(
                "Catalog returned a different id, keeping the first one",
                reference=self.reference,
                kept=self._id,
                ignored=entity_id,
            )
        self.state = state

    def cache_search(self, result: CatalogSearchResult) -> None:
        """Cache a search result and adopt its first hit's id."""
        first = result.first
        if first is None:
            return
        self.search_result = result
        self._record_id(first.id, EntryState.SEARCH_CACHED)

    def cache_full(self, record: CatalogEntity) -> None:
        """Cache a fetched catalog record and adopt its id."""
        self.full_result = record
        self._record_id(record.id, EntryState.FULL_CACHED)

    async def resolve_identity(self) -> "Entry":
        """Make sure the entry has a catalog id.

        Searches the catalog by reference only while unresolved. If the search
        fails and the reference looks like a catalog id, the reference is used
        as the id.

        Raises:
            EntryNotFoundError: If neither the search nor the id heuristic works
        """
        if self.state is not EntryState.UNRESOLVED:
            return self

        try:
            result = await self.catalog.search(self.kind, self.reference)
            if result.first is None:
                raise CatalogNotFoundError(f"No {self.kind.value} found", kind=self.kind.value, query=self.reference)
        except CatalogError as e:
            fallback_id = catalog_id_from_reference(self.reference, self.kind)
            if fallback_id is None:
                raise EntryNotFoundError(self.reference, self.kind.value) from e
            logger.debug("Search failed, using reference as id", reference=self.reference, error=str(e))
            self._record_id(fallback_id, EntryState.ID_ONLY)
            return self

        self.cache_search(result)
        return self

    def require_id(self) -> str:
        """Return the catalog id, raising ``EntryNotFoundError`` if none is known."""
        if self._id is None:
            raise EntryNotFoundError(self.reference, self.kind.value)
        return self._id

    async def request_by_id(self, request: Callable[[str], Awaitable[T]]) -> T:
        """Run a catalog request keyed by this entry's id.

        An id that was only guessed or handed in (``ID_ONLY``) may not exist.
        When the catalog rejects it, the entry is reported as not found rather
        than as a transport failure.

        Raises:
            EntryNotFoundError: If the catalog rejects an unconfirmed id
            CatalogError: For any other catalog failure
        """
        entity_id = self.require_id()
        try:
            return await request(entity_id)
        except CatalogError as e:
            if self.state is EntryState.ID_ONLY and _rejects_id(e):
                raise EntryNotFoundError(self.reference, self.kind.value) from e
            raise

    @abstractmethod
    async def dispatch(self) -> "Queue[Any]":
        """Resolve the entry and expand it into a queue of results."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.reference!r} id={self._id} state={self.state.value}>"
