"""Lazy enumeration of paginated compute listings.

The compute API pages its listings: each response carries one page of raw
records under the collection key and, when more remain, a ``next`` link under
``<collection>_links``. :class:`Enumerator` walks that chain on demand. It
holds the current page, a cursor into it and the link to the following page,
and it only talks to the network when the consumer pulls past the end of the
page it already has.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from compute_cli.models.common import Page

if TYPE_CHECKING:
    from compute_cli.api.definitions import Operation
    from compute_cli.client.http import ComputeClient
    from compute_cli.models.base import ComputeResource

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="ComputeResource")

RecordMapper = Callable[[dict[str, Any]], dict[str, Any]]


class Enumerator(Generic[R]):
    """Forward-only iterator over every resource of a paginated listing.

    The first page is requested with ``options`` applied to ``operation``.
    Later pages are requested from the ``next`` link exactly as given, since
    the link already encodes the filters. Enumeration stops at the first page
    without a ``next`` link, and also at the first empty page, even if that
    page links onwards, and at a page whose ``next`` link was already
    followed. Any failure while fetching a page or building a resource from
    one of its records propagates to the consumer and ends the enumeration.
    """

    def __init__(
        self,
        client: ComputeClient,
        operation: Operation,
        *,
        factory: Callable[[], R],
        items_key: str,
        links_key: str,
        options: Mapping[str, Any] | None = None,
        map_fn: RecordMapper | None = None,
    ) -> None:
        self._client = client
        self._operation = operation
        self._factory = factory
        self._items_key = items_key
        self._links_key = links_key
        self._options = dict(options or {})
        self._map_fn = map_fn

        self._buffer: list[dict[str, Any]] = []
        self._cursor = 0
        self._started = False
        self._next_link: str | None = None
        self._requested: set[str] = set()
        self._finished = False
        self.pages_fetched = 0

    def __iter__(self) -> Iterator[R]:
        return self

    def __next__(self) -> R:
        return self.fetch_next()

    def has_more(self) -> bool:
        """Whether another resource can be pulled, fetching a page if needed."""
        while self._cursor >= len(self._buffer):
            if self._finished:
                return False
            self._fetch_page()
        return True

    def fetch_next(self) -> R:
        """Return the next resource, or raise ``StopIteration`` when exhausted."""
        if not self.has_more():
            raise StopIteration
        record = self._buffer[self._cursor]
        self._cursor += 1
        try:
            if self._map_fn is not None:
                record = self._map_fn(record)
            return self._factory().populate_from_response(record)
        except Exception:
            self.close()
            raise

    def close(self) -> None:
        """Stop enumerating; no further pages are requested."""
        self._finished = True
        self._buffer = []
        self._cursor = 0

    def _fetch_page(self) -> None:
        try:
            if not self._started:
                self._started = True
                requested = self._operation.path
                body = self._client.execute(self._operation, self._options)
            else:
                requested = self._next_link
                body = self._client.follow(requested)
            page = Page.from_body(body, self._items_key, self._links_key)
        except Exception:
            self.close()
            raise
        self._requested.add(requested)
        self.pages_fetched += 1
        logger.debug("Fetched page %d of %s (%d items)",
                     self.pages_fetched, self._items_key, len(page.items))

        self._buffer = page.items
        self._cursor = 0
        next_link = page.next_link
        if next_link is None:
            self._finished = True
        elif not page.items:
            logger.warning(
                "Page %d of %s is empty but links to %s; stopping",
                self.pages_fetched, self._items_key, next_link,
            )
            self._finished = True
        elif next_link in self._requested:
            logger.warning(
                "Page %d of %s links back to already fetched page %s; stopping",
                self.pages_fetched, self._items_key, next_link,
            )
            self._finished = True
        else:
            self._next_link = next_link
