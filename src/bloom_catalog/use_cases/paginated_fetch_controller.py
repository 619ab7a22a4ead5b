"""
Paginated ("infinite scroll") fetch controller.

State machine::

    IDLE -> FETCHING -> SUCCEEDED | FAILED | ABORTED -> (next load) FETCHING

Runs on a single asyncio event loop. Each load owns a ticket; a newer load,
a query change or teardown cancels the ticket's task and marks it. Whether a
result may touch state is decided when it arrives, not when it was issued:
only the ticket that is still in flight for the current query generation is
merged. Everything else is discarded wholesale.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from bloom_catalog.domain.catalog_item import CatalogItem, FetchPage
from bloom_catalog.domain.errors import FetchCancelled, FetchFailure
from bloom_catalog.domain.query_state import (
    DEFAULT_QUERY_STATE,
    CatalogPageRequest,
    QueryState,
    clamp_page,
    clamp_page_size,
)
from bloom_catalog.ports.catalog_source import CatalogSource

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ABORTED = "aborted"


@dataclass(eq=False)
class _Ticket:
    generation: int
    page: int
    task: asyncio.Future[FetchPage]
    cancel_reason: str | None = None


class PaginatedFetchController:
    """
    Orchestrates page-by-page retrieval for one logical query at a time.

    The accumulated item sequence is owned here and exposed read-only.
    Items are deduplicated by id; the first occurrence keeps its position.
    """

    def __init__(
        self,
        source: CatalogSource,
        query: QueryState = DEFAULT_QUERY_STATE,
        page_size: int | None = None,
    ) -> None:
        self._source = source
        self._query = query.criteria
        self._page_size = clamp_page_size(page_size or query.page_size)
        self._generation = 0
        self._in_flight: _Ticket | None = None
        self._closed = False
        self._reset_accumulation()

    # Read-only state --------------------------------------------------------

    @property
    def query(self) -> QueryState:
        return self._query

    @property
    def items(self) -> tuple[CatalogItem, ...]:
        return tuple(self._items)

    @property
    def total(self) -> int:
        return self._total

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def last_page(self) -> int:
        return self._last_page

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def error(self) -> FetchFailure | None:
        return self._error

    @property
    def is_fetching(self) -> bool:
        return self._in_flight is not None and not self._in_flight.task.done()

    # Operations -------------------------------------------------------------

    def set_query(self, query: QueryState) -> bool:
        """
        Switch to a new logical query.

        Cancels in-flight work and clears accumulated items, total and
        has_more before any page of the new query is requested. A query
        equal to the current one (page position ignored) is a no-op.
        """
        criteria = query.criteria
        if criteria == self._query:
            return False

        self._cancel_in_flight("query changed")
        self._generation += 1
        self._query = criteria
        self._page_size = clamp_page_size(query.page_size)
        self._reset_accumulation()

        logger.info(
            "Catalog query changed, accumulated pages reset",
            extra={"generation": self._generation},
        )
        return True

    async def load(self, page: int | None = None, *, force: bool = False) -> FetchPage | None:
        """
        Fetch ``page`` (default: the page after the last one loaded) and merge it.

        A load for the page already in flight is a no-op unless ``force``;
        a load for any other page supersedes the pending one.

        Returns:
            The merged page, or None when the load was a no-op, was
            superseded, or failed (see ``status`` and ``error``)
        """
        if self._closed:
            return None

        page = clamp_page(page if page is not None else self._last_page + 1)

        pending = self._in_flight
        if pending is not None and not pending.task.done():
            if pending.page == page and not force:
                logger.debug("Duplicate catalog page load ignored", extra={"page": page})
                return None
            self._cancel_in_flight("superseded")

        request = CatalogPageRequest(query=self._query, page=page, page_size=self._page_size)
        ticket = _Ticket(
            generation=self._generation,
            page=page,
            task=asyncio.ensure_future(self._source.fetch_catalog_page(request)),
        )
        self._in_flight = ticket
        self._status = FetchStatus.FETCHING
        self._error = None

        try:
            result = await ticket.task
        except asyncio.CancelledError:
            if ticket.cancel_reason is None:
                # The awaiting consumer was cancelled, not superseded by us
                self._settle_aborted(ticket)
                raise
            return None
        except FetchCancelled:
            self._settle_aborted(ticket)
            return None
        except Exception as exc:
            if not self._is_current(ticket):
                logger.debug("Discarding failure of superseded catalog page", extra={"page": page})
                return None
            self._settle_failed(ticket, exc)
            return None

        if not self._is_current(ticket):
            logger.debug(
                "Discarding superseded catalog page",
                extra={"page": page, "reason": ticket.cancel_reason},
            )
            return None

        self._in_flight = None
        self._merge(result)
        return result

    async def load_more(self) -> FetchPage | None:
        """Next page for infinite scroll; no-op while fetching or when exhausted."""
        if self.is_fetching:
            return None
        if self._last_page == 0:
            return await self.load(1)
        if not self._has_more:
            return None
        return await self.load(self._last_page + 1)

    async def retry(self) -> FetchPage | None:
        """Manual retry: re-issue the last failed page, superseding anything pending."""
        if self._failed_page is None:
            return None
        return await self.load(self._failed_page, force=True)

    def close(self) -> None:
        """Teardown: abort in-flight work; later results and loads are ignored."""
        was_fetching = self.is_fetching
        self._closed = True
        self._cancel_in_flight("teardown")
        if was_fetching:
            self._status = FetchStatus.ABORTED

    # Internal ---------------------------------------------------------------

    def _reset_accumulation(self) -> None:
        self._items: list[CatalogItem] = []
        self._seen_ids: set[str] = set()
        self._total = 0
        self._has_more = False
        self._last_page = 0
        self._failed_page: int | None = None
        self._status = FetchStatus.IDLE
        self._error: FetchFailure | None = None

    def _is_current(self, ticket: _Ticket) -> bool:
        return (
            not self._closed
            and ticket.cancel_reason is None
            and self._in_flight is ticket
            and ticket.generation == self._generation
        )

    def _cancel_in_flight(self, reason: str) -> None:
        ticket = self._in_flight
        if ticket is None:
            return

        self._in_flight = None
        ticket.cancel_reason = reason
        if not ticket.task.done():
            ticket.task.cancel()
            logger.debug(
                "Catalog page fetch cancelled",
                extra={"page": ticket.page, "reason": reason},
            )

    def _settle_aborted(self, ticket: _Ticket) -> None:
        if self._in_flight is ticket:
            self._in_flight = None
            self._status = FetchStatus.ABORTED

    def _settle_failed(self, ticket: _Ticket, exc: Exception) -> None:
        if isinstance(exc, FetchFailure):
            failure = exc
        else:
            failure = FetchFailure(f"Failed to fetch catalog page {ticket.page}: {exc}", page=ticket.page)

        self._in_flight = None
        self._status = FetchStatus.FAILED
        self._error = failure
        self._failed_page = ticket.page

        logger.warning(
            "Catalog page fetch failed",
            exc_info=None if isinstance(exc, FetchFailure) else exc,
            extra={"page": ticket.page, "error_message": failure.message, "accumulated": len(self._items)},
        )

    def _merge(self, page: FetchPage) -> None:
        for item in page.items:
            if item.id in self._seen_ids:
                continue
            self._seen_ids.add(item.id)
            self._items.append(item)

        self._total = page.total
        self._has_more = page.has_more
        self._last_page = max(self._last_page, page.page)
        self._failed_page = None
        self._status = FetchStatus.SUCCEEDED
        self._error = None
