"""Test suite for CatalogBrowseSession wiring."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable

import pytest

from bloom_catalog.adapters.http_catalog_source import HttpCatalogSource
from bloom_catalog.adapters.in_memory_catalog_repository import InMemoryCatalogRepository
from bloom_catalog.adapters.in_memory_location import InMemoryLocation
from bloom_catalog.adapters.local_catalog_source import LocalCatalogSource
from bloom_catalog.domain.catalog_item import CatalogItem
from bloom_catalog.entrypoints.location.browse_session import CatalogBrowseSession
from bloom_catalog.use_cases.paginated_fetch_controller import FetchStatus
from bloom_catalog.use_cases.query_state_store import QueryStateStore


class ManualScheduler:
    """Collects timers; ``fire_all`` runs them immediately."""

    def __init__(self) -> None:
        self.callbacks: list[tuple[Callable[..., Any], tuple]] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> "ManualScheduler.Handle":
        handle = ManualScheduler.Handle()
        self.callbacks.append((lambda: None if handle.cancelled else callback(*args), ()))
        return handle

    def fire_all(self) -> None:
        callbacks, self.callbacks = self.callbacks, []
        for callback, args in callbacks:
            callback(*args)

    class Handle:
        def __init__(self) -> None:
            self.cancelled = False

        def cancel(self) -> None:
            self.cancelled = True


@pytest.fixture
def repository() -> InMemoryCatalogRepository:
    items = [
        CatalogItem(
            id=f"b-{i:02d}",
            name=f"{'Rose' if i % 2 else 'Tulip'} Bouquet {i}",
            price=Decimal(i * 10_000),
            type="Roses" if i % 2 else "Tulips",
        )
        for i in range(1, 41)
    ]
    return InMemoryCatalogRepository(items)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def location() -> InMemoryLocation:
    return InMemoryLocation("type=Roses")


@pytest.fixture
def session(
    repository: InMemoryCatalogRepository, location: InMemoryLocation, scheduler: ManualScheduler
) -> CatalogBrowseSession:
    browse = CatalogBrowseSession(
        store=QueryStateStore(),
        source=LocalCatalogSource(repository),
        location=location,
        scheduler=scheduler,
    )
    browse.start()
    return browse


@pytest.mark.asyncio
async def test_start_points_controller_at_location_query(session: CatalogBrowseSession) -> None:
    await session.load_more()

    assert session.controller.total == 20
    assert all(item.type == "Roses" for item in session.controller.items)


@pytest.mark.asyncio
async def test_debounced_search_resets_accumulation_and_updates_location(
    session: CatalogBrowseSession, scheduler: ManualScheduler, location: InMemoryLocation
) -> None:
    await session.load_more()

    session.search_input.on_input("bouquet 1")
    session.search_input.on_input("bouquet 11")
    assert session.controller.total == 20

    scheduler.fire_all()

    assert session.store.state.search == "bouquet 11"
    assert session.controller.items == ()
    assert session.controller.status is FetchStatus.IDLE
    assert location.read_query_string() == "q=bouquet+11&type=Roses"

    await session.load_more()
    assert [item.id for item in session.controller.items] == ["b-11"]


@pytest.mark.asyncio
async def test_aclose_stops_syncing(session: CatalogBrowseSession, location: InMemoryLocation) -> None:
    await session.aclose()
    session.store.set_search("lily")

    assert location.writes == []


def test_from_environment_builds_http_session(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOG_API_URL", "http://catalog.test")
    monkeypatch.setenv("CATALOG_PAGE_SIZE", "12")

    browse = CatalogBrowseSession.from_environment(InMemoryLocation(), ManualScheduler())

    assert browse.store.state.page_size == 12
    assert isinstance(browse._source, HttpCatalogSource)


def test_is_favorite_delegates_to_injected_predicate(
    repository: InMemoryCatalogRepository, scheduler: ManualScheduler
) -> None:
    favorites = {"b-03", "b-07"}
    browse = CatalogBrowseSession(
        store=QueryStateStore(),
        source=LocalCatalogSource(repository),
        location=InMemoryLocation(),
        scheduler=scheduler,
        is_favorite=favorites.__contains__,
    )

    assert browse.is_favorite("b-03") is True
    assert browse.is_favorite("b-04") is False

    favorites.add("b-04")
    assert browse.is_favorite("b-04") is True


def test_is_favorite_defaults_to_false_without_predicate(session: CatalogBrowseSession) -> None:
    assert session.is_favorite("b-01") is False
