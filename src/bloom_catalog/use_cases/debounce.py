"""
Debounce primitive and the debounced inputs built on it.

Rapid input changes coalesce into one effective mutation after a quiescence
window; every new input cancels the pending timer and schedules a fresh one,
so only the last value of a burst takes effect.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Protocol, TypeVar

from bloom_catalog.domain.query_state import PRICE_DOMAIN_MAX, PRICE_SLIDER_STEP, snap_to_step
from bloom_catalog.use_cases.query_state_store import QueryStateStore

T = TypeVar("T")

DEFAULT_DEBOUNCE_SECONDS = 0.3


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback later; ``asyncio`` event loops qualify."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class Debouncer(Generic[T]):
    def __init__(
        self,
        callback: Callable[[T], None],
        scheduler: Scheduler,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._callback = callback
        self._scheduler = scheduler
        self._delay = delay
        self._handle: TimerHandle | None = None
        self._pending: T | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def submit(self, value: T) -> None:
        self.cancel()
        self._pending = value
        self._handle = self._scheduler.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None

    def flush(self) -> None:
        """Apply the pending value now instead of waiting for the timer."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def _fire(self) -> None:
        value = self._pending
        self._handle = None
        self._pending = None
        self._callback(value)  # type: ignore[arg-type]


class DebouncedSearchInput:
    """Search box: the trimmed final value of a typing burst becomes the search term."""

    def __init__(
        self,
        store: QueryStateStore,
        scheduler: Scheduler,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._debouncer: Debouncer[str] = Debouncer(store.set_search, scheduler, delay)

    @property
    def debouncer(self) -> Debouncer[str]:
        return self._debouncer

    def on_input(self, text: str) -> None:
        self._debouncer.submit(text)


class DebouncedPriceInput:
    """
    Price slider: drag positions snap to the slider step before scheduling.

    Only slider input is stepped; ``QueryStateStore.set_price_range`` called
    directly accepts any value in the price domain.
    """

    def __init__(
        self,
        store: QueryStateStore,
        scheduler: Scheduler,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        step: int = PRICE_SLIDER_STEP,
    ) -> None:
        self._store = store
        self._step = step
        self._debouncer: Debouncer[tuple[int, int]] = Debouncer(self._apply, scheduler, delay)

    @property
    def debouncer(self) -> Debouncer[tuple[int, int]]:
        return self._debouncer

    def on_drag(self, low: float, high: float) -> None:
        self._debouncer.submit(
            (
                snap_to_step(low, self._step),
                snap_to_step(high, self._step, default=PRICE_DOMAIN_MAX),
            )
        )

    def _apply(self, value: tuple[int, int]) -> None:
        self._store.set_price_range(*value)
