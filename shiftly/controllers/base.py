"""
Base class for all screen-state controllers.

A controller owns the data one screen shows and walks the state machine

    idle -> loading -> loaded(data)
                    -> error(message)   (last good data kept)

refresh() is stale-while-revalidate: data already on screen stays there while
the next fetch is in flight. Overlapping refreshes are not cancelled, so the
one that resolves last wins; the next poll corrects any stale overwrite.

Everything runs on the event loop thread. State only changes at await
resume points, so no locking is needed.
"""

from __future__ import annotations

import abc
import logging
from enum import Enum
from typing import Callable, Generic, TypeVar

from shiftly.api.errors import APIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[["ScreenController"], None]


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ScreenController(abc.ABC, Generic[T]):
    """
    Subclass this and implement fetch().
    Views subscribe() for a callback after every state transition.
    """

    name = "screen"

    def __init__(self, client):
        self.client = client
        self.state = LoadState.IDLE
        self.data: T | None = None
        self.show_error = False
        self.error_message = ""
        self.last_error: APIError | None = None
        # Set by a failed mutation so the reconciling refresh does not hide it
        self.mutation_error: APIError | None = None
        self._listeners: list[Listener] = []

    # ── Derived flags ────────────────────────────────────────────────────────

    @property
    def is_loading(self) -> bool:
        """Pure loading state: nothing to show yet."""
        return self.state is LoadState.LOADING and self.data is None

    @property
    def has_stale_data(self) -> bool:
        """Loading, with the previous snapshot still on screen."""
        return self.state is LoadState.LOADING and self.data is not None

    @property
    def has_data(self) -> bool:
        return self.data is not None

    # ── Observers ────────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ── Lifecycle ────────────────────────────────────────────────────────────

    @abc.abstractmethod
    async def fetch(self) -> T:
        """Fetch a fresh snapshot from the API. Raises APIError on failure."""
        ...

    async def on_loaded(self, data: T) -> None:
        """Hook run after a successful refresh has been applied."""

    async def refresh(self) -> bool:
        """Fetch and apply a new snapshot. Returns True on success."""
        self.state = LoadState.LOADING
        self._changed()
        try:
            data = await self.fetch()
        except APIError as e:
            self._fail(e)
            return False
        self.data = data
        self.state = LoadState.LOADED
        if self.mutation_error is None:
            self.show_error = False
            self.error_message = ""
        else:
            self.error_message = str(self.mutation_error)
        self._changed()
        await self.on_loaded(data)
        return True

    async def retry(self) -> bool:
        """User-initiated retry from the error banner."""
        return await self.refresh()

    def dismiss_error(self) -> None:
        self.show_error = False
        self.mutation_error = None
        self._changed()

    # ── Error surfacing ──────────────────────────────────────────────────────

    def _fail(self, err: APIError) -> None:
        logger.warning("%s refresh failed: %s", self.name, err)
        self.state = LoadState.ERROR
        self.last_error = err
        self.error_message = str(err)
        self.show_error = True
        self._changed()

    def _surface(self, err: APIError) -> None:
        """Show a mutation failure without touching the load state."""
        logger.warning("%s action failed: %s", self.name, err)
        self.last_error = err
        self.mutation_error = err
        self.error_message = str(err)
        self.show_error = True
        self._changed()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} state={self.state.value} error={self.show_error}>"
