"""Pipes: typed, closable channels between UI code and business logic.

A pipe carries values of one type from senders to listeners. Listeners are
callbacks registered with `listen`, or async iterators obtained from
`receive`. Delivery to callbacks is synchronous, on the sender's thread.
An exception raised by one callback is logged and does not keep the value
from the other listeners.

The owner of a pipe must `dispose` it when done. Disposing is terminal and
idempotent; `send` and `throw_error` on a disposed pipe return False.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from clean_framework.domain.exceptions import PipeError, PipeListenError
from clean_framework.infrastructure.logging import get_logger, log_error_with_trace
from clean_framework.models import ViewModel

logger = get_logger(__name__)

T = TypeVar("T")
VM = TypeVar("VM", bound=ViewModel)

DataCallback = Callable[[T], None]
ErrorCallback = Callable[[BaseException], None]
DoneCallback = Callable[[], None]

_DATA = "data"
_ERROR = "error"
_DONE = "done"


class Subscription(Generic[T]):
    """Registration of one listener on a pipe."""

    def __init__(
        self,
        pipe: Pipe[T],
        on_data: DataCallback[T],
        on_error: ErrorCallback | None,
        on_done: DoneCallback | None,
    ) -> None:
        self._pipe = pipe
        self._on_data = on_data
        self._on_error = on_error
        self._on_done = on_done
        self._active = True

    @property
    def is_active(self) -> bool:
        """Whether the listener still receives events."""
        return self._active

    def cancel(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        if self._active:
            self._active = False
            self._pipe._detach(self)

    def _data(self, value: T) -> None:
        if self._active:
            self._on_data(value)

    def _error(self, error: BaseException) -> None:
        if not self._active:
            return
        if self._on_error is None:
            log_error_with_trace(logger, error, "Unhandled error sent through pipe")
            return
        self._on_error(error)

    def _done(self) -> None:
        if self._active:
            self._active = False
            if self._on_done is not None:
                self._on_done()


class PipeReceiver(Generic[T]):
    """Async iterator over the values of a pipe.

    Subscribes as soon as it is created. Errors thrown into the pipe are
    raised from `__anext__`; iteration ends when the pipe is disposed.
    """

    def __init__(self, pipe: Pipe[T], transform: Callable[[T], T] | None = None) -> None:
        self._queue: asyncio.Queue[tuple[str, Any]] = asyncio.Queue()
        self._transform = transform
        self._finished = False
        self._subscription = pipe._subscribe(
            self._enqueue_data,
            on_error=lambda error: self._queue.put_nowait((_ERROR, error)),
            on_done=lambda: self._queue.put_nowait((_DONE, None)),
        )

    def _enqueue_data(self, value: T) -> None:
        if self._transform is not None:
            try:
                value = self._transform(value)
            except ValueError as e:
                self._queue.put_nowait((_ERROR, e))
                return
        self._queue.put_nowait((_DATA, value))

    def __aiter__(self) -> PipeReceiver[T]:
        return self

    async def __anext__(self) -> T:
        if self._finished:
            raise StopAsyncIteration
        kind, payload = await self._queue.get()
        if kind == _DONE:
            self.cancel()
            raise StopAsyncIteration
        if kind == _ERROR:
            raise payload
        return payload

    def cancel(self) -> None:
        """Stop receiving values."""
        self._finished = True
        self._subscription.cancel()


class Pipe(Generic[T]):
    """A channel for one specific data type, meant for a single consumer.

    Values sent before anyone listens are buffered and handed to the first
    listener. A second listener is rejected; use `BroadcastPipe` to fan out.
    """

    _broadcast = False

    def __init__(self, initial_data: T | None = None) -> None:
        """Initialize the pipe.

        Args:
            initial_data: Value a view can render before the first real value
                arrives
        """
        self.initial_data = initial_data
        self.has_listeners = False
        self._closed = False
        self._subscriptions: list[Subscription[T]] = []
        self._buffer: deque[tuple[str, Any]] = deque()
        self._on_listen: Callable[[], None] | None = None

    @property
    def is_closed(self) -> bool:
        """Whether the pipe has been disposed."""
        return self._closed

    @property
    def listener_count(self) -> int:
        """Number of active listeners."""
        return len(self._subscriptions)

    def dispose(self) -> None:
        """Close the pipe and notify listeners. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for subscription in list(self._subscriptions):
            subscription._done()
        self._subscriptions.clear()
        logger.debug("Pipe disposed", extra={"pipe_type": type(self).__name__})

    def send(self, data: T) -> bool:
        """Transmit a value to the listeners.

        Returns:
            False if the pipe was already disposed, True otherwise
        """
        if self._closed:
            return False
        self._emit(_DATA, data)
        return True

    def throw_error(self, error: BaseException) -> bool:
        """Transmit an error instead of a value.

        Returns:
            False if the pipe was already disposed, True otherwise
        """
        if self._closed:
            return False
        self._emit(_ERROR, error)
        return True

    def listen(
        self,
        on_data: DataCallback[T],
        on_error: ErrorCallback | None = None,
        on_done: DoneCallback | None = None,
    ) -> Subscription[T]:
        """Register callbacks for values, errors and closing.

        Raises:
            PipeListenError: If this single-consumer pipe already has an active
                listener
        """
        return self._subscribe(on_data, on_error=on_error, on_done=on_done)

    def receive(self) -> PipeReceiver[T]:
        """Return an async iterator over the values sent from now on."""
        return PipeReceiver(self)

    def _subscribe(
        self,
        on_data: DataCallback[T],
        on_error: ErrorCallback | None = None,
        on_done: DoneCallback | None = None,
    ) -> Subscription[T]:
        if not self._broadcast and self._subscriptions:
            raise PipeListenError(type(self).__name__)

        subscription = Subscription(self, on_data, on_error, on_done)
        self.has_listeners = True

        if self._closed and self._broadcast:
            if self._on_listen is not None:
                self._on_listen()
            subscription._done()
            return subscription

        self._subscriptions.append(subscription)
        while self._buffer and subscription.is_active:
            kind, payload = self._buffer.popleft()
            self._deliver(subscription, kind, payload)

        # The new listener is registered, so values sent by the hook reach it.
        if self._on_listen is not None:
            self._on_listen()

        if self._closed and subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
            subscription._done()
        return subscription

    def _detach(self, subscription: Subscription[T]) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _emit(self, kind: str, payload: Any) -> None:
        if not self._subscriptions:
            if not self._broadcast:
                self._buffer.append((kind, payload))
            return
        for subscription in list(self._subscriptions):
            self._deliver(subscription, kind, payload)

    @staticmethod
    def _deliver(subscription: Subscription[T], kind: str, payload: Any) -> None:
        try:
            if kind == _DATA:
                subscription._data(payload)
            else:
                subscription._error(payload)
        except Exception as e:
            log_error_with_trace(logger, e, "Pipe listener failed")


class BroadcastPipe(Pipe[T]):
    """A pipe with any number of listeners.

    For example, the state of a checkbox can go both to the business logic
    and to another widget. Values sent while nobody listens are dropped.
    """

    _broadcast = True


class ValidatorPipe(BroadcastPipe[T]):
    """A broadcast pipe that validates every value before delivery.

    The validator returns the value (possibly normalized) or raises
    `ValueError`. Listeners registered with `listen` receive None in place of
    an invalid value, and `is_valid` remembers whether the last value passed.
    """

    def __init__(self, validator: Callable[[T], T], initial_data: T | None = None) -> None:
        """Initialize the pipe.

        Args:
            validator: Callable returning the checked value or raising ValueError
            initial_data: Value a view can render before the first real value
        """
        super().__init__(initial_data=initial_data)
        self._validator = validator
        self._is_valid = False

    @property
    def is_valid(self) -> bool:
        """Whether the last value seen by a `listen` callback was valid."""
        return self._is_valid

    def listen(  # type: ignore[override]
        self,
        on_data: Callable[[T | None], None],
        on_done: DoneCallback | None = None,
    ) -> Subscription[T]:
        """Register a callback receiving validated values, or None for invalid ones."""

        def validated(value: T) -> None:
            try:
                checked = self._validator(value)
            except ValueError as e:
                logger.debug("Pipe value rejected", extra={"reason": str(e)})
                invalid(e)
                return
            self._is_valid = True
            on_data(checked)

        def invalid(error: BaseException) -> None:
            self._is_valid = False
            on_data(None)

        return self._subscribe(validated, on_error=invalid, on_done=on_done)

    def receive(self) -> PipeReceiver[T]:
        """Return an async iterator of validated values.

        Invalid values are raised as `ValueError` from the iterator. This does
        not update `is_valid`.
        """
        return PipeReceiver(self, transform=self._validator)


class _EventMixin:
    """Payload-free behaviour shared by the event pipes."""

    def launch(self) -> bool:
        """Trigger the listeners on the other end of the pipe."""
        return self.send(None)  # type: ignore[attr-defined]

    def listen(
        self,
        on_event: Callable[[], None],
        on_error: ErrorCallback | None = None,
        on_done: DoneCallback | None = None,
    ) -> Subscription[None]:
        """Register a callback without parameters."""
        return self._subscribe(  # type: ignore[attr-defined]
            lambda _: on_event(), on_error=on_error, on_done=on_done
        )

    def receive(self) -> PipeReceiver[None]:
        """Event pipes carry no data; use `listen` instead."""
        raise PipeError(
            "Event pipes carry no data; use listen() instead of receive()",
            pipe_type=type(self).__name__,
        )


class EventPipe(_EventMixin, Pipe[None]):
    """A pipe for signals that carry no data, with a single listener."""


class BroadcastEventPipe(_EventMixin, BroadcastPipe[None]):
    """A pipe for signals that carry no data, with any number of listeners."""


class BroadcastPipeWithListener(BroadcastPipe[T]):
    """A broadcast pipe that reports every new listener."""

    def __init__(
        self,
        initial_data: T | None = None,
        on_listen: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(initial_data=initial_data)
        self._on_listen = on_listen

    def on_listen(self, callback: Callable[[], None] | None) -> None:
        """Set the callback fired whenever a listener subscribes."""
        self._on_listen = callback


class ViewModelPipe(Pipe[VM]):
    """A single-consumer pipe carrying view models."""


class ViewModelBroadcastPipe(BroadcastPipeWithListener[VM]):
    """A broadcast pipe carrying view models, with an optional listen hook."""
