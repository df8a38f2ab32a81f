"""Request/reply messaging with actors: fire-and-forget casts and awaited calls.

An actor here is any object with a ``send_message(msg)`` method that queues
the message for processing and raises :class:`MessagingError` when the
message cannot be delivered. A call hands the actor a :class:`ReplyPort`
inside the message it builds, then waits on that port for the reply.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from datetime import timedelta
from typing import Any, Generic, Protocol, TypeVar

from .call_result import CallResult

__all__ = [
    "MessagingError",
    "ReplyPort",
    "cast",
    "call",
    "multi_call",
    "call_and_forward",
]

T = TypeVar("T")

Timeout = float | timedelta | None


class MessagingError(Exception):
    """A message could not be delivered because its channel is closed."""


class _Recipient(Protocol):
    def send_message(self, msg: Any) -> None: ...


class _Dropped:
    """Marks a reply port that was discarded without a reply."""


_DROPPED = _Dropped()


def _mark_dropped(future: asyncio.Future[Any]) -> None:
    if not future.done():
        future.set_result(_DROPPED)


class ReplyPort(Generic[T]):
    """One-shot channel on which an actor sends the reply to a call.

    If the port is discarded without a reply the waiting caller sees a
    sender error. Use the port from the event loop's own thread.
    """

    def __init__(self, future: asyncio.Future[Any], timeout: Timeout = None) -> None:
        self._future = future
        self.timeout = _seconds(timeout)

    def send(self, value: T) -> None:
        """Deliver the reply; raises MessagingError if nobody is waiting anymore."""
        if self._future.done():
            raise MessagingError("reply channel closed")
        self._future.set_result(value)

    def is_closed(self) -> bool:
        """True once the reply was sent or the caller stopped waiting."""
        return self._future.done()

    def __del__(self) -> None:
        future = getattr(self, "_future", None)
        if future is None or future.done():
            return
        try:
            future.get_loop().call_soon_threadsafe(_mark_dropped, future)
        except RuntimeError:
            pass


def _seconds(timeout: Timeout) -> float | None:
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return timeout


async def _await_reply(future: asyncio.Future[Any], timeout: float | None) -> CallResult[Any]:
    try:
        if timeout is None:
            reply = await future
        else:
            reply = await asyncio.wait_for(future, timeout)
    except asyncio.TimeoutError:
        return CallResult.timeout()
    if reply is _DROPPED:
        return CallResult.sender_error()
    return CallResult.success(reply)


def _send_request(
    actor: _Recipient,
    msg_builder: Callable[[ReplyPort[Any]], Any],
    timeout: float | None,
) -> asyncio.Future[Any]:
    future = asyncio.get_running_loop().create_future()
    try:
        actor.send_message(msg_builder(ReplyPort(future, timeout)))
    except BaseException:
        future.cancel()
        raise
    return future


def cast(actor: _Recipient, msg: Any) -> None:
    """Send ``msg`` to ``actor`` without waiting for any reply."""
    actor.send_message(msg)


async def call(
    actor: _Recipient,
    msg_builder: Callable[[ReplyPort[T]], Any],
    timeout: Timeout = None,
) -> CallResult[T]:
    """Send a request built around a fresh reply port and wait for the reply.

    Raises MessagingError if the request cannot be sent.
    """
    seconds = _seconds(timeout)
    future = _send_request(actor, msg_builder, seconds)
    return await _await_reply(future, seconds)


async def multi_call(
    actors: Sequence[_Recipient],
    msg_builder: Callable[[ReplyPort[T]], Any],
    timeout: Timeout = None,
) -> list[CallResult[T]]:
    """Call every actor at once; results come back in the order of ``actors``.

    Raises MessagingError if any request cannot be sent.
    """
    seconds = _seconds(timeout)
    futures: list[asyncio.Future[Any]] = []
    try:
        for actor in actors:
            futures.append(_send_request(actor, msg_builder, seconds))
    except BaseException:
        for future in futures:
            future.cancel()
        raise
    return list(await asyncio.gather(*(_await_reply(f, seconds) for f in futures)))


def call_and_forward(
    actor: _Recipient,
    msg_builder: Callable[[ReplyPort[T]], Any],
    response_forward: _Recipient,
    forward_mapping: Callable[[T], Any],
    timeout: Timeout = None,
) -> asyncio.Task[CallResult[None]]:
    """Send a request now and, in a background task, forward the reply.

    The reply is passed through ``forward_mapping`` and sent to
    ``response_forward``; nothing is forwarded if the call does not succeed.
    Raises MessagingError if the request cannot be sent. The returned task
    yields the call's outcome, and raises MessagingError if the forward fails.
    """
    seconds = _seconds(timeout)
    future = _send_request(actor, msg_builder, seconds)

    async def _forward() -> CallResult[None]:
        result = await _await_reply(future, seconds)
        return result.map(lambda reply: response_forward.send_message(forward_mapping(reply)))

    return asyncio.get_running_loop().create_task(_forward())