"""Timers that send messages to an actor, or stop or kill it, after a delay.

The actor is any object offering ``send_message(msg)``, which raises
:class:`~actorcall.rpc.MessagingError` once the actor can no longer receive,
together with ``is_active()``, ``stop(reason)`` and ``kill()``. Every timer
runs as a background task on the running event loop; cancel the returned
task to call the timer off.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Protocol

from .rpc import MessagingError

__all__ = ["send_interval", "send_after", "exit_after", "kill_after"]

Period = float | timedelta


class _Actor(Protocol):
    def send_message(self, msg: Any) -> None: ...

    def is_active(self) -> bool: ...

    def stop(self, reason: str | None = None) -> None: ...

    def kill(self) -> None: ...


def _as_timedelta(period: Period) -> timedelta:
    delta = period if isinstance(period, timedelta) else timedelta(seconds=period)
    if delta < timedelta(0):
        raise ValueError(f"a period cannot be negative, got {period!r}")
    return delta


def _spawn(coro: Any) -> asyncio.Task[Any]:
    return asyncio.get_running_loop().create_task(coro)


def send_interval(
    period: Period, actor: _Actor, msg: Callable[[], Any]
) -> asyncio.Task[None]:
    """Send ``msg()`` to ``actor`` once every ``period`` while it is active.

    The first message goes out one period after the call. Deadlines are kept
    against the loop clock so the schedule does not drift. The task ends when
    the actor is no longer active or a send fails.
    """
    delta = _as_timedelta(period)
    if delta == timedelta(0):
        raise ValueError("an interval period must be positive")
    seconds = delta.total_seconds()

    async def _run() -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while actor.is_active():
            deadline += seconds
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            try:
                actor.send_message(msg())
            except MessagingError:
                break

    return _spawn(_run())


def send_after(
    period: Period, actor: _Actor, msg: Callable[[], Any]
) -> asyncio.Task[None]:
    """Send ``msg()`` to ``actor`` once, after ``period``.

    Awaiting the task raises MessagingError if the send failed.
    """
    seconds = _as_timedelta(period).total_seconds()

    async def _run() -> None:
        await asyncio.sleep(seconds)
        actor.send_message(msg())

    return _spawn(_run())


def exit_after(period: Period, actor: _Actor) -> asyncio.Task[None]:
    """Stop ``actor`` after ``period`` with the reason ``"Exit after <N>ms"``."""
    delta = _as_timedelta(period)
    millis = delta // timedelta(milliseconds=1)

    async def _run() -> None:
        await asyncio.sleep(delta.total_seconds())
        actor.stop(f"Exit after {millis}ms")

    return _spawn(_run())


def kill_after(period: Period, actor: _Actor) -> asyncio.Task[None]:
    """Kill ``actor`` after ``period``."""
    seconds = _as_timedelta(period).total_seconds()

    async def _run() -> None:
        await asyncio.sleep(seconds)
        actor.kill()

    return _spawn(_run())