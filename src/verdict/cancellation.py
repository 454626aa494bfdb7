"""Cooperative cancellation for constraint checks."""

from __future__ import annotations

import asyncio


class CancellationToken:
    """Cooperative cancellation token backed by ``asyncio.Event``.

    A token is handed to every nested ``check`` call. Combinators and async
    callbacks poll it with :meth:`raise_if_cancelled` at the points where
    stopping is safe.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise asyncio.CancelledError("operation cancelled")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"
