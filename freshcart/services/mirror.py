"""
Remote cart mirror.

POSTs the full cart line array to a remote endpoint after each cart
mutation. Fire-and-forget: the mutation never waits for it and its
failures are only logged.

One worker task sends snapshots in order. Snapshots scheduled while a POST
is in flight collapse into the newest one, and a failing POST stops
retrying as soon as a newer snapshot is waiting, so the remote always ends
on the latest cart.
"""
import asyncio
import os
from typing import Optional

import httpx
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from freshcart.logging import get_logger

logger = get_logger(__name__)

CART_MIRROR_URL = os.environ.get("CART_MIRROR_URL", "")
CART_MIRROR_TIMEOUT = float(os.environ.get("CART_MIRROR_TIMEOUT", "5.0"))


class CartMirror:
    """
    Mirrors cart snapshots to a remote HTTP endpoint.

    Usage:
        mirror = CartMirror("https://example.com/api/cart")
        mirror.schedule([line.to_dict() for line in cart.lines])
        await mirror.drain()  # on shutdown
    """

    def __init__(
        self,
        url: str = CART_MIRROR_URL,
        timeout: float = CART_MIRROR_TIMEOUT,
        attempts: int = 3,
        backoff: float = 1.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.attempts = attempts
        self.backoff = backoff
        self._client = client
        self._latest: Optional[list[dict]] = None
        self._worker: Optional[asyncio.Task] = None

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def schedule(self, payload: list[dict]) -> Optional[asyncio.Task]:
        """Queue payload as the newest snapshot. Returns the worker task, or None when disabled."""
        if not self.enabled:
            return None

        self._latest = payload
        if self._worker is not None and not self._worker.done():
            return self._worker

        try:
            self._worker = asyncio.create_task(self._run())
        except RuntimeError as e:
            # No running loop; mirroring is optional
            logger.debug(f"Cart mirror not scheduled: {e}")
            self._latest = None
            return None
        return self._worker

    async def _run(self) -> bool:
        """Send the newest snapshot until none is waiting. Returns the last outcome."""
        sent = False
        while self._latest is not None:
            payload, self._latest = self._latest, None
            sent = await self._mirror(payload)
        return sent

    async def _mirror(self, payload: list[dict]) -> bool:
        try:
            await self._post_with_retry(payload)
            logger.debug(f"Cart mirrored ({len(payload)} lines)")
            return True
        except Exception as e:
            if self._latest is not None:
                logger.debug(f"Cart mirror superseded by a newer snapshot: {e}")
            else:
                logger.warning(f"Error mirroring cart to {self.url}: {e}")
            return False

    def _superseded(self, retry_state) -> bool:
        return self._latest is not None

    async def _post_with_retry(self, payload: list[dict]) -> None:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.attempts) | self._superseded,
            wait=wait_exponential(multiplier=self.backoff, min=self.backoff, max=10),
            reraise=True,
        ):
            with attempt:
                response = await self.client.post(self.url, json=payload)
                response.raise_for_status()

    async def drain(self) -> None:
        """Wait until every scheduled snapshot has been handled."""
        while self._worker is not None and not self._worker.done():
            await asyncio.gather(self._worker, return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        if self._client is not None:
            await self._client.aclose()
            self._client = None
