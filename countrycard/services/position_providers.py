import asyncio
import logging
from typing import Callable, Optional, Protocol, Set

import httpx

from countrycard.core.errors import TransportError
from countrycard.schemas.country_card import Position

logger = logging.getLogger(__name__)

PositionCallback = Callable[[Position], None]
ErrorCallback = Callable[[str], None]


class PositionProvider(Protocol):
    """Callback-style device position capability."""

    def get_current_position(
        self,
        on_success: PositionCallback,
        on_error: ErrorCallback,
        timeout: float,
    ) -> None: ...


class FixedPositionProvider:
    """Reports coordinates supplied by the caller."""

    def __init__(self, position: Position):
        self.position = position

    def get_current_position(self, on_success, on_error, timeout):
        on_success(self.position)


class IpPositionProvider:
    """Approximates the device position from its public IP address."""

    def __init__(
        self,
        url: str,
        user_agent: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.user_agent = user_agent
        self._transport = transport
        self._pending: Set[asyncio.Task] = set()

    async def _fetch_position(self, timeout: float) -> Position:
        async with httpx.AsyncClient(
            timeout=timeout,
            transport=self._transport,
            headers={"User-Agent": self.user_agent},
        ) as client:
            try:
                r = await client.get(self.url)
                r.raise_for_status()
                payload = r.json()
            except httpx.HTTPError as e:
                raise TransportError(f"Position lookup failed: {e}") from e
            except ValueError as e:
                raise TransportError("Position lookup returned malformed data") from e

        try:
            return Position(
                latitude=float(payload["latitude"]),
                longitude=float(payload["longitude"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError("Position unavailable") from e

    async def _report(self, on_success, on_error, timeout):
        try:
            position = await self._fetch_position(timeout)
        except TransportError as e:
            logger.warning("[GEO] %s", e)
            on_error(str(e))
            return
        on_success(position)

    def get_current_position(self, on_success, on_error, timeout):
        task = asyncio.get_running_loop().create_task(
            self._report(on_success, on_error, timeout)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
