import asyncio
import logging
from typing import Optional

from countrycard.core.errors import CountryCardError, LocationDenied, UnsupportedCapability
from countrycard.schemas.country_card import Position, SearchFailure, SearchOutcome
from countrycard.services.geocode_service import reverse_geocode_country
from countrycard.services.lookup_service import LookupService
from countrycard.services.position_providers import PositionProvider

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Timeout expired"


class GeolocationService:
    """
    Resolve the user's country from their position and run a search for it.

    Stages: position -> reverse geocode -> country -> weather. Any stage may
    fail and none is retried.
    """

    def __init__(self, lookup: LookupService, provider: Optional[PositionProvider]):
        self.lookup = lookup
        self.provider = provider

    async def current_position(self) -> Position:
        if self.provider is None:
            raise UnsupportedCapability("Geolocation not supported.")

        timeout = self.lookup.settings.GEOLOCATION_TIMEOUT_SECONDS
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def on_success(position: Position):
            if not future.done():
                future.set_result(position)

        def on_error(reason: str):
            if not future.done():
                future.set_exception(LocationDenied(reason))

        self.provider.get_current_position(on_success, on_error, timeout)
        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except asyncio.TimeoutError as e:
            raise LocationDenied(TIMEOUT_MESSAGE) from e

    async def _resolve_country(self) -> str:
        position = await self.current_position()
        logger.info("[GEO] position %.4f, %.4f", position.latitude, position.longitude)
        async with self.lookup.http_client() as client:
            return await reverse_geocode_country(
                client,
                self.lookup.settings.NOMINATIM_BASE,
                position.latitude,
                position.longitude,
            )

    async def locate(self) -> SearchOutcome:
        board = self.lookup.board
        board.clear()
        board.show_loading("Getting your location…")

        try:
            country = await self._resolve_country()
        except CountryCardError as e:
            logger.warning("[GEO] locate failed (%s): %s", e.kind, e)
            outcome = SearchFailure(kind=e.kind, message=str(e))
            board.hide_loading()
            board.publish(outcome)
            return outcome

        logger.info("[GEO] resolved country %r", country)
        return await self.lookup.search(country)
