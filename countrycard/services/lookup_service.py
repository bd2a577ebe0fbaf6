import logging
from typing import Callable, Optional

import httpx

from countrycard.core.config import ClientConfig, Settings
from countrycard.core.errors import CountryCardError, ValidationFailure
from countrycard.schemas.country_card import (
    DisplayRecord,
    RouteDecision,
    SearchFailure,
    SearchOutcome,
    SearchSuccess,
)
from countrycard.services.country_service import fetch_country
from countrycard.services.display_board import DisplayBoard
from countrycard.services.route_resolver import resolve_weather_route
from countrycard.services.weather_service import fetch_weather

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a country name."


class LookupService:
    """Country lookup followed by the capital's weather, one search at a time."""

    def __init__(
        self,
        settings: Settings,
        board: DisplayBoard,
        client_config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        config_loader: Optional[Callable[[], Optional[ClientConfig]]] = None,
    ):
        self.settings = settings
        self.board = board
        self.client_config = client_config
        self._transport = transport
        self._config_loader = config_loader

    def http_client(self) -> httpx.AsyncClient:
        # Country and weather calls carry no timeout of their own
        return httpx.AsyncClient(
            timeout=None,
            transport=self._transport,
            headers={"User-Agent": self.settings.USER_AGENT},
        )

    def current_client_config(self) -> Optional[ClientConfig]:
        # Read on every weather request; a broken file raises ConfigurationError
        if self._config_loader is not None:
            return self._config_loader()
        return self.client_config

    def resolve_weather_route(self) -> RouteDecision:
        return resolve_weather_route(
            self.current_client_config(),
            weather_base=self.settings.OPENWEATHER_BASE,
            public_base_url=self.settings.PUBLIC_BASE_URL,
            proxy_url=self.settings.WEATHER_PROXY_URL,
        )

    async def _lookup(self, query: str) -> DisplayRecord:
        async with self.http_client() as client:
            country = await fetch_country(
                client, self.settings.REST_COUNTRIES_BASE, query
            )
            self.board.show_loading("Fetching weather for capital…")

            capital = country.capital
            if capital is None:
                logger.info("[SEARCH] %s has no capital, skipping weather", country.common_name)
                return DisplayRecord(country=country)

            # The weather call needs the capital, so it always follows the country call
            route = self.resolve_weather_route()
            weather = await fetch_weather(client, capital, route)

        return DisplayRecord(country=country, weather=weather)

    async def search(self, query: Optional[str]) -> SearchOutcome:
        text = (query or "").strip()
        if not text:
            return SearchFailure(kind=ValidationFailure.kind, message=EMPTY_QUERY_MESSAGE)

        logger.info("[SEARCH] %r", text)
        self.board.query = text
        self.board.clear()
        self.board.show_loading("Fetching country info…")

        try:
            outcome: SearchOutcome = SearchSuccess(record=await self._lookup(text))
        except CountryCardError as e:
            logger.warning("[SEARCH] %r failed (%s): %s", text, e.kind, e)
            outcome = SearchFailure(kind=e.kind, message=str(e))
        finally:
            self.board.hide_loading()

        # Last search to settle owns the board
        self.board.publish(outcome)
        return outcome
