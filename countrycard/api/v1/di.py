from functools import lru_cache, partial
from typing import Callable, Optional

import httpx
from fastapi import Depends, HTTPException, Query

from countrycard.core.config import ClientConfig, Settings, get_settings, load_client_config
from countrycard.schemas.country_card import Position
from countrycard.services.display_board import DisplayBoard
from countrycard.services.geolocation_service import GeolocationService
from countrycard.services.lookup_service import LookupService
from countrycard.services.position_providers import (
    FixedPositionProvider,
    IpPositionProvider,
    PositionProvider,
)


@lru_cache(maxsize=1)
def get_board() -> DisplayBoard:
    return DisplayBoard()


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outgoing calls; None means a real network connection."""
    return None


def get_client_config_loader(
    settings: Settings = Depends(get_settings),
) -> Callable[[], Optional[ClientConfig]]:
    return partial(load_client_config, settings.CLIENT_CONFIG_PATH)


def get_lookup_service(
    settings: Settings = Depends(get_settings),
    board: DisplayBoard = Depends(get_board),
    config_loader: Callable[[], Optional[ClientConfig]] = Depends(get_client_config_loader),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> LookupService:
    return LookupService(settings, board, transport=transport, config_loader=config_loader)


def get_position_provider(
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> Optional[PositionProvider]:
    if (lat is None) != (lon is None):
        raise HTTPException(status_code=400, detail="Both lat and lon are required")
    if lat is not None and lon is not None:
        return FixedPositionProvider(Position(latitude=lat, longitude=lon))
    if settings.GEOLOCATION_PROVIDER == "ip":
        return IpPositionProvider(
            settings.IP_GEOLOCATION_URL, settings.USER_AGENT, transport=transport
        )
    return None


def get_geolocation_service(
    lookup: LookupService = Depends(get_lookup_service),
    provider: Optional[PositionProvider] = Depends(get_position_provider),
) -> GeolocationService:
    return GeolocationService(lookup, provider)
