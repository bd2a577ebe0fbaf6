from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends

from countrycard.api.v1.di import get_board, get_geolocation_service, get_lookup_service
from countrycard.schemas.country_card import BoardState, SearchResponse
from countrycard.services.card_renderer import render_outcome
from countrycard.services.display_board import DisplayBoard
from countrycard.services.geolocation_service import GeolocationService
from countrycard.services.lookup_service import LookupService

router = APIRouter()


@router.get("/search", response_model=SearchResponse)
async def search_country(
    name: Optional[str] = None,
    lookup: LookupService = Depends(get_lookup_service),
):
    """
    Look a country up and fetch the weather for its capital.

    Failures are part of the response body, so this always answers 200.
    """
    outcome = await lookup.search(name)
    return SearchResponse(outcome=outcome, card=render_outcome(outcome))


@router.get("/locate", response_model=SearchResponse)
async def locate_country(
    geolocation: GeolocationService = Depends(get_geolocation_service),
):
    """Search for the country at the given (or detected) position."""
    outcome = await geolocation.locate()
    return SearchResponse(outcome=outcome, card=render_outcome(outcome))


@router.get("/result", response_model=BoardState)
async def current_result(board: DisplayBoard = Depends(get_board)):
    return board.snapshot()


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Country Weather Card",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
