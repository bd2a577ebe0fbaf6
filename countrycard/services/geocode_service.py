import logging

import httpx

from countrycard.core.errors import GeocodeFailure

logger = logging.getLogger(__name__)

NO_COUNTRY_MESSAGE = "Could not determine country from coordinates."


async def reverse_geocode_country(
    client: httpx.AsyncClient, base: str, latitude: float, longitude: float
) -> str:
    """Turn coordinates into a country name using Nominatim's reverse endpoint."""
    params = {"format": "jsonv2", "lat": latitude, "lon": longitude}
    try:
        r = await client.get(base, params=params)
        r.raise_for_status()
        data = r.json()
    except httpx.HTTPError as e:
        logger.warning("[GEO] reverse geocode failed: %s", e)
        raise GeocodeFailure(f"Reverse geocoding failed: {e}") from e
    except ValueError as e:
        raise GeocodeFailure(NO_COUNTRY_MESSAGE) from e

    address = data.get("address") if isinstance(data, dict) else None
    country = address.get("country") if isinstance(address, dict) else None
    if not isinstance(country, str) or not country.strip():
        logger.info("[GEO] no country for (%s, %s)", latitude, longitude)
        raise GeocodeFailure(NO_COUNTRY_MESSAGE)
    return country.strip()
