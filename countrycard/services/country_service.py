import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from countrycard.core.errors import CountryNotFound
from countrycard.schemas.country_card import CountryRecord

logger = logging.getLogger(__name__)


def _country_url(base: str, name: str) -> str:
    return f"{base.rstrip('/')}/{quote(name, safe='')}"


def _coerce_population(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value) if value >= 0 else None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def parse_country(details: Dict[str, Any]) -> CountryRecord:
    """Normalize one REST Countries entry into a CountryRecord."""
    name = details.get("name") or {}
    if not isinstance(name, dict):
        raise CountryNotFound("Country not found (malformed response)")
    common_name = _text(name.get("common")) or _text(name.get("official")) or "Unknown country"

    capital = details.get("capital")
    capitals = [c for c in capital if _text(c)] if isinstance(capital, list) else []

    flags = details.get("flags")
    if not isinstance(flags, dict):
        flags = {}
    flag_url = _text(flags.get("svg")) or _text(flags.get("png"))

    return CountryRecord(
        common_name=common_name,
        capital_cities=capitals,
        population=_coerce_population(details.get("population")),
        flag_image_url=flag_url,
    )


async def fetch_country(
    client: httpx.AsyncClient, base: str, name: str
) -> CountryRecord:
    """
    Look a country up by name and return the first plausible match.

    REST Countries may return several entries for a partial name; only the
    first one is used.
    """
    url = _country_url(base, name)
    try:
        r = await client.get(url, params={"fullText": "false"})
    except httpx.HTTPError as e:
        # Transport failures are reported as an unresolved country too
        logger.warning("[RESTCOUNTRIES] request for %r failed: %s", name, e)
        raise CountryNotFound(f"Country lookup failed: {e}") from e

    if not r.is_success:
        logger.info("[RESTCOUNTRIES] %r -> HTTP %s", name, r.status_code)
        raise CountryNotFound(f"Country not found (status {r.status_code})")

    try:
        data = r.json()
    except ValueError as e:
        raise CountryNotFound("Country not found (malformed response)") from e

    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        raise CountryNotFound("Country not found")

    country = parse_country(data[0])
    logger.info(
        "[RESTCOUNTRIES] %r resolved to %s (%d match(es))",
        name,
        country.common_name,
        len(data),
    )
    return country
