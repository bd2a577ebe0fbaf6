import logging
from typing import Any, Dict

import httpx

from countrycard.core.errors import WeatherUnavailable
from countrycard.schemas.country_card import DirectRoute, RouteDecision, WeatherRecord

logger = logging.getLogger(__name__)


MALFORMED_MESSAGE = "Weather fetch failed: malformed response"


def parse_weather(data: Dict[str, Any]) -> WeatherRecord:
    """Pick the fields the card shows out of an OpenWeatherMap payload."""
    conditions = data.get("weather") or []
    main = data.get("main") or {}
    if not isinstance(conditions, list) or not isinstance(main, dict):
        raise WeatherUnavailable(MALFORMED_MESSAGE)

    first = conditions[0] if conditions else {}
    if not isinstance(first, dict):
        raise WeatherUnavailable(MALFORMED_MESSAGE)

    temp = main.get("temp")
    if isinstance(temp, bool) or not isinstance(temp, (int, float)):
        temp = None

    label = first.get("main") or first.get("description") or ""
    icon = first.get("icon")
    return WeatherRecord(
        temperature_celsius=temp,
        condition_label=label if isinstance(label, str) else "",
        icon_code=icon if isinstance(icon, str) and icon else None,
    )


def _request_params(city: str, route: RouteDecision) -> Dict[str, str]:
    if isinstance(route, DirectRoute):
        return {"q": city, "units": "metric", "appid": route.credential}
    return {"city": city}


async def fetch_weather(
    client: httpx.AsyncClient, city: str, route: RouteDecision
) -> WeatherRecord:
    try:
        r = await client.get(route.endpoint, params=_request_params(city, route))
    except httpx.HTTPError as e:
        logger.warning("[WEATHER] %s route for %r failed: %s", route.kind, city, e)
        raise WeatherUnavailable(f"Weather fetch failed: {e}") from e

    if not r.is_success:
        logger.warning("[WEATHER] %s route for %r -> HTTP %s", route.kind, city, r.status_code)
        raise WeatherUnavailable(
            f"Weather fetch failed: {r.status_code} {r.reason_phrase} {r.text}".strip()
        )

    try:
        data = r.json()
    except ValueError as e:
        raise WeatherUnavailable(MALFORMED_MESSAGE) from e
    if not isinstance(data, dict):
        raise WeatherUnavailable(MALFORMED_MESSAGE)

    logger.info("[WEATHER] %r fetched via %s route", city, route.kind)
    return parse_weather(data)
