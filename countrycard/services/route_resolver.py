from typing import Optional
from urllib.parse import urlparse

from countrycard.core.config import ClientConfig
from countrycard.core.errors import ConfigurationError
from countrycard.schemas.country_card import DirectRoute, ProxiedRoute, RouteDecision

LOCAL_HOSTNAMES = {"localhost", "127.0.0.1"}
PROXY_PATH = "/v1/weather"


def is_local_development(base_url: str) -> bool:
    return (urlparse(base_url).hostname or "") in LOCAL_HOSTNAMES


def resolve_weather_route(
    client_config: Optional[ClientConfig],
    *,
    weather_base: str,
    public_base_url: str,
    proxy_url: Optional[str] = None,
) -> RouteDecision:
    """
    Decide how the next weather request reaches OpenWeatherMap.

    A local credential always wins. Without one the request goes through the
    proxy: the explicitly configured one, or this app's own proxy endpoint
    when deployed. In local development there is no implicit proxy, so a
    missing credential is a configuration error.
    """
    credential = client_config.openweather_api_key if client_config else None
    if credential and credential.strip():
        return DirectRoute(credential=credential.strip(), endpoint=weather_base)

    if proxy_url:
        return ProxiedRoute(endpoint=proxy_url)

    if is_local_development(public_base_url):
        raise ConfigurationError(
            "OpenWeather API key not found. Add config.json in local dev."
        )

    return ProxiedRoute(endpoint=f"{public_base_url.rstrip('/')}{PROXY_PATH}")
