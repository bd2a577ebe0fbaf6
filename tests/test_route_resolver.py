import pytest

from countrycard.core.config import ClientConfig
from countrycard.core.errors import ConfigurationError
from countrycard.schemas.country_card import DirectRoute, ProxiedRoute
from countrycard.services.route_resolver import is_local_development, resolve_weather_route

WEATHER_BASE = "https://api.openweathermap.org/data/2.5/weather"


def resolve(config, base_url="https://card.example.com", proxy_url=None):
    return resolve_weather_route(
        config, weather_base=WEATHER_BASE, public_base_url=base_url, proxy_url=proxy_url
    )


@pytest.mark.parametrize("base_url", ["http://localhost:8000", "https://card.example.com"])
def test_credential_always_goes_direct(base_url):
    route = resolve(ClientConfig(OPENWEATHER_API_KEY="abc"), base_url, proxy_url="https://proxy.test/w")

    assert route == DirectRoute(credential="abc", endpoint=WEATHER_BASE)
    assert "abc" not in repr(route)
    assert "credential" not in route.model_dump()


@pytest.mark.parametrize("config", [None, ClientConfig(), ClientConfig(OPENWEATHER_API_KEY="  ")])
def test_missing_credential_goes_through_proxy(config):
    route = resolve(config)

    assert route == ProxiedRoute(endpoint="https://card.example.com/v1/weather")


def test_configured_proxy_is_used_in_local_dev():
    route = resolve(None, "http://127.0.0.1:8000", proxy_url="http://127.0.0.1:8000/v1/weather")

    assert isinstance(route, ProxiedRoute)
    assert route.endpoint == "http://127.0.0.1:8000/v1/weather"


def test_local_dev_without_credential_or_proxy_fails():
    with pytest.raises(ConfigurationError, match="API key not found"):
        resolve(None, "http://localhost:8000")


@pytest.mark.parametrize(
    "url,expected",
    [
        ("http://localhost:8000", True),
        ("http://127.0.0.1", True),
        ("https://card.example.com", False),
        ("https://localhost.example.com", False),
    ],
)
def test_is_local_development(url, expected):
    assert is_local_development(url) is expected
