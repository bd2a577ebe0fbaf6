import httpx
import pytest

from countrycard.core.config import ClientConfig, Settings
from countrycard.services.display_board import DisplayBoard
from countrycard.services.lookup_service import LookupService

DEPLOYED_BASE_URL = "https://card.example.com"

FRANCE = {
    "name": {"common": "France", "official": "French Republic"},
    "capital": ["Paris"],
    "population": 67000000,
    "flags": {"svg": "https://flagcdn.com/fr.svg", "png": "https://flagcdn.com/w320/fr.png"},
}
ANTARCTICA = {
    "name": {"common": "Antarctica"},
    "population": 1000,
    "flags": {"png": "https://flagcdn.com/w320/aq.png"},
}
PARIS_WEATHER = {
    "weather": [{"icon": "01d", "main": "Clear", "description": "clear sky"}],
    "main": {"temp": 18.4},
}


class FakeUpstream:
    """Stands in for REST Countries, OpenWeatherMap, the proxy, Nominatim and ipapi."""

    def __init__(self):
        self.requests = []
        self.countries = {"France": [FRANCE], "Antarctica": [ANTARCTICA]}
        self.weather = {"Paris": PARIS_WEATHER}
        self.weather_status = 200
        self.reverse = {"address": {"country": "France", "country_code": "fr"}}
        self.ip_position = {"latitude": 48.85, "longitude": 2.35}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        params = request.url.params

        if host == "restcountries.com":
            name = request.url.path.rsplit("/", 1)[-1]
            if name not in self.countries:
                return httpx.Response(404, json={"status": 404, "message": "Not Found"})
            return httpx.Response(200, json=self.countries[name])

        if host in ("api.openweathermap.org", "card.example.com"):
            city = params.get("q") or params.get("city")
            if self.weather_status != 200:
                return httpx.Response(self.weather_status, text='{"cod":401,"message":"Invalid API key"}')
            if city not in self.weather:
                return httpx.Response(404, json={"cod": "404", "message": "city not found"})
            return httpx.Response(200, json=self.weather[city])

        if host == "nominatim.openstreetmap.org":
            return httpx.Response(200, json=self.reverse)

        if host == "ipapi.co":
            return httpx.Response(200, json=self.ip_position)

        return httpx.Response(502, text="unexpected host")

    def hosts(self):
        return [r.url.host for r in self.requests]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_settings(**overrides) -> Settings:
    values = {
        "PUBLIC_BASE_URL": DEPLOYED_BASE_URL,
        "WEATHER_PROXY_URL": None,
        "GEOLOCATION_PROVIDER": "ip",
        "GEOLOCATION_TIMEOUT_SECONDS": 10,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def board():
    return DisplayBoard()


@pytest.fixture
def client_config():
    return ClientConfig(OPENWEATHER_API_KEY="local-key")


@pytest.fixture
def lookup(settings, board, client_config, upstream):
    return LookupService(settings, board, client_config=client_config, transport=upstream.transport)
