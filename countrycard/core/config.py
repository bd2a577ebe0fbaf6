import json
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from countrycard.core.errors import ConfigurationError

# Resolve project root and .env so it loads even if you start uvicorn from a subfolder
PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    # Loads from OS environment first; .env is used for local dev
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Upstream services
    REST_COUNTRIES_BASE: str = "https://restcountries.com/v3.1/name"
    OPENWEATHER_BASE: str = "https://api.openweathermap.org/data/2.5/weather"
    NOMINATIM_BASE: str = "https://nominatim.openstreetmap.org/reverse"
    IP_GEOLOCATION_URL: str = "https://ipapi.co/json/"
    USER_AGENT: str = "countrycard/1.0"

    # Deployment topology
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    WEATHER_PROXY_URL: Optional[str] = None
    CLIENT_CONFIG_PATH: Path = Path("config.json")

    # Geolocation
    GEOLOCATION_PROVIDER: Literal["ip", "none"] = "ip"
    GEOLOCATION_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    LOG_LEVEL: str = "INFO"


class ProxySettings(BaseSettings):
    """Server-held secret for the weather proxy, read fresh on every call."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    OPENWEATHER_API_KEY: Optional[str] = None


class ClientConfig(BaseModel):
    """Locally injected client configuration (the only value is the weather key)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    openweather_api_key: Optional[str] = Field(
        default=None, alias="OPENWEATHER_API_KEY", repr=False
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def get_proxy_api_key() -> Optional[str]:
    key = ProxySettings().OPENWEATHER_API_KEY
    return key.strip() if key and key.strip() else None


def load_client_config(path: Path) -> Optional[ClientConfig]:
    """Read the optional client config file; a missing file is not an error."""
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    if not path.exists():
        return None

    try:
        raw = json.loads(path.read_text(encoding="utf-8") or "{}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Client config is not valid JSON: {path.name}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Client config must be a JSON object: {path.name}")

    try:
        return ClientConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Client config is invalid: {path.name}") from e
