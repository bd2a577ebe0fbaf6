import math
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

OPENWEATHER_ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


class CountryRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    common_name: str
    capital_cities: List[str] = []
    population: Optional[int] = Field(default=None, ge=0)
    flag_image_url: Optional[str] = None

    @property
    def capital(self) -> Optional[str]:
        return self.capital_cities[0] if self.capital_cities else None


class WeatherRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature_celsius: Optional[float] = None
    condition_label: str = ""
    icon_code: Optional[str] = None

    @property
    def rounded_temperature(self) -> Optional[int]:
        # Half-up, so 18.5 -> 19 and -0.5 -> 0
        if self.temperature_celsius is None:
            return None
        return int(math.floor(self.temperature_celsius + 0.5))

    @property
    def icon_url(self) -> Optional[str]:
        if not self.icon_code:
            return None
        return OPENWEATHER_ICON_URL.format(icon=self.icon_code)


class DisplayRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    country: CountryRecord
    weather: Optional[WeatherRecord] = None


class SearchSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    record: DisplayRecord


class SearchFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failure"] = "failure"
    kind: str
    message: str


SearchOutcome = Annotated[
    Union[SearchSuccess, SearchFailure], Field(discriminator="status")
]


class DirectRoute(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["direct"] = "direct"
    credential: str = Field(repr=False, exclude=True)
    endpoint: str


class ProxiedRoute(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["proxied"] = "proxied"
    endpoint: str


RouteDecision = Annotated[Union[DirectRoute, ProxiedRoute], Field(discriminator="kind")]


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class BoardState(BaseModel):
    """Snapshot of what the result area currently shows."""

    query: Optional[str] = None
    loading: Optional[str] = None
    outcome: Optional[SearchOutcome] = None
    card: str = ""


class SearchResponse(BaseModel):
    outcome: SearchOutcome
    card: str
