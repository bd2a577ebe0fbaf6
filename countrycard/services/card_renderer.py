from countrycard.core.errors import (
    GeocodeFailure,
    LocationDenied,
    UnsupportedCapability,
    ValidationFailure,
)
from countrycard.schemas.country_card import (
    DisplayRecord,
    SearchOutcome,
    SearchSuccess,
    WeatherRecord,
)

PLACEHOLDER = "—"
NO_WEATHER = "Weather not available"


def _format_weather(weather: WeatherRecord) -> str:
    temp = weather.rounded_temperature
    temp_s = f"{temp}°C" if temp is not None else f"{PLACEHOLDER}°C"
    line = f"- Weather: {temp_s} {weather.condition_label}".rstrip()
    if weather.icon_url:
        line += f"\n- Icon: {weather.icon_url}"
    return line


def render_card(record: DisplayRecord) -> str:
    """Format a display record into the text card shown in the result area."""
    country = record.country
    capital = country.capital or PLACEHOLDER
    population = f"{country.population:,}" if country.population else PLACEHOLDER
    flag = country.flag_image_url or PLACEHOLDER
    weather = _format_weather(record.weather) if record.weather else NO_WEATHER

    return (
        f"{country.common_name}\n"
        f"- Capital: {capital} · Population: {population}\n"
        f"- Flag: {flag}\n"
        f"{weather}"
    )


def render_outcome(outcome: SearchOutcome) -> str:
    if isinstance(outcome, SearchSuccess):
        return render_card(outcome.record)

    if outcome.kind == ValidationFailure.kind:
        return outcome.message
    if outcome.kind == LocationDenied.kind:
        return f"Geolocation permission denied or unavailable: {outcome.message}"
    if outcome.kind in (GeocodeFailure.kind, UnsupportedCapability.kind):
        return f"Geolocation error: {outcome.message}"
    return f"Error: {outcome.message}"
