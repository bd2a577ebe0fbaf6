class CountryCardError(RuntimeError):
    """Base for every failure a lookup can surface to the user."""

    kind = "Error"


class ValidationFailure(CountryCardError):
    kind = "ValidationFailure"


class CountryNotFound(CountryCardError):
    """Raised when the country service does not resolve the query."""

    kind = "NotFound"


class WeatherUnavailable(CountryCardError):
    """Raised when the weather call fails or returns something unusable."""

    kind = "WeatherUnavailable"


class UnsupportedCapability(CountryCardError):
    kind = "UnsupportedCapability"


class LocationDenied(CountryCardError):
    """Raised on position permission denial or timeout."""

    kind = "LocationDenied"


class GeocodeFailure(CountryCardError):
    kind = "GeocodeFailure"


class ConfigurationError(CountryCardError):
    """Raised when neither a weather credential nor a usable proxy is configured."""

    kind = "ConfigurationError"


class TransportError(CountryCardError):
    kind = "TransportError"
