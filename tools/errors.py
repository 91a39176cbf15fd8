"""Error taxonomy shared by the relay and the fetch pipeline."""


class WeatherError(Exception):
    """Base error for weather acquisition failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CredentialMissing(WeatherError):
    """OPENWEATHERMAP_API_KEY is not configured."""

    status_code = 500


class LocationNotFound(WeatherError):
    """Geocoding returned no results."""

    status_code = 400


class UpstreamUnavailable(WeatherError):
    """Network error, timeout or non-2xx status from a provider."""

    status_code = 502


class MalformedPayload(WeatherError):
    """Provider or relay JSON did not have the expected shape."""

    status_code = 502


class RelayUnreachable(WeatherError):
    """The client could not reach the relay at all."""

    status_code = 503
