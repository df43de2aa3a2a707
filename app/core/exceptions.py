"""Error types shared by the weather pipeline and configuration."""

from typing import Iterable


class WeatherFetchError(Exception):
    """The weather provider could not deliver both payloads."""


class MalformedResponseError(WeatherFetchError):
    """The provider answered, but not with the shape we consume."""


class ConfigurationMissing(Exception):
    """A required setting is absent from the environment."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(
            f"Missing required configuration: {', '.join(self.fields)}"
        )
