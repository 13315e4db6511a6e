"""Weather provider abstraction - allows swapping different weather APIs."""
import logging
from abc import ABC, abstractmethod
from typing import List

from weather_data import HourlyForecast, WeatherData


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city: str) -> WeatherData:
        """
        Fetch current weather data for a city.

        Returns:
            WeatherData: Current weather information (is_real_data=True)

        Raises:
            InvalidApiKeyError: If the provider rejects the credential
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_hourly_forecast(self, city: str) -> List[HourlyForecast]:
        """
        Fetch today's forecast points at HOURLY_TARGET_HOURS.

        Returns:
            List of the points the provider has for today, possibly empty

        Raises:
            InvalidApiKeyError: If the provider rejects the credential
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_icon(self, icon_code: str) -> bytes:
        """
        Fetch the image for a provider icon code.

        Raises:
            WeatherProviderError: If the provider fails to fetch the image
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class InvalidApiKeyError(WeatherProviderError):
    """Exception raised when the provider rejects the configured API key."""
    pass


class ApiKeyState:
    """
    Process-wide record of whether the API key is still usable.

    Once marked invalid it stays invalid for the life of the object; the
    composition root owns one instance and shares it with every service.
    """

    def __init__(self):
        self._invalid = False

    def is_valid(self) -> bool:
        return not self._invalid

    def mark_invalid(self) -> None:
        if not self._invalid:
            logging.error("Invalid OpenWeather API key detected, using mock data from now on")
        self._invalid = True

    def reset(self) -> None:
        """Forget a previous invalid-key detection (tests only)."""
        self._invalid = False
