"""Weather service: cache lookup, live fetch and hourly forecast gap-filling."""
import logging
import random
from typing import List, Optional

from conditions import condition_icon
from weather_cache import WeatherCache
from weather_data import (
    HOURLY_TARGET_HOURS,
    HourlyForecast,
    WeatherData,
    format_hour_label,
    hour_sort_key,
)
from weather_provider import (
    ApiKeyState,
    InvalidApiKeyError,
    WeatherProviderBase,
    WeatherProviderError,
)

# Hour from which synthesized hourly points use night icons
NIGHT_FROM_HOUR = 18


class WeatherService:
    """
    Resolves weather for a city from the cache or the provider.

    Every failure (no credential, rejected credential, network or parse
    errors) is reported as None; callers substitute mock data. There are no
    retries. Once the provider rejects the API key, the shared ApiKeyState
    stops all further requests.
    """

    def __init__(
        self,
        provider: Optional[WeatherProviderBase],
        cache: WeatherCache,
        key_state: ApiKeyState,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize weather service.

        Args:
            provider: Weather provider, or None when no API key is configured
            cache: Cache for snapshots, forecasts and icons
            key_state: Shared invalid-key flag
            rng: Random source for forecast gap-filling
        """
        self.provider = provider
        self.cache = cache
        self.key_state = key_state
        self.rng = rng or random.Random()

    def get_weather(self, city: str, force_refresh: bool = False) -> Optional[WeatherData]:
        """
        Get current weather for a city, enriched with the hourly forecast.

        Args:
            city: City name as sent to the provider
            force_refresh: Skip the cache read (the result is still cached)

        Returns:
            WeatherData, or None when live data is unavailable
        """
        if not self.key_state.is_valid():
            logging.info("Skipping API call - API key previously detected as invalid")
            return None

        if not force_refresh:
            cached = self.cache.get_weather(city)
            if cached is not None:
                logging.debug(f"Using cached weather data for {city}")
                return cached

        if self.provider is None:
            logging.info("No OpenWeather API key found, using mock data")
            return None

        try:
            weather = self.provider.get_current(city)
        except InvalidApiKeyError as e:
            logging.error(f"Weather fetch for {city} rejected: {e}")
            self.key_state.mark_invalid()
            return None
        except WeatherProviderError as e:
            logging.error(f"Error fetching weather data for {city}: {e}")
            return None

        baseline = HourlyForecast(
            time=format_hour_label(HOURLY_TARGET_HOURS[0]),
            temperature=weather.temperature,
            icon=weather.icon or condition_icon(weather.condition),
            condition=weather.condition,
            weather_code=weather.weather_code,
        )
        weather.hourly_forecast = self.get_hourly_forecast(city, force_refresh, baseline=baseline)

        self.cache.set_weather(city, weather)
        return weather

    def get_hourly_forecast(
        self,
        city: str,
        force_refresh: bool = False,
        baseline: Optional[HourlyForecast] = None
    ) -> Optional[List[HourlyForecast]]:
        """
        Get today's hourly forecast at HOURLY_TARGET_HOURS.

        Hours the provider no longer reports (e.g. late in the day) are
        synthesized from the first real point, or from ``baseline`` when the
        provider has nothing left for today.

        Returns:
            Points sorted by hour, or None when unavailable
        """
        if not self.key_state.is_valid():
            return None

        if not force_refresh:
            cached = self.cache.get_forecast(city)
            if cached is not None:
                logging.debug(f"Using cached forecast for {city}")
                return cached

        if self.provider is None:
            return None

        try:
            points = self.provider.get_hourly_forecast(city)
        except InvalidApiKeyError as e:
            logging.error(f"Forecast fetch for {city} rejected: {e}")
            self.key_state.mark_invalid()
            return None
        except WeatherProviderError as e:
            logging.error(f"Error fetching forecast data for {city}: {e}")
            return None

        forecast = self._fill_missing_hours(points, baseline)
        if not forecast:
            logging.warning(f"No forecast points available for {city}")
            return None

        self.cache.set_forecast(city, forecast)
        return forecast

    def _fill_missing_hours(
        self,
        points: List[HourlyForecast],
        baseline: Optional[HourlyForecast]
    ) -> List[HourlyForecast]:
        present = {hour_sort_key(point.time) for point in points}
        missing = [hour for hour in HOURLY_TARGET_HOURS if hour not in present]

        filled = list(points)
        if missing:
            base = points[0] if points else baseline
            if base is None:
                return []
            logging.debug(f"Synthesizing forecast hours {missing} from {base.time}")
            for hour in missing:
                filled.append(HourlyForecast(
                    time=format_hour_label(hour),
                    temperature=base.temperature + self.rng.randint(-2, 2),
                    icon=self._icon_for_hour(base, hour),
                    condition=base.condition,
                    weather_code=base.weather_code,
                ))

        return sorted(filled, key=lambda point: hour_sort_key(point.time))

    @staticmethod
    def _icon_for_hour(base: HourlyForecast, hour: int) -> str:
        suffix = "d" if hour < NIGHT_FROM_HOUR else "n"
        if base.icon and len(base.icon) == 3:
            return base.icon[:2] + suffix
        return condition_icon(base.condition, is_day=suffix == "d")

    def clear_cache(self, city: str) -> None:
        """Drop cached weather and forecast for a city."""
        logging.info(f"Clearing cached weather for {city}")
        self.cache.clear_city(city)

    def is_api_key_valid(self) -> bool:
        """
        Check the API key with an uncached request for a well-known city.

        A rejected key is recorded in the shared ApiKeyState.
        """
        if not self.key_state.is_valid() or self.provider is None:
            return False

        try:
            self.provider.get_current("London")
        except InvalidApiKeyError:
            self.key_state.mark_invalid()
            return False
        except WeatherProviderError as e:
            logging.error(f"Error checking API key validity: {e}")
            return False
        return True

    def get_icon(self, icon_code: str) -> Optional[bytes]:
        """Get icon image bytes through the icon cache."""
        cached = self.cache.get_icon(icon_code)
        if cached is not None:
            return cached

        if self.provider is None or not self.key_state.is_valid():
            return None

        try:
            image = self.provider.get_icon(icon_code)
        except WeatherProviderError as e:
            logging.warning(f"Icon {icon_code} unavailable: {e}")
            return None

        self.cache.set_icon(icon_code, image)
        return image
