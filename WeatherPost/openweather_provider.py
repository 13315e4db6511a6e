"""OpenWeather Current Weather and 5 day / 3 hour Forecast API provider."""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import requests

from conditions import map_weather_condition
from weather_data import (
    HOURLY_TARGET_HOURS,
    HourlyForecast,
    WeatherData,
    format_hour_label,
    format_last_updated,
    time_of_day,
)
from weather_provider import InvalidApiKeyError, WeatherProviderBase, WeatherProviderError


def _wind_kmh(speed_ms: float) -> int:
    """Convert wind speed from m/s to rounded km/h."""
    return round(speed_ms * 3.6)


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using the free OpenWeather APIs.

    Current weather: https://openweathermap.org/current
    Forecast: https://openweathermap.org/forecast5
    Cities are passed by name (``q=``), requests takes care of URL encoding.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
    FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
    ICON_URL = "https://openweathermap.org/img/wn/{icon_code}@2x.png"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        lang: str = "en",
        timeout: int = 10,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units ("metric", "imperial", or "standard")
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
            clock: Returns the current local time (defaults to datetime.now)
        """
        self.api_key = api_key
        self.units = units
        self.lang = lang
        self.timeout = timeout
        self.clock = clock or datetime.now

    def _request(self, url: str, city: str) -> Dict[str, Any]:
        params = {
            "q": city,
            "appid": self.api_key,
            "units": self.units,
            "lang": self.lang,
        }
        logging.info(f"Making OpenWeather API request: {url} (city={city})")
        logging.debug(f"Request parameters: units={self.units}, lang={self.lang}")

        response = requests.get(url, params=params, timeout=self.timeout)
        logging.info(f"API response status: {response.status_code}")

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        data = response.json()
        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        return data

    def get_current(self, city: str) -> WeatherData:
        """
        Fetch current weather for a city.

        Returns:
            WeatherData: Normalized snapshot with is_real_data=True

        Raises:
            InvalidApiKeyError: On HTTP 401 or an "Invalid API key" message
            WeatherProviderError: If the API request fails
        """
        try:
            data = self._request(self.BASE_URL, city)

            weather_array = data.get("weather", [])
            if not weather_array:
                logging.error("Response missing 'weather' array")
                raise WeatherProviderError("Response missing 'weather' array")
            weather = weather_array[0]
            logging.debug(f"Weather condition: {weather.get('id')} - {weather.get('description')}")

            main_data = data.get("main", {})
            if not main_data:
                raise WeatherProviderError("Response missing 'main' block")

            wind_data = data.get("wind", {})
            wind_speed = wind_data.get("speed", 0.0) if wind_data else 0.0

            code = int(weather["id"])
            now = self.clock()
            weather_data = WeatherData(
                city=city,
                temperature=round(main_data["temp"]),
                condition=map_weather_condition(code),
                humidity=int(main_data.get("humidity", 0)),
                wind_speed=_wind_kmh(wind_speed),
                time=time_of_day(now.hour),
                description=weather.get("description", ""),
                is_real_data=True,
                last_updated=format_last_updated(int(data["dt"])),
                icon=weather.get("icon"),
                weather_code=code,
            )

            logging.info(
                f"Successfully parsed weather for {city}: "
                f"{weather_data.temperature}°C, {weather_data.condition}"
            )
            return weather_data

        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")
        except (KeyError, IndexError, AttributeError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

    def get_hourly_forecast(self, city: str) -> List[HourlyForecast]:
        """
        Fetch the forecast list and keep today's entries at the target hours.

        Raises:
            InvalidApiKeyError: On HTTP 401 or an "Invalid API key" message
            WeatherProviderError: If the API request fails
        """
        try:
            data = self._request(self.FORECAST_URL, city)
            today = self.clock().date()

            points = []
            for entry in data.get("list", []):
                moment = datetime.fromtimestamp(int(entry["dt"]))
                if moment.date() != today or moment.hour not in HOURLY_TARGET_HOURS:
                    continue
                weather = entry["weather"][0]
                code = int(weather["id"])
                points.append(HourlyForecast(
                    time=format_hour_label(moment.hour),
                    temperature=round(entry["main"]["temp"]),
                    icon=weather.get("icon", ""),
                    condition=map_weather_condition(code),
                    weather_code=code,
                ))

            logging.info(f"Forecast for {city}: {len(points)} of {len(HOURLY_TARGET_HOURS)} target hours available")
            return points

        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during forecast request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")
        except (KeyError, IndexError, AttributeError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse forecast response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse forecast: {str(e)}")

    def get_icon(self, icon_code: str) -> bytes:
        """Download the 2x PNG for an OpenWeather icon code."""
        url = self.ICON_URL.format(icon_code=icon_code)
        try:
            logging.debug(f"Downloading icon: {url}")
            response = requests.get(url, timeout=self.timeout)
            if not response.ok:
                raise WeatherProviderError(f"Icon {icon_code}: HTTP {response.status_code}")
            return response.content
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error downloading icon {icon_code}: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            if response.status_code == 401:
                raise InvalidApiKeyError(f"HTTP 401: {response.text[:200]}")
            raise WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        if not isinstance(error_data, dict):
            logging.error(f"Unexpected error response: HTTP {response.status_code}, body: {str(error_data)[:500]}")
            if response.status_code == 401:
                raise InvalidApiKeyError(f"HTTP 401: {str(error_data)[:200]}")
            raise WeatherProviderError(f"HTTP {response.status_code}: {str(error_data)[:200]}")

        cod = error_data.get("cod", response.status_code)
        message = str(error_data.get("message", "Unknown error"))
        logging.error(f"OpenWeather API error response: {error_data}")

        error_msg = f"OpenWeather API error {cod}: {message}"
        if response.status_code == 401 or "Invalid API key" in message:
            raise InvalidApiKeyError(error_msg)
        raise WeatherProviderError(error_msg)
