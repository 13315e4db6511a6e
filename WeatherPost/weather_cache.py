"""Cache stores for weather data with per-category TTLs."""
import base64
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

import redis

from weather_data import HourlyForecast, WeatherData

# TTLs in seconds
CACHE_TTL = {
    "weather": 30 * 60,
    "forecast": 60 * 60,
    "icon": 7 * 24 * 60 * 60,  # icons rarely change
}


def cache_key(category: str, name: str) -> str:
    """Build a cache key, e.g. ("weather", "Yangon") -> "weather:yangon"."""
    return f"{category}:{name.lower()}"


class CacheStoreError(Exception):
    """Exception raised when a cache store cannot be reached or decoded."""
    pass


class CacheStore(ABC):
    """Abstract key-value store with per-entry expiry."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        Get a value, or None if missing or expired.

        Raises:
            CacheStoreError: If the store fails
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """
        Store a JSON-compatible value that expires after ttl_seconds.

        Raises:
            CacheStoreError: If the store fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def ping(self) -> bool:
        pass


class InMemoryCache(CacheStore):
    """Process-local cache; entries expire lazily when read."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry["expires_at"]:
            logging.debug(f"Cache entry expired: {key}")
            del self._entries[key]
            return None
        return entry["value"]

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._entries[key] = {
            "value": value,
            "expires_at": self._clock() + ttl_seconds,
        }

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def ping(self) -> bool:
        return True

    def clear(self) -> None:
        """Clear all cached data."""
        self._entries.clear()


class RedisCache(CacheStore):
    """Cache backed by a Redis server; values are stored as JSON strings."""

    def __init__(self, client: "redis.Redis"):
        self._client = client

    @classmethod
    def from_url(cls, url: str, timeout: int = 5) -> "RedisCache":
        try:
            client = redis.Redis.from_url(
                url,
                decode_responses=True,
                socket_timeout=timeout,
                socket_connect_timeout=timeout,
            )
        except ValueError as e:
            raise CacheStoreError(f"Invalid Redis URL: {e}") from e
        return cls(client)

    def get(self, key: str) -> Optional[Any]:
        try:
            raw = self._client.get(key)
        except redis.RedisError as e:
            raise CacheStoreError(f"Redis GET {key} failed: {e}") from e
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise CacheStoreError(f"Invalid JSON cached under {key}: {e}") from e

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            self._client.set(key, json.dumps(value, ensure_ascii=False), ex=ttl_seconds)
        except redis.RedisError as e:
            raise CacheStoreError(f"Redis SET {key} failed: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except redis.RedisError as e:
            raise CacheStoreError(f"Redis DEL {key} failed: {e}") from e

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            raise CacheStoreError(f"Redis PING failed: {e}") from e


class WeatherCache:
    """
    Typed access to a CacheStore for weather, forecast and icon entries.

    Store failures are logged and never propagated: reads become misses,
    writes become no-ops.
    """

    def __init__(self, store: CacheStore):
        self.store = store

    def _get(self, key: str) -> Optional[Any]:
        try:
            return self.store.get(key)
        except CacheStoreError as e:
            logging.error(f"Cache error getting {key}: {e}")
            return None

    def _set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            self.store.set(key, value, ttl_seconds)
        except CacheStoreError as e:
            logging.error(f"Cache error setting {key}: {e}")

    def get_weather(self, city: str) -> Optional[WeatherData]:
        data = self._get(cache_key("weather", city))
        if data is None:
            return None
        try:
            return WeatherData.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logging.warning(f"Discarding malformed cached weather for {city}: {e}")
            return None

    def set_weather(self, city: str, weather: WeatherData) -> None:
        self._set(cache_key("weather", city), weather.to_dict(), CACHE_TTL["weather"])

    def get_forecast(self, city: str) -> Optional[List[HourlyForecast]]:
        data = self._get(cache_key("forecast", city))
        if data is None:
            return None
        try:
            return [HourlyForecast.from_dict(point) for point in data]
        except (KeyError, TypeError, ValueError) as e:
            logging.warning(f"Discarding malformed cached forecast for {city}: {e}")
            return None

    def set_forecast(self, city: str, forecast: List[HourlyForecast]) -> None:
        self._set(
            cache_key("forecast", city),
            [point.to_dict() for point in forecast],
            CACHE_TTL["forecast"],
        )

    def get_icon(self, icon_code: str) -> Optional[bytes]:
        data = self._get(cache_key("icon", icon_code))
        if data is None:
            return None
        try:
            return base64.b64decode(data)
        except (TypeError, ValueError) as e:
            logging.warning(f"Discarding malformed cached icon {icon_code}: {e}")
            return None

    def set_icon(self, icon_code: str, image: bytes) -> None:
        encoded = base64.b64encode(image).decode("ascii")
        self._set(cache_key("icon", icon_code), encoded, CACHE_TTL["icon"])

    def clear_city(self, city: str) -> None:
        """Remove the weather and forecast entries for a city."""
        for category in ("weather", "forecast"):
            key = cache_key(category, city)
            try:
                self.store.delete(key)
            except CacheStoreError as e:
                logging.error(f"Cache error clearing {key}: {e}")

    def ping(self) -> bool:
        try:
            return self.store.ping()
        except CacheStoreError as e:
            logging.error(f"Cache connectivity error: {e}")
            return False
