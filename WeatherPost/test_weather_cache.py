"""Tests for cache stores and the weather cache facade."""
import json
import pytest
import redis
from unittest.mock import Mock
from weather_cache import (
    CACHE_TTL,
    CacheStoreError,
    InMemoryCache,
    RedisCache,
    WeatherCache,
    cache_key,
)
from weather_data import HourlyForecast, WeatherData


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_weather():
    return WeatherData(
        city="Mandalay",
        temperature=33,
        condition="Clear",
        humidity=55,
        wind_speed=11,
        time="night",
        description="clear sky",
        is_real_data=True,
        last_updated="Oct 19, 02:00 PM",
        icon="01d",
        weather_code=800,
    )


def test_cache_key_lowercases_city():
    assert cache_key("weather", "Nay Pyi Taw") == "weather:nay pyi taw"
    assert cache_key("forecast", "Yangon") == "forecast:yangon"


def test_cache_ttls():
    assert CACHE_TTL == {"weather": 1800, "forecast": 3600, "icon": 604800}


def test_in_memory_cache_expiry(clock):
    """Test entries expire after their TTL."""
    store = InMemoryCache(clock=clock)
    store.set("weather:yangon", {"temperature": 30}, 60)

    clock.now += 59
    assert store.get("weather:yangon") == {"temperature": 30}

    clock.now += 1
    assert store.get("weather:yangon") is None


def test_in_memory_cache_overwrite_and_delete(clock):
    store = InMemoryCache(clock=clock)
    store.set("k", 1, 60)
    store.set("k", 2, 60)
    assert store.get("k") == 2

    store.delete("k")
    store.delete("missing")
    assert store.get("k") is None
    assert store.ping() is True


def test_redis_cache_set_uses_json_and_ttl():
    client = Mock()
    store = RedisCache(client)

    store.set("weather:yangon", {"city": "Yangon"}, 1800)

    client.set.assert_called_once_with("weather:yangon", json.dumps({"city": "Yangon"}), ex=1800)


def test_redis_cache_get_decodes_json():
    client = Mock()
    client.get.return_value = '{"city": "Yangon"}'
    store = RedisCache(client)

    assert store.get("weather:yangon") == {"city": "Yangon"}


def test_redis_cache_get_missing():
    client = Mock()
    client.get.return_value = None
    assert RedisCache(client).get("weather:yangon") is None


def test_redis_cache_wraps_errors():
    """Test Redis failures surface as CacheStoreError."""
    client = Mock()
    client.get.side_effect = redis.ConnectionError("connection refused")
    client.ping.side_effect = redis.TimeoutError("timed out")
    store = RedisCache(client)

    with pytest.raises(CacheStoreError):
        store.get("weather:yangon")
    with pytest.raises(CacheStoreError):
        store.ping()


def test_redis_cache_from_url_rejects_missing_scheme():
    with pytest.raises(CacheStoreError) as exc_info:
        RedisCache.from_url("localhost:6379")

    assert "Invalid Redis URL" in str(exc_info.value)


def test_redis_cache_invalid_json():
    client = Mock()
    client.get.return_value = "not json"
    with pytest.raises(CacheStoreError):
        RedisCache(client).get("weather:yangon")


def test_weather_cache_round_trip(clock, sample_weather):
    cache = WeatherCache(InMemoryCache(clock=clock))
    cache.set_weather("Mandalay", sample_weather)

    assert cache.get_weather("mandalay") == sample_weather
    assert cache.store.get("weather:mandalay")["isRealData"] is True


def test_weather_cache_weather_ttl(clock, sample_weather):
    cache = WeatherCache(InMemoryCache(clock=clock))
    cache.set_weather("Mandalay", sample_weather)

    clock.now += CACHE_TTL["weather"]
    assert cache.get_weather("Mandalay") is None


def test_weather_cache_forecast_ttl(clock):
    cache = WeatherCache(InMemoryCache(clock=clock))
    forecast = [HourlyForecast(time="10am", temperature=30, icon="01d", condition="Clear", weather_code=800)]
    cache.set_forecast("Yangon", forecast)

    clock.now += CACHE_TTL["forecast"] - 1
    assert cache.get_forecast("Yangon") == forecast

    clock.now += 1
    assert cache.get_forecast("Yangon") is None


def test_weather_cache_icon(clock):
    cache = WeatherCache(InMemoryCache(clock=clock))
    cache.set_icon("10d", b"\x89PNG data")

    assert cache.get_icon("10d") == b"\x89PNG data"
    clock.now += CACHE_TTL["icon"]
    assert cache.get_icon("10d") is None


def test_weather_cache_clear_city(clock, sample_weather):
    cache = WeatherCache(InMemoryCache(clock=clock))
    cache.set_weather("Mandalay", sample_weather)
    cache.set_forecast("Mandalay", [])
    cache.set_weather("Yangon", sample_weather)

    cache.clear_city("Mandalay")

    assert cache.get_weather("Mandalay") is None
    assert cache.get_forecast("Mandalay") is None
    assert cache.get_weather("Yangon") is not None


def test_weather_cache_swallows_store_errors(sample_weather):
    """Test store failures become misses and no-ops."""
    store = Mock()
    store.get.side_effect = CacheStoreError("down")
    store.set.side_effect = CacheStoreError("down")
    store.delete.side_effect = CacheStoreError("down")
    store.ping.side_effect = CacheStoreError("down")
    cache = WeatherCache(store)

    assert cache.get_weather("Yangon") is None
    assert cache.get_forecast("Yangon") is None
    cache.set_weather("Yangon", sample_weather)
    cache.clear_city("Yangon")
    assert cache.ping() is False


def test_weather_cache_discards_malformed_entries(clock):
    store = InMemoryCache(clock=clock)
    store.set("weather:yangon", {"city": "Yangon"}, 60)
    cache = WeatherCache(store)

    assert cache.get_weather("Yangon") is None
