"""Tests for weather_data module."""
import pytest
from datetime import datetime
from weather_data import (
    HourlyForecast,
    WeatherData,
    format_hour_label,
    format_last_updated,
    hour_sort_key,
    time_of_day,
)


@pytest.fixture
def sample_weather():
    """Sample weather snapshot with an hourly forecast."""
    return WeatherData(
        city="Yangon",
        temperature=31,
        condition="Rain",
        humidity=78,
        wind_speed=18,
        time="morning",
        description="light rain",
        is_real_data=True,
        last_updated="Oct 19, 08:30 AM",
        icon="10d",
        weather_code=500,
        hourly_forecast=[
            HourlyForecast(time="10am", temperature=30, icon="10d", condition="Rain", weather_code=500),
            HourlyForecast(time="12pm", temperature=32, icon="10d", condition="Rain"),
        ],
    )


def test_weather_data_to_dict_uses_cache_keys(sample_weather):
    """Test serialization uses the camelCase keys stored in the cache."""
    data = sample_weather.to_dict()

    assert data["windSpeed"] == 18
    assert data["isRealData"] is True
    assert data["lastUpdated"] == "Oct 19, 08:30 AM"
    assert data["weatherCode"] == 500
    assert data["hourlyForecast"][0] == {
        "time": "10am",
        "temperature": 30,
        "icon": "10d",
        "condition": "Rain",
        "weatherCode": 500,
    }
    assert "weatherCode" not in data["hourlyForecast"][1]


def test_weather_data_from_dict_restores_snapshot(sample_weather):
    """Test a cached dict turns back into an equal snapshot."""
    assert WeatherData.from_dict(sample_weather.to_dict()) == sample_weather


def test_weather_data_optional_fields_omitted():
    """Test optional fields are left out when unset."""
    weather = WeatherData(
        city="Bangkok",
        temperature=29,
        condition="Clear",
        humidity=60,
        wind_speed=7,
        time="night",
        description="clear sky",
        is_real_data=False,
        last_updated="",
    )
    data = weather.to_dict()

    assert "icon" not in data
    assert "hourlyForecast" not in data
    assert WeatherData.from_dict(data).hourly_forecast is None


@pytest.mark.parametrize("hour,expected", [(0, "morning"), (11, "morning"), (12, "night"), (23, "night")])
def test_time_of_day(hour, expected):
    assert time_of_day(hour) == expected


@pytest.mark.parametrize("hour,label", [(0, "12am"), (10, "10am"), (12, "12pm"), (14, "2pm"), (18, "6pm")])
def test_format_hour_label(hour, label):
    assert format_hour_label(hour) == label


def test_hour_sort_key():
    """Test 12pm sorts as noon and pm hours after am hours."""
    assert hour_sort_key("10am") == 10
    assert hour_sort_key("12pm") == 12
    assert hour_sort_key("2pm") == 14
    assert hour_sort_key("6pm") == 18

    labels = ["6pm", "12pm", "10am", "4pm", "2pm"]
    assert sorted(labels, key=hour_sort_key) == ["10am", "12pm", "2pm", "4pm", "6pm"]


def test_format_last_updated():
    """Test display format of the provider timestamp."""
    timestamp = int(datetime(2026, 10, 9, 20, 5).timestamp())
    assert format_last_updated(timestamp) == "Oct 9, 08:05 PM"
