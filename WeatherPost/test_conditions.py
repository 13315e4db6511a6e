"""Tests for condition mapping."""
import pytest
from conditions import (
    CONDITION_CODES,
    condition_icon,
    get_condition_text,
    map_weather_condition,
)
from weather_data import WEATHER_CONDITIONS


@pytest.mark.parametrize("low,high,condition", [
    (200, 300, "Thunderstorm"),
    (300, 400, "Drizzle"),
    (500, 600, "Rain"),
    (600, 700, "Snow"),
])
def test_map_weather_condition_ranges(low, high, condition):
    """Test every code in a provider group maps to its condition."""
    for code in range(low, high):
        assert map_weather_condition(code) == condition


@pytest.mark.parametrize("code,condition", [
    (701, "Mist"),
    (711, "Smoke"),
    (721, "Haze"),
    (731, "Dust"),
    (761, "Dust"),
    (741, "Fog"),
    (800, "Clear"),
    (801, "Clouds"),
    (804, "Clouds"),
    (950, "Clouds"),
])
def test_map_weather_condition_specific_codes(code, condition):
    assert map_weather_condition(code) == condition


@pytest.mark.parametrize("code", [-1, 0, 100, 199, 400, 499, 700, 751, 762, 771, 781])
def test_map_weather_condition_defaults_to_clear(code):
    """Test codes outside the documented groups fall back to Clear."""
    assert map_weather_condition(code) == "Clear"


def test_condition_codes_round_trip():
    """Test the representative code of each condition maps back to it."""
    assert set(CONDITION_CODES) == set(WEATHER_CONDITIONS)
    for condition, code in CONDITION_CODES.items():
        assert map_weather_condition(code) == condition


def test_condition_icon_day_and_night():
    assert condition_icon("Rain") == "10d"
    assert condition_icon("Rain", is_day=False) == "10n"
    assert condition_icon("Haze") == "50d"
    assert condition_icon("Unknown") == "01d"


@pytest.mark.parametrize("code,text", [
    (800, "Clear Sky"),
    (804, "Overcast Clouds"),
    (211, "Thunderstorm"),
    (201, "Thunderstorm with Rain"),
    (500, "Light Rain"),
    (503, "Heavy Rain"),
    (521, "Shower Rain"),
    (612, "Sleet"),
    (781, "Tornado"),
])
def test_get_condition_text_with_code(code, text):
    assert get_condition_text(map_weather_condition(code), code) == text


def test_get_condition_text_without_code():
    assert get_condition_text("Clouds") == "Clouds"
    assert get_condition_text("clouds") == "Clouds"
