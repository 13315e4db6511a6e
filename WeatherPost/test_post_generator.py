"""Tests for post generation and the mock fallback."""
import pytest
import random
from unittest.mock import Mock
from burmese_text import CITY_NAMES_BURMESE
from mock_weather import MockWeatherGenerator
from post_generator import CITIES, WeatherPostGenerator
from weather_data import WeatherData


@pytest.fixture
def live_weather():
    return WeatherData(
        city="Chiang Mai",
        temperature=27,
        condition="Clouds",
        humidity=70,
        wind_speed=9,
        time="night",
        description="scattered clouds",
        is_real_data=True,
        last_updated="Oct 19, 05:00 PM",
        icon="03n",
        weather_code=802,
    )


def make_generator(service):
    return WeatherPostGenerator(service, MockWeatherGenerator(rng=random.Random(1)), rng=random.Random(2))


def test_live_weather_used(live_weather):
    service = Mock()
    service.get_weather.return_value = live_weather
    generator = make_generator(service)

    post = generator.build_post("Chiang Mai")

    service.get_weather.assert_called_once_with("Chiang Mai", False)
    assert post.weather is live_weather
    assert post.is_using_mock_data is False
    assert CITY_NAMES_BURMESE["Chiang Mai"] in post.text
    assert post.background_image == "/images/cities/chiang-mai.png"
    assert post.overlay == "/images/clouds.png"
    assert post.text_color == (17, 24, 39)


def test_mock_fallback_when_service_returns_none():
    """Test the mock generator fills in when no live data is available."""
    service = Mock()
    service.get_weather.return_value = None
    generator = make_generator(service)

    weather = generator.get_weather_data("Yangon", force_refresh=True)

    service.get_weather.assert_called_once_with("Yangon", True)
    assert weather.is_real_data is False
    assert weather.city == "Yangon"
    assert len(weather.hourly_forecast) == 5


def test_mock_fallback_on_unexpected_error():
    service = Mock()
    service.get_weather.side_effect = RuntimeError("unexpected")
    generator = make_generator(service)

    assert generator.get_weather_data("Mandalay").is_real_data is False


def test_build_posts_covers_all_cities():
    service = Mock()
    service.get_weather.return_value = None
    generator = make_generator(service)

    posts = generator.build_posts()

    assert [post.city for post in posts] == list(CITIES)
    assert all(post.is_using_mock_data for post in posts)
    assert all(post.text for post in posts)
