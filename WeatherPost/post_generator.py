"""Builds weather posts for the city list, falling back to mock data."""
import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from burmese_text import generate_weather_message
from layout import get_background_image, get_text_color, get_weather_overlay
from mock_weather import MockWeatherGenerator
from weather_data import WeatherData
from weather_service import WeatherService

CITIES = ("Yangon", "Mandalay", "Nay Pyi Taw", "New Delhi", "Bangkok", "Chiang Mai", "Mae Sot")


@dataclass
class WeatherPost:
    """Everything needed to render one post card."""
    city: str
    weather: WeatherData
    text: str  # Burmese message
    background_image: str
    overlay: Optional[str]
    text_color: Tuple[int, int, int]

    @property
    def is_using_mock_data(self) -> bool:
        return not self.weather.is_real_data


class WeatherPostGenerator:
    """
    Combines the weather service, the mock generator and the text templates.

    The service may return None for any reason; every post still gets a
    complete snapshot because mock data is substituted.
    """

    def __init__(
        self,
        service: WeatherService,
        mock_generator: MockWeatherGenerator,
        rng: Optional[random.Random] = None
    ):
        self.service = service
        self.mock_generator = mock_generator
        self.rng = rng or random.Random()

    def get_weather_data(self, city: str, force_refresh: bool = False) -> WeatherData:
        try:
            weather = self.service.get_weather(city, force_refresh)
        except Exception as exc:
            logging.exception("Error in get_weather_data for %s: %s", city, exc)
            weather = None

        if weather is None:
            logging.info("Using mock weather data for %s", city)
            return self.mock_generator.generate(city)
        return weather

    def generate_text(self, weather: WeatherData) -> str:
        return generate_weather_message(
            weather.city,
            weather.condition,
            weather.time,
            weather.temperature,
            rng=self.rng,
        )

    def build_post(self, city: str, force_refresh: bool = False) -> WeatherPost:
        weather = self.get_weather_data(city, force_refresh)
        post = WeatherPost(
            city=city,
            weather=weather,
            text=self.generate_text(weather),
            background_image=get_background_image(city, weather.condition),
            overlay=get_weather_overlay(weather.condition),
            text_color=get_text_color(city, weather.condition),
        )
        logging.info(
            "Post ready: city=%s source=%s temp=%s condition=%s",
            city,
            "mock" if post.is_using_mock_data else "live",
            weather.temperature,
            weather.condition,
        )
        return post

    def build_posts(self, cities: Iterable[str] = CITIES, force_refresh: bool = False) -> List[WeatherPost]:
        return [self.build_post(city, force_refresh) for city in cities]
