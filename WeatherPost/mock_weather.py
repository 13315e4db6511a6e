"""Synthesized weather used whenever live data is unavailable."""
import random
from datetime import datetime
from typing import Callable, Optional

from conditions import CONDITION_CODES, condition_icon, get_condition_text
from weather_data import (
    HOURLY_TARGET_HOURS,
    HourlyForecast,
    WeatherData,
    format_hour_label,
    format_last_updated,
    time_of_day,
)

MOCK_CONDITIONS = ("Clear", "Clouds", "Rain", "Thunderstorm", "Drizzle", "Mist")

# Temperature rise towards mid-afternoon, then fall, relative to the base temperature
HOURLY_OFFSETS = tuple(i + 1 if i <= 2 else 5 - i for i in range(len(HOURLY_TARGET_HOURS)))


class MockWeatherGenerator:
    """Produces plausible random weather; pass a seeded rng for reproducible output."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.rng = rng or random.Random()
        self.clock = clock or datetime.now

    def generate(self, city: str) -> WeatherData:
        condition = self.rng.choice(MOCK_CONDITIONS)
        temperature = self.rng.randrange(20, 35)
        humidity = self.rng.randrange(50, 80)
        wind_speed = self.rng.randrange(5, 25)

        now = self.clock()
        time = time_of_day(now.hour)
        code = CONDITION_CODES[condition]

        hourly = [
            HourlyForecast(
                time=format_hour_label(hour),
                temperature=temperature + HOURLY_OFFSETS[index],
                icon=condition_icon(condition, is_day=index < 4),
                condition=condition,
                weather_code=code,
            )
            for index, hour in enumerate(HOURLY_TARGET_HOURS)
        ]

        return WeatherData(
            city=city,
            temperature=temperature,
            condition=condition,
            humidity=humidity,
            wind_speed=wind_speed,
            time=time,
            description=get_condition_text(condition, code).lower(),
            is_real_data=False,
            last_updated=format_last_updated(int(now.timestamp())),
            icon=condition_icon(condition, is_day=time == "morning"),
            weather_code=code,
            hourly_forecast=hourly,
        )
