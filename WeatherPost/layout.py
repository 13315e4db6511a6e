"""Layout logic for weather post cards - pure functions for testability."""
import re
from typing import Dict, List, Optional, Tuple

from conditions import get_condition_text

Color = Tuple[int, int, int]

WHITE = (255, 255, 255)
DARK_TEXT = (17, 24, 39)

CITY_BACKGROUNDS = {
    "Yangon": "/images/cities/yangon.png",
    "Mandalay": "/images/cities/mandalay.png",
    "Nay Pyi Taw": "/images/cities/nay-pyi-taw.png",
    "New Delhi": "/images/cities/new-delhi.png",
    "Bangkok": "/images/cities/bangkok.png",
    "Chiang Mai": "/images/cities/chiang-mai.png",
    "Mae Sot": "/images/cities/mae-sot.png",
}

WEATHER_BACKGROUNDS = {
    "Clear": "/images/clear.png",
    "Clouds": "/images/clouds.png",
    "Rain": "/images/rain.png",
    "Drizzle": "/images/rain.png",
    "Thunderstorm": "/images/thunderstorm.png",
    "Snow": "/images/snow.png",
    "Mist": "/images/mist.png",
    "Fog": "/images/mist.png",
    "Haze": "/images/mist.png",
    "Dust": "/images/mist.png",
    "Smoke": "/images/mist.png",
}

DEFAULT_BACKGROUND = "/images/clear.png"

# Cities whose photo backgrounds are light enough to need dark text
DARK_TEXT_CITIES = ("Nay Pyi Taw", "Chiang Mai")
LIGHT_TEXT_CONDITIONS = ("Rain", "Drizzle", "Thunderstorm", "Snow")

# (gradient top, gradient bottom, text color)
WEATHER_COLORS: Dict[str, Tuple[Color, Color, Color]] = {
    "Clear": ((59, 130, 246), (147, 197, 253), WHITE),
    "Clouds": ((156, 163, 175), (147, 197, 253), WHITE),
    "Rain": ((75, 85, 99), (59, 130, 246), WHITE),
    "Drizzle": ((75, 85, 99), (59, 130, 246), WHITE),
    "Thunderstorm": ((31, 41, 55), (126, 34, 206), WHITE),
    "Snow": ((219, 234, 254), (191, 219, 254), (31, 41, 55)),
    "Mist": ((156, 163, 175), (209, 213, 219), WHITE),
    "Fog": ((156, 163, 175), (209, 213, 219), WHITE),
    "Haze": ((156, 163, 175), (209, 213, 219), WHITE),
    "Dust": ((253, 224, 71), (254, 240, 138), (31, 41, 55)),
    "Smoke": ((253, 224, 71), (254, 240, 138), (31, 41, 55)),
}


class DrawOp:
    """Represents a drawing operation (for testing/layout calculation)."""
    def __init__(self, op_type: str, **kwargs):
        self.op_type = op_type
        self.kwargs = kwargs

    def __repr__(self) -> str:
        return f"DrawOp({self.op_type!r}, {self.kwargs!r})"


def get_temperature_color(temp_c: float) -> Color:
    """
    Get RGB color for temperature using a simple gradient.

    Cold (< 0°C) = blue
    Cool (0-15°C) = cyan
    Mild (15-25°C) = green/yellow
    Warm (25-35°C) = yellow/orange
    Hot (> 35°C) = red
    """
    if temp_c < 0:
        return (0, 0, 255)
    elif temp_c < 15:
        ratio = temp_c / 15.0
        return (0, int(255 * ratio), 255)
    elif temp_c < 25:
        ratio = (temp_c - 15) / 10.0
        return (int(255 * ratio), 255, int(255 * (1 - ratio)))
    elif temp_c < 35:
        ratio = (temp_c - 25) / 10.0
        return (255, int(255 * (1 - ratio * 0.5)), 0)
    else:
        ratio = min((temp_c - 35) / 10.0, 1.0)
        return (255, int(255 * (1 - ratio)), 0)


def get_background_image(city: str, condition: str, use_weather_background: bool = False) -> str:
    """
    Pick the card background: the city photo, or the condition image when
    use_weather_background is set or the city has no photo.
    """
    if use_weather_background:
        return WEATHER_BACKGROUNDS.get(condition, DEFAULT_BACKGROUND)
    return CITY_BACKGROUNDS.get(city) or WEATHER_BACKGROUNDS.get(condition, DEFAULT_BACKGROUND)


def get_weather_overlay(condition: str) -> Optional[str]:
    """Overlay image for a condition; clear skies get none."""
    if condition == "Clear":
        return None
    return WEATHER_BACKGROUNDS.get(condition)


def get_normalized_city_name(city: str) -> str:
    """Normalize a city name for file paths, e.g. "Nay Pyi Taw" -> "nay-pyi-taw"."""
    return re.sub(r"\s+", "-", city.lower())


def get_text_color(city: str, condition: str) -> Color:
    if condition in LIGHT_TEXT_CONDITIONS:
        return WHITE
    return DARK_TEXT if city in DARK_TEXT_CITIES else WHITE


def get_weather_colors(condition: str) -> Tuple[Color, Color, Color]:
    """Gradient top, gradient bottom and text color for a condition."""
    return WEATHER_COLORS.get(condition, WEATHER_COLORS["Clear"])


def calculate_post_layout(post, width: int = 600, height: int = 400) -> List[DrawOp]:
    """
    Calculate drawing operations for a post card.

    This is a pure function that returns drawing operations,
    making it easy to test without actual rendering.

    Args:
        post: WeatherPost to display
        width: Card width in pixels
        height: Card height in pixels

    Returns:
        List of DrawOp objects representing what to draw
    """
    weather = post.weather
    top, bottom, _ = get_weather_colors(weather.condition)
    color = post.text_color
    margin = 24

    ops = [
        DrawOp("gradient", top=top, bottom=bottom),
        DrawOp("image", role="background", path=post.background_image),
    ]
    if post.overlay:
        ops.append(DrawOp("image", role="overlay", path=post.overlay))

    ops.append(DrawOp("text", role="city", text=post.city, x=margin, y=20, size=36, color=color))
    ops.append(DrawOp(
        "text",
        role="temperature",
        text=f"{weather.temperature}°C",
        x=margin,
        y=66,
        size=48,
        color=get_temperature_color(weather.temperature),
    ))
    if weather.icon:
        ops.append(DrawOp("icon", role="current", icon=weather.icon, x=width - margin - 100, y=20, size=100))

    ops.append(DrawOp(
        "text",
        role="condition",
        text=get_condition_text(weather.condition, weather.weather_code),
        x=margin,
        y=128,
        size=22,
        color=color,
    ))
    ops.append(DrawOp(
        "text",
        role="details",
        text=f"Humidity {weather.humidity}%  Wind {weather.wind_speed} km/h",
        x=margin,
        y=158,
        size=18,
        color=color,
    ))

    # Hourly strip
    hourly = weather.hourly_forecast or []
    if hourly:
        column = (width - 2 * margin) // len(hourly)
        for index, point in enumerate(hourly):
            x = margin + index * column
            ops.append(DrawOp("text", role="hour", text=point.time, x=x, y=192, size=16, color=color))
            ops.append(DrawOp("icon", role="hourly", icon=point.icon, x=x, y=212, size=40))
            ops.append(DrawOp(
                "text", role="hour_temp", text=f"{point.temperature}°", x=x, y=254, size=16, color=color
            ))

    ops.append(DrawOp(
        "text",
        role="message",
        text=post.text,
        x=margin,
        y=284,
        size=18,
        color=color,
        max_width=width - 2 * margin,
    ))

    if weather.is_real_data:
        badge = f"Live data - updated {weather.last_updated}"
    else:
        badge = "Sample data"
    ops.append(DrawOp("text", role="badge", text=badge, x=margin, y=height - 28, size=14, color=color))

    return ops
