"""Mapping between OpenWeather condition codes, condition names and icons."""
from typing import Optional

# OpenWeather icon code prefix per condition (suffix "d"/"n" added for day/night)
CONDITION_ICONS = {
    "Clear": "01",
    "Clouds": "03",
    "Rain": "10",
    "Drizzle": "09",
    "Thunderstorm": "11",
    "Snow": "13",
    "Mist": "50",
    "Fog": "50",
    "Haze": "50",
    "Dust": "50",
    "Smoke": "50",
}

# Representative provider code per condition, used for synthesized data
CONDITION_CODES = {
    "Clear": 800,
    "Clouds": 803,
    "Rain": 500,
    "Drizzle": 300,
    "Thunderstorm": 200,
    "Snow": 600,
    "Mist": 701,
    "Fog": 741,
    "Haze": 721,
    "Dust": 761,
    "Smoke": 711,
}


def map_weather_condition(code: int) -> str:
    """
    Map an OpenWeather condition code to one of WEATHER_CONDITIONS.

    See https://openweathermap.org/weather-conditions. Codes outside the
    documented groups map to "Clear".
    """
    if 200 <= code < 300:
        return "Thunderstorm"
    if 300 <= code < 400:
        return "Drizzle"
    if 500 <= code < 600:
        return "Rain"
    if 600 <= code < 700:
        return "Snow"
    if code == 701:
        return "Mist"
    if code == 711:
        return "Smoke"
    if code == 721:
        return "Haze"
    if code in (731, 761):
        return "Dust"
    if code == 741:
        return "Fog"
    if code == 800:
        return "Clear"
    if code > 800:
        return "Clouds"
    return "Clear"


def condition_icon(condition: str, is_day: bool = True) -> str:
    """Return the OpenWeather icon code for a condition, e.g. ("Rain", False) -> "10n"."""
    prefix = CONDITION_ICONS.get(condition, CONDITION_ICONS["Clear"])
    return prefix + ("d" if is_day else "n")


def get_condition_text(condition: str, weather_code: Optional[int] = None) -> str:
    """
    Get a detailed English label for a condition.

    Uses the provider code when available (e.g. 500 -> "Light Rain"),
    otherwise the capitalized condition name.
    """
    fallback = condition[:1].upper() + condition[1:]
    if not weather_code:
        return fallback

    if weather_code == 800:
        return "Clear Sky"
    if weather_code == 801:
        return "Few Clouds"
    if weather_code == 802:
        return "Scattered Clouds"
    if weather_code == 803:
        return "Broken Clouds"
    if weather_code == 804:
        return "Overcast Clouds"

    if 200 <= weather_code < 300:
        if 210 <= weather_code <= 221:
            return "Thunderstorm"
        return "Thunderstorm with Rain"

    if 300 <= weather_code < 400:
        return "Drizzle"

    if 500 <= weather_code < 600:
        if weather_code == 500:
            return "Light Rain"
        if weather_code == 501:
            return "Moderate Rain"
        if 502 <= weather_code <= 504:
            return "Heavy Rain"
        if weather_code == 511:
            return "Freezing Rain"
        if weather_code >= 520:
            return "Shower Rain"
        return "Rain"

    if 600 <= weather_code < 700:
        if weather_code == 600:
            return "Light Snow"
        if weather_code == 601:
            return "Snow"
        if weather_code == 602:
            return "Heavy Snow"
        if 611 <= weather_code <= 616:
            return "Sleet"
        if weather_code >= 620:
            return "Shower Snow"
        return "Snow"

    specific = {
        701: "Mist",
        711: "Smoke",
        721: "Haze",
        731: "Dust",
        741: "Fog",
        751: "Sand",
        761: "Dust",
        762: "Volcanic Ash",
        771: "Squalls",
        781: "Tornado",
    }
    return specific.get(weather_code, fallback)
