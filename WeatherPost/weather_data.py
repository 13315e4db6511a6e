"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

WEATHER_CONDITIONS = (
    "Clear",
    "Clouds",
    "Rain",
    "Drizzle",
    "Thunderstorm",
    "Snow",
    "Mist",
    "Fog",
    "Haze",
    "Dust",
    "Smoke",
)

TIME_OF_DAY = ("morning", "night")

# Hours shown on the hourly strip of a post card
HOURLY_TARGET_HOURS = (10, 12, 14, 16, 18)


def time_of_day(hour: int) -> str:
    """Return "morning" before noon and "night" afterwards."""
    return "morning" if hour < 12 else "night"


def format_hour_label(hour: int) -> str:
    """Format a 24h hour as a short label, e.g. 14 -> "2pm"."""
    suffix = "am" if hour < 12 else "pm"
    display = hour % 12 or 12
    return f"{display}{suffix}"


def hour_sort_key(label: str) -> int:
    """
    Sort key for hour labels produced by format_hour_label.

    "12pm" sorts as 12, "Npm" as N + 12 and "Nam" as N.
    """
    label = label.strip().lower()
    hour = int(label[:-2])
    if label.endswith("pm") and hour != 12:
        return hour + 12
    return hour


def format_last_updated(timestamp: int) -> str:
    """Format a UNIX timestamp for display, e.g. "Oct 9, 08:30 PM" (local time)."""
    moment = datetime.fromtimestamp(timestamp)
    return f"{moment:%b} {moment.day}, {moment:%I:%M %p}"


@dataclass
class HourlyForecast:
    """One point on the hourly strip."""
    time: str  # label, e.g. "10am", "2pm"
    temperature: int
    icon: str  # OpenWeather icon code, e.g. "10d"
    condition: str
    weather_code: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "time": self.time,
            "temperature": self.temperature,
            "icon": self.icon,
            "condition": self.condition,
        }
        if self.weather_code is not None:
            data["weatherCode"] = self.weather_code
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HourlyForecast":
        return cls(
            time=data["time"],
            temperature=int(data["temperature"]),
            icon=data["icon"],
            condition=data["condition"],
            weather_code=data.get("weatherCode"),
        )


@dataclass
class WeatherData:
    """
    Domain model for one city's weather snapshot.

    is_real_data is True only when the snapshot was produced from a live
    provider response. Mock snapshots are never written to the cache.
    """
    city: str
    temperature: int  # degrees Celsius, rounded
    condition: str  # one of WEATHER_CONDITIONS
    humidity: int  # percentage
    wind_speed: int  # km/h, rounded
    time: str  # "morning" or "night"
    description: str  # e.g. "light rain"
    is_real_data: bool
    last_updated: str  # display string, e.g. "Oct 9, 08:30 PM"

    icon: Optional[str] = None
    weather_code: Optional[int] = None
    hourly_forecast: Optional[List[HourlyForecast]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys stored in the cache."""
        data = {
            "city": self.city,
            "temperature": self.temperature,
            "condition": self.condition,
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
            "time": self.time,
            "description": self.description,
            "isRealData": self.is_real_data,
            "lastUpdated": self.last_updated,
        }
        if self.icon is not None:
            data["icon"] = self.icon
        if self.weather_code is not None:
            data["weatherCode"] = self.weather_code
        if self.hourly_forecast is not None:
            data["hourlyForecast"] = [point.to_dict() for point in self.hourly_forecast]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherData":
        hourly = data.get("hourlyForecast")
        return cls(
            city=data["city"],
            temperature=int(data["temperature"]),
            condition=data["condition"],
            humidity=int(data["humidity"]),
            wind_speed=int(data["windSpeed"]),
            time=data["time"],
            description=data.get("description", ""),
            is_real_data=bool(data.get("isRealData", False)),
            last_updated=data.get("lastUpdated", ""),
            icon=data.get("icon"),
            weather_code=data.get("weatherCode"),
            hourly_forecast=(
                [HourlyForecast.from_dict(point) for point in hourly]
                if hourly is not None else None
            ),
        )
