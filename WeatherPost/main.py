"""Burmese weather post generator for a fixed list of cities."""
import argparse
import logging
import os
import random
import sys
from typing import Dict, List, Optional

from dotenv import load_dotenv

from layout import get_normalized_city_name
from mock_weather import MockWeatherGenerator
from openweather_provider import OpenWeatherProvider
from post_canvas import PILPostCanvas, render_post
from post_generator import CITIES, WeatherPost, WeatherPostGenerator
from weather_cache import CacheStoreError, InMemoryCache, RedisCache, WeatherCache
from weather_provider import ApiKeyState
from weather_service import WeatherService


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Burmese weather post generator")
    parser.add_argument("--city", action="append", dest="cities", help="City to generate (repeatable)")
    parser.add_argument("--refresh", action="store_true", help="Bypass cached weather")
    parser.add_argument("--output-dir", help="Write a PNG card per city to this directory")
    parser.add_argument("--assets-dir", help="Directory holding /images/... backgrounds")
    parser.add_argument("--font", help="TrueType font with Myanmar glyphs for the cards")
    parser.add_argument("--width", type=int, default=600)
    parser.add_argument("--height", type=int, default=400)
    parser.add_argument("--seed", type=int, help="Seed for mock data and text selection")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--check-key", action="store_true", help="Check the API key and exit")
    parser.add_argument("--clear-cache", action="store_true", help="Clear cached weather for the cities first")
    parser.add_argument("--log-file")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config() -> Dict[str, Optional[str]]:
    load_dotenv()
    api_key = (os.getenv("OPENWEATHER_API_KEY") or "").strip()
    config = {
        "api_key": api_key or None,
        "redis_url": os.getenv("REDIS_URL") or None,
        "lang": os.getenv("WEATHER_LANG", "en"),
    }
    logging.info(
        "Configuration loaded: api_key=%s cache=%s lang=%s",
        "set" if config["api_key"] else "missing (mock mode)",
        "redis" if config["redis_url"] else "memory",
        config["lang"],
    )
    return config


def build_weather_service(
    config: Dict[str, Optional[str]],
    args: argparse.Namespace,
    key_state: ApiKeyState,
    rng: random.Random
) -> WeatherService:
    store = InMemoryCache()
    if config["redis_url"]:
        try:
            store = RedisCache.from_url(config["redis_url"])
        except CacheStoreError as e:
            logging.error("Cannot use REDIS_URL, falling back to in-memory cache: %s", e)
    cache = WeatherCache(store)
    if not cache.ping():
        logging.warning("Cache store not reachable; continuing without cached data")

    provider = None
    if config["api_key"]:
        provider = OpenWeatherProvider(
            api_key=config["api_key"],
            lang=config["lang"],
            timeout=args.timeout,
        )
    service = WeatherService(provider=provider, cache=cache, key_state=key_state, rng=rng)
    logging.info("Weather service ready (live data %s)", "enabled" if provider else "disabled")
    return service


def format_post(post: WeatherPost) -> str:
    weather = post.weather
    source = "sample data" if post.is_using_mock_data else f"live, updated {weather.last_updated}"
    lines = [
        f"== {post.city} ({source}) ==",
        f"{weather.temperature}°C {weather.condition} ({weather.description}), "
        f"humidity {weather.humidity}%, wind {weather.wind_speed} km/h",
    ]
    if weather.hourly_forecast:
        lines.append("  ".join(f"{point.time} {point.temperature}°" for point in weather.hourly_forecast))
    lines.append(post.text)
    return "\n".join(lines)


def save_card(post: WeatherPost, service: WeatherService, args: argparse.Namespace) -> str:
    icon_codes = {post.weather.icon} if post.weather.icon else set()
    icon_codes.update(point.icon for point in post.weather.hourly_forecast or [])
    icons = {}
    for code in icon_codes:
        data = service.get_icon(code)
        if data:
            icons[code] = data

    canvas = PILPostCanvas(args.width, args.height, font_path=args.font)
    render_post(canvas, post, icons=icons, assets_dir=args.assets_dir)
    path = os.path.join(args.output_dir, f"{get_normalized_city_name(post.city)}-weather.png")
    canvas.save(path)
    logging.info("Saved card: %s", path)
    return path


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    config = load_config()

    rng = random.Random(args.seed)
    key_state = ApiKeyState()
    service = build_weather_service(config, args, key_state, rng)

    if args.check_key:
        valid = service.is_api_key_valid()
        print("API key valid" if valid else "API key missing or invalid")
        return 0 if valid else 1

    cities = args.cities or list(CITIES)
    if args.clear_cache:
        for city in cities:
            service.clear_cache(city)

    generator = WeatherPostGenerator(service, MockWeatherGenerator(rng=rng), rng=rng)
    if args.output_dir:
        os.makedirs(args.output_dir, exist_ok=True)

    for post in generator.build_posts(cities, force_refresh=args.refresh):
        print(format_post(post))
        print()
        if args.output_dir:
            save_card(post, service, args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
