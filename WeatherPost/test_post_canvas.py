"""Tests for post canvas rendering."""
import io
import pytest
from PIL import Image
from post_canvas import FakePostCanvas, PILPostCanvas, render_post
from post_generator import WeatherPost
from weather_data import HourlyForecast, WeatherData


def _png(color=(255, 0, 0)):
    buffer = io.BytesIO()
    Image.new("RGBA", (10, 10), color + (255,)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def sample_post():
    weather = WeatherData(
        city="Bangkok",
        temperature=33,
        condition="Clear",
        humidity=60,
        wind_speed=7,
        time="morning",
        description="clear sky",
        is_real_data=False,
        last_updated="Oct 19, 09:00 AM",
        icon="01d",
        weather_code=800,
        hourly_forecast=[HourlyForecast(time="10am", temperature=34, icon="01d", condition="Clear", weather_code=800)],
    )
    return WeatherPost(
        city="Bangkok",
        weather=weather,
        text="Sunny day in Bangkok",
        background_image="/images/cities/bangkok.png",
        overlay=None,
        text_color=(255, 255, 255),
    )


def test_fake_canvas_records_render(sample_post):
    """Test rendering draws the gradient first and all texts."""
    canvas = FakePostCanvas(600, 400)

    render_post(canvas, sample_post)

    assert canvas.calls[0][0] == "gradient"
    assert "Bangkok" in canvas.texts()
    assert "33°C" in canvas.texts()
    assert "Sample data" in canvas.texts()
    assert not [call for call in canvas.calls if call[0] == "image"]


def test_render_pastes_known_icons(sample_post):
    canvas = FakePostCanvas(600, 400)

    render_post(canvas, sample_post, icons={"01d": _png()})

    images = [kwargs for name, kwargs in canvas.calls if name == "image"]
    assert [image["size"] for image in images] == [(100, 100), (40, 40)]


def test_render_background_from_assets(sample_post, tmp_path):
    (tmp_path / "images" / "cities").mkdir(parents=True)
    (tmp_path / "images" / "cities" / "bangkok.png").write_bytes(_png((0, 0, 255)))
    canvas = FakePostCanvas(600, 400)

    render_post(canvas, sample_post, assets_dir=str(tmp_path))

    assert canvas.calls[1] == ("image", {"x": 0, "y": 0, "bytes": len(_png((0, 0, 255))), "size": (600, 400)})


def test_pil_canvas_gradient():
    canvas = PILPostCanvas(20, 10)
    canvas.fill_gradient((0, 0, 0), (90, 90, 90))
    image = canvas.get_image()

    assert image.getpixel((5, 0)) == (0, 0, 0)
    assert image.getpixel((5, 9)) == (90, 90, 90)


def test_pil_canvas_paste_image():
    canvas = PILPostCanvas(20, 20)
    canvas.paste_image(0, 0, _png((255, 0, 0)), (10, 10))

    assert canvas.get_image().getpixel((5, 5)) == (255, 0, 0)
    assert canvas.get_image().getpixel((15, 15)) == (0, 0, 0)


def test_pil_canvas_skips_unreadable_image():
    canvas = PILPostCanvas(20, 20)
    canvas.paste_image(0, 0, b"not an image", (10, 10))

    assert canvas.get_image().getpixel((5, 5)) == (0, 0, 0)


def test_pil_canvas_save(sample_post, tmp_path):
    """Test a full card renders to a PNG of the requested size."""
    canvas = PILPostCanvas(600, 400)
    render_post(canvas, sample_post, icons={"01d": _png()})
    path = tmp_path / "bangkok-weather.png"

    canvas.save(str(path))

    with Image.open(path) as image:
        assert image.size == (600, 400)
