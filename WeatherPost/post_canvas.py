"""Canvas abstraction for post cards - allows swapping Pillow rendering with test backends."""
import io
import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from layout import calculate_post_layout

Color = Tuple[int, int, int]


class PostCanvas(ABC):
    """Abstract canvas interface for drawing a post card."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Get canvas width in pixels."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Get canvas height in pixels."""
        pass

    @abstractmethod
    def fill_gradient(self, top: Color, bottom: Color) -> None:
        """Fill the canvas with a vertical gradient from top to bottom."""
        pass

    @abstractmethod
    def draw_text(
        self,
        x: int,
        y: int,
        text: str,
        color: Color,
        size: int,
        max_width: Optional[int] = None
    ) -> None:
        """
        Draw text with its top-left corner at (x, y).

        Args:
            max_width: Wrap onto further lines beyond this width
        """
        pass

    @abstractmethod
    def paste_image(self, x: int, y: int, data: bytes, size: Tuple[int, int]) -> None:
        """Paste encoded image bytes (PNG/JPEG), scaled to size."""
        pass


class FakePostCanvas(PostCanvas):
    """
    Fake canvas implementation for testing - records calls in memory.

    Useful for unit tests without Pillow output.
    """

    def __init__(self, width: int = 600, height: int = 400):
        self._width = width
        self._height = height
        self.calls: List[Tuple[str, dict]] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def fill_gradient(self, top: Color, bottom: Color) -> None:
        self.calls.append(("gradient", {"top": top, "bottom": bottom}))

    def draw_text(self, x, y, text, color, size, max_width=None) -> None:
        self.calls.append(("text", {"x": x, "y": y, "text": text, "color": color, "size": size}))

    def paste_image(self, x, y, data, size) -> None:
        self.calls.append(("image", {"x": x, "y": y, "bytes": len(data), "size": size}))

    def texts(self) -> List[str]:
        """All drawn strings, in order (for testing)."""
        return [kwargs["text"] for name, kwargs in self.calls if name == "text"]


class PILPostCanvas(PostCanvas):
    """Pillow-based canvas for rendering cards to PNG images."""

    def __init__(self, width: int = 600, height: int = 400, font_path: Optional[str] = None):
        """
        Initialize PIL canvas.

        Args:
            width: Card width in pixels
            height: Card height in pixels
            font_path: TrueType font; needs Myanmar glyphs for the Burmese text
                (e.g. Noto Sans Myanmar). Pillow's default font otherwise.
        """
        self._width = width
        self._height = height
        self._font_path = font_path
        self._fonts: Dict[int, ImageFont.ImageFont] = {}
        self._image = Image.new("RGB", (width, height), (0, 0, 0))
        self._draw = ImageDraw.Draw(self._image)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _font(self, size: int):
        if size not in self._fonts:
            if self._font_path:
                self._fonts[size] = ImageFont.truetype(self._font_path, size)
            else:
                self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def fill_gradient(self, top: Color, bottom: Color) -> None:
        span = max(self._height - 1, 1)
        for y in range(self._height):
            ratio = y / span
            color = tuple(int(a + (b - a) * ratio) for a, b in zip(top, bottom))
            self._draw.line([(0, y), (self._width, y)], fill=color)

    def _wrap(self, text: str, font, max_width: int) -> List[str]:
        lines: List[str] = []
        current = ""
        for word in text.split():
            candidate = f"{current} {word}" if current else word
            if current and self._draw.textlength(candidate, font=font) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)
        return lines

    def draw_text(self, x, y, text, color, size, max_width=None) -> None:
        font = self._font(size)
        try:
            lines = self._wrap(text, font, max_width) if max_width else [text]
            for index, line in enumerate(lines):
                self._draw.text((x, y + index * int(size * 1.4)), line, fill=color, font=font)
        except UnicodeEncodeError as e:
            logging.warning(f"Font cannot render text {text[:20]!r}...: {e}")

    def paste_image(self, x, y, data, size) -> None:
        try:
            image = Image.open(io.BytesIO(data)).convert("RGBA").resize(size)
        except UnidentifiedImageError as e:
            logging.warning(f"Skipping unreadable image: {e}")
            return
        self._image.paste(image, (x, y), image)

    def save(self, filename: str) -> None:
        """Save canvas to a PNG file."""
        self._image.save(filename)

    def get_image(self):
        """Rendered card as a PIL Image, e.g. to inspect pixels."""
        return self._image


def render_post(
    canvas: PostCanvas,
    post,
    icons: Optional[Dict[str, bytes]] = None,
    assets_dir: Optional[str] = None
) -> None:
    """
    Render a post onto a canvas.

    Args:
        canvas: PostCanvas instance (Pillow or fake)
        post: WeatherPost to display
        icons: Icon image bytes keyed by OpenWeather icon code; missing icons are skipped
        assets_dir: Directory holding the /images/... backgrounds; skipped when None
    """
    icons = icons or {}
    for op in calculate_post_layout(post, canvas.width, canvas.height):
        kwargs = op.kwargs
        if op.op_type == "gradient":
            canvas.fill_gradient(kwargs["top"], kwargs["bottom"])
        elif op.op_type == "image":
            if not assets_dir:
                continue
            path = os.path.join(assets_dir, kwargs["path"].lstrip("/"))
            if not os.path.isfile(path):
                logging.debug(f"Background image not found: {path}")
                continue
            with open(path, "rb") as handle:
                canvas.paste_image(0, 0, handle.read(), (canvas.width, canvas.height))
        elif op.op_type == "icon":
            data = icons.get(kwargs["icon"])
            if data:
                canvas.paste_image(kwargs["x"], kwargs["y"], data, (kwargs["size"], kwargs["size"]))
        elif op.op_type == "text":
            canvas.draw_text(
                kwargs["x"],
                kwargs["y"],
                kwargs["text"],
                kwargs["color"],
                kwargs["size"],
                kwargs.get("max_width"),
            )
