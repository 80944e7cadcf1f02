from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from io import BytesIO
from numbers import Real
from typing import Any, Final, Tuple, Union

from PIL import Image, ImageColor, ImageDraw

from ean13_renderer.barcodegen.ean13_encoder import ModuleSequence
from ean13_renderer.barcodegen.errors import InvalidParameterError
from ean13_renderer.model.enums import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_BAR_COLOR,
    DEFAULT_HEIGHT,
    DEFAULT_SCALE,
    RGBA,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ColorSpec",
    "BarcodeLayout",
    "normalize_color",
    "validate_dimensions",
    "compute_layout",
    "paint",
    "render",
    "render_bytes",
]

IMAGE_MODE: Final[str] = "RGBA"

# Pillow stores image dimensions as C ints
MAX_DIMENSION_PX: Final[int] = 2**31 - 1

# Anything Pillow understands: "black", "#00000080", (0, 0, 0), (0, 0, 0, 255)
ColorSpec = Union[str, Tuple[int, ...]]


@dataclass(frozen=True)
class BarcodeLayout:
    """
    Pixel geometry of a barcode, independent of colors.

    Args:
        sequence: Encoded module sequence
        scale: Pixels per module
        width: Image width in pixels
        height: Image height in pixels
        bar_spans: Half-open [x0, x1) pixel columns painted with the bar color
    """

    sequence: ModuleSequence
    scale: float
    width: int
    height: int
    bar_spans: Tuple[Tuple[int, int], ...]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


def normalize_color(value: Any) -> RGBA:
    """
    Convert a Pillow color spec into an RGBA tuple.

    Raises:
        InvalidParameterError: if the value is not a valid color.
    """
    if isinstance(value, str):
        try:
            rgba = ImageColor.getcolor(value, IMAGE_MODE)
        except ValueError as e:
            raise InvalidParameterError(
                f"Unknown color specifier: {value!r}"
            ) from e
        return tuple(rgba)  # type: ignore[return-value]

    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        channels = tuple(value)
        if all(
            isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255
            for c in channels
        ):
            if len(channels) == 3:
                channels = channels + (255,)
            return channels  # type: ignore[return-value]

    raise InvalidParameterError(
        "Color must be a color name, hex string or RGB/RGBA tuple of 0-255 ints",
        context={"color": repr(value)},
    )


def _require_positive(name: str, value: Any) -> float:
    if (
        isinstance(value, bool)
        or not isinstance(value, Real)
        or not math.isfinite(value)
        or value <= 0
    ):
        raise InvalidParameterError(
            f"{name} must be a positive finite number", context={name: value}
        )
    return float(value)


def validate_dimensions(scale: Any, height: Any) -> Tuple[float, float]:
    """Check scale and height, returning them as floats."""
    return _require_positive("scale", scale), _require_positive("height", height)


def _require_pixels(name: str, value: float) -> int:
    if not math.isfinite(value) or value > MAX_DIMENSION_PX:
        raise InvalidParameterError(
            f"{name} does not fit into an image",
            context={name: value, "max_px": MAX_DIMENSION_PX},
        )
    return max(1, round(value))


def compute_layout(
    sequence: ModuleSequence,
    scale: float = DEFAULT_SCALE,
    height: float = DEFAULT_HEIGHT,
) -> BarcodeLayout:
    """
    Place every bar of `sequence` on the pixel grid.

    Column boundaries are rounded from the cumulative module offset, so the
    image is always round(total_modules * scale) pixels wide regardless of
    how many elements precede a boundary.

    Raises:
        InvalidParameterError: scale or height is not a positive finite number,
            or the resulting image would exceed MAX_DIMENSION_PX.
    """
    scale, height = validate_dimensions(scale, height)
    width = _require_pixels("width", sequence.total_width * scale)
    height_px = _require_pixels("height", height)

    spans = []
    offset = 0
    for module in sequence:
        x0 = round(offset * scale)
        offset += module.width
        x1 = round(offset * scale)
        if module.is_bar and x1 > x0:
            spans.append((x0, x1))

    return BarcodeLayout(
        sequence=sequence,
        scale=scale,
        width=width,
        height=height_px,
        bar_spans=tuple(spans),
    )


def paint(
    layout: BarcodeLayout,
    bar_color: ColorSpec = DEFAULT_BAR_COLOR,
    background_color: ColorSpec = DEFAULT_BACKGROUND_COLOR,
) -> Image.Image:
    """
    Rasterize a layout into a fresh RGBA image.

    Bars are exact rectangles; nothing is anti-aliased or blended.
    """
    bar = normalize_color(bar_color)
    background = normalize_color(background_color)

    img = Image.new(IMAGE_MODE, layout.size, background)
    draw = ImageDraw.Draw(img)
    bottom = layout.height - 1
    for x0, x1 in layout.bar_spans:
        # ImageDraw rectangles include both corner coordinates
        draw.rectangle((x0, 0, x1 - 1, bottom), fill=bar)
    return img


def render(
    sequence: ModuleSequence,
    scale: float = DEFAULT_SCALE,
    height: float = DEFAULT_HEIGHT,
    bar_color: ColorSpec = DEFAULT_BAR_COLOR,
    background_color: ColorSpec = DEFAULT_BACKGROUND_COLOR,
) -> Image.Image:
    """
    Render a module sequence into a barcode image.

    Args:
        sequence: Output of `ean13_encoder.encode`.
        scale: Pixels per module (default: 1.0).
        height: Image height in pixels.
        bar_color: Color of the bars (default: opaque black).
        background_color: Color of the spaces (default: fully transparent).

    Returns:
        PIL Image (RGBA), round(95 * scale) x round(height) pixels.

    Raises:
        InvalidParameterError: scale/height non-positive or non-finite, or a
            color cannot be parsed.
    """
    layout = compute_layout(sequence, scale, height)
    logger.debug(
        "Rendering barcode %s at %dx%d px (scale=%s)",
        sequence.digits,
        layout.width,
        layout.height,
        layout.scale,
    )
    return paint(layout, bar_color, background_color)


def render_bytes(
    sequence: ModuleSequence,
    scale: float = DEFAULT_SCALE,
    height: float = DEFAULT_HEIGHT,
    bar_color: ColorSpec = DEFAULT_BAR_COLOR,
    background_color: ColorSpec = DEFAULT_BACKGROUND_COLOR,
    fmt: str = "PNG",
) -> bytes:
    img = render(sequence, scale, height, bar_color, background_color)
    buf = BytesIO()
    img.save(buf, format=fmt)
    buf.seek(0)
    return buf.read()
