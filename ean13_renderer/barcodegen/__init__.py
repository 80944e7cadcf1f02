"""
barcodegen

Кодирование и растровый рендеринг штрихкодов EAN-13 / UPC-A.

- Кодировщик: строка из 12 или 13 цифр -> последовательность из 95 модулей
  (штрихи/пробелы) со строгой проверкой контрольной цифры.
- Рендерер: последовательность модулей -> изображение PIL с заданным
  масштабом, высотой и цветами.
- Кэш раскладки для предварительной подготовки (prepare).

Public API:
    - encode / encode_bits: кодирование строки цифр (functions)
    - compute_check_digit / append_check_digit: контрольная цифра (functions)
    - ModuleSequence, Module: результат кодирования (dataclasses)
    - render / render_bytes / compute_layout / paint: рендеринг (functions)
    - BarcodeLayout: геометрия в пикселях (dataclass)
    - LayoutCache, LayoutKey: кэш раскладки
    - BarcodeGenError и подклассы: типизированные ошибки

Примеры:
    >>> from ean13_renderer.barcodegen import encode, render
    >>> img = render(encode("4006381333931"), scale=2.0, height=60)
    >>> img.size
    (190, 60)

Зависимости:
    Pillow
"""

from ean13_renderer.barcodegen.ean13_encoder import (
    Module,
    ModuleSequence,
    append_check_digit,
    compute_check_digit,
    encode,
    encode_bits,
    is_valid,
    normalize_digits,
)
from ean13_renderer.barcodegen.errors import (
    BarcodeGenError,
    ChecksumMismatchError,
    EncodeError,
    InvalidCharactersError,
    InvalidLengthError,
    InvalidParameterError,
    RenderError,
)
from ean13_renderer.barcodegen.layout_cache import LayoutCache, LayoutKey
from ean13_renderer.barcodegen.raster_renderer import (
    BarcodeLayout,
    ColorSpec,
    compute_layout,
    normalize_color,
    paint,
    render,
    render_bytes,
)

__all__ = [
    "Module",
    "ModuleSequence",
    "append_check_digit",
    "compute_check_digit",
    "encode",
    "encode_bits",
    "is_valid",
    "normalize_digits",
    "BarcodeGenError",
    "ChecksumMismatchError",
    "EncodeError",
    "InvalidCharactersError",
    "InvalidLengthError",
    "InvalidParameterError",
    "RenderError",
    "LayoutCache",
    "LayoutKey",
    "BarcodeLayout",
    "ColorSpec",
    "compute_layout",
    "normalize_color",
    "paint",
    "render",
    "render_bytes",
]
