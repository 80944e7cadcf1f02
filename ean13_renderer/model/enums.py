"""
model/enums.py

(Краткое RU: Перечисления доменной модели штрихкода EAN-13/UPC-A.)

EN: Domain enums for the EAN-13 renderer (module kinds, digit parity tables,
error taxonomy) and the default rendering constants.
NO encoding or drawing logic here!

- ModuleKind: bar or space element of a module sequence.
- Parity: which 7-module digit table (L, G or R) encodes a digit.
- ErrorKind: stable identifiers for every failure the package reports.

See Also:
    - ean13_renderer/barcodegen/ean13_encoder.py (for the encoding tables)
    - GS1 General Specifications, section 5.2 (EAN/UPC symbology)
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Literal, Tuple

# === SYMBOL CONSTANTS ===
EAN13_LENGTH: Final[int] = 13
UPCA_LENGTH: Final[int] = 12

RGBA = Tuple[int, int, int, int]


class ModuleKind(str, Enum):
    BAR = "bar"
    SPACE = "space"

    @property
    def bit(self) -> str:
        return "1" if self is ModuleKind.BAR else "0"

    @classmethod
    def from_bit(cls, bit: str) -> "ModuleKind":
        if bit == "1":
            return cls.BAR
        if bit == "0":
            return cls.SPACE
        raise ValueError(f"Module bit must be '0' or '1', got {bit!r}")


class Parity(str, Enum):
    """Digit encoding table: L (odd), G (even) for the left half, R for the right."""

    L = "L"
    G = "G"
    R = "R"


class ErrorKind(str, Enum):
    INVALID_CHARACTERS = "invalid_characters"
    INVALID_LENGTH = "invalid_length"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    INVALID_PARAMETER = "invalid_parameter"

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            ErrorKind.INVALID_CHARACTERS: "Недопустимые символы",
            ErrorKind.INVALID_LENGTH: "Недопустимая длина",
            ErrorKind.CHECKSUM_MISMATCH: "Неверная контрольная цифра",
            ErrorKind.INVALID_PARAMETER: "Недопустимый параметр рендеринга",
        }
        names_en = {
            ErrorKind.INVALID_CHARACTERS: "Invalid characters",
            ErrorKind.INVALID_LENGTH: "Invalid length",
            ErrorKind.CHECKSUM_MISMATCH: "Checksum mismatch",
            ErrorKind.INVALID_PARAMETER: "Invalid rendering parameter",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


# === DEFAULTS ===
DEFAULT_SCALE: Final[float] = 1.0
DEFAULT_HEIGHT: Final[float] = 50.0
DEFAULT_BAR_COLOR: Final[RGBA] = (0, 0, 0, 255)  # opaque black
DEFAULT_BACKGROUND_COLOR: Final[RGBA] = (0, 0, 0, 0)  # fully transparent


__all__ = [
    "EAN13_LENGTH",
    "UPCA_LENGTH",
    "RGBA",
    "ModuleKind",
    "Parity",
    "ErrorKind",
    "DEFAULT_SCALE",
    "DEFAULT_HEIGHT",
    "DEFAULT_BAR_COLOR",
    "DEFAULT_BACKGROUND_COLOR",
]
