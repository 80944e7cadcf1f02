from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import groupby
from typing import Dict, Final, Iterator, Tuple

from ean13_renderer.barcodegen.errors import (
    ChecksumMismatchError,
    EncodeError,
    InvalidCharactersError,
    InvalidLengthError,
)
from ean13_renderer.model.enums import (
    EAN13_LENGTH,
    UPCA_LENGTH,
    ModuleKind,
    Parity,
)

logger = logging.getLogger(__name__)

__all__ = [
    "Module",
    "ModuleSequence",
    "LEFT_GUARD",
    "CENTER_GUARD",
    "RIGHT_GUARD",
    "PARITY_PATTERNS",
    "DIGIT_CODES",
    "normalize_digits",
    "compute_check_digit",
    "append_check_digit",
    "encode",
    "encode_bits",
    "is_valid",
]

# Guard patterns, "1" = bar module, "0" = space module.
LEFT_GUARD: Final[str] = "101"
CENTER_GUARD: Final[str] = "01010"
RIGHT_GUARD: Final[str] = "101"

# Parity of the six left-hand digits, selected by the leading digit.
PARITY_PATTERNS: Final[Dict[str, Tuple[Parity, ...]]] = {
    lead: tuple(Parity(p) for p in pattern)
    for lead, pattern in {
        "0": "LLLLLL",
        "1": "LLGLGG",
        "2": "LLGGLG",
        "3": "LLGGGL",
        "4": "LGLLGG",
        "5": "LGGLLG",
        "6": "LGGGLL",
        "7": "LGLGLG",
        "8": "LGLGGL",
        "9": "LGGLGL",
    }.items()
}

_L_CODES: Final[Dict[str, str]] = {
    "0": "0001101",
    "1": "0011001",
    "2": "0010011",
    "3": "0111101",
    "4": "0100011",
    "5": "0110001",
    "6": "0101111",
    "7": "0111011",
    "8": "0110111",
    "9": "0001011",
}

_G_CODES: Final[Dict[str, str]] = {
    "0": "0100111",
    "1": "0110011",
    "2": "0011011",
    "3": "0100001",
    "4": "0011101",
    "5": "0111001",
    "6": "0000101",
    "7": "0010001",
    "8": "0001001",
    "9": "0010111",
}

_R_CODES: Final[Dict[str, str]] = {
    "0": "1110010",
    "1": "1100110",
    "2": "1101100",
    "3": "1000010",
    "4": "1011100",
    "5": "1001110",
    "6": "1010000",
    "7": "1000100",
    "8": "1001000",
    "9": "1110100",
}

DIGIT_CODES: Final[Dict[Parity, Dict[str, str]]] = {
    Parity.L: _L_CODES,
    Parity.G: _G_CODES,
    Parity.R: _R_CODES,
}

_ASCII_DIGITS: Final[frozenset[str]] = frozenset("0123456789")


@dataclass(frozen=True)
class Module:
    """One bar or space, `width` modules wide."""

    kind: ModuleKind
    width: int

    @property
    def is_bar(self) -> bool:
        return self.kind is ModuleKind.BAR


@dataclass(frozen=True)
class ModuleSequence:
    """
    Immutable EAN-13 bar/space sequence.

    Adjacent modules of the same kind are merged, so elements strictly
    alternate between bars and spaces, starting and ending with a bar.

    Args:
        digits: Normalized 13-digit string the sequence was encoded from
        modules: Left-to-right elements
    """

    digits: str
    modules: Tuple[Module, ...]

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)

    @property
    def total_width(self) -> int:
        return sum(m.width for m in self.modules)

    @property
    def bar_count(self) -> int:
        return sum(1 for m in self.modules if m.is_bar)

    def to_bits(self) -> str:
        """Expand the sequence back to one "1"/"0" character per module."""
        return "".join(m.kind.bit * m.width for m in self.modules)

    @classmethod
    def from_bits(cls, digits: str, bits: str) -> "ModuleSequence":
        modules = tuple(
            Module(ModuleKind.from_bit(bit), len(list(run)))
            for bit, run in groupby(bits)
        )
        return cls(digits=digits, modules=modules)


def _require_digits(value: object) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidCharactersError(
            "Barcode must be a non-empty string of digits",
            context={"type": type(value).__name__},
        )
    # str.isdigit() also accepts non-ASCII digits such as "٣" or "²"
    if not all(ch in _ASCII_DIGITS for ch in value):
        raise InvalidCharactersError(
            "Barcode must contain ASCII digits 0-9 only",
            context={"barcode": value},
        )
    return value


def normalize_digits(digits: str) -> str:
    """
    Validate characters and length, and widen UPC-A to EAN-13.

    Returns:
        13-digit string; a 12-digit UPC-A input gets a leading "0".

    Raises:
        InvalidCharactersError: if `digits` is empty or not all ASCII digits.
        InvalidLengthError: if the length is not 12 or 13.
    """
    value = _require_digits(digits)
    if len(value) not in (UPCA_LENGTH, EAN13_LENGTH):
        raise InvalidLengthError(
            "EAN-13 requires 12 or 13 digits",
            context={"length": len(value)},
        )
    if len(value) == UPCA_LENGTH:
        value = "0" + value
    return value


def compute_check_digit(data: str) -> int:
    """
    Compute the EAN-13 check digit for 12 data digits.

    Weights alternate 1, 3, 1, 3, ... from the leftmost digit. 11 digits are
    treated as UPC-A data and padded with a leading "0", which does not change
    the result.

    >>> compute_check_digit("400638133393")
    1
    """
    value = _require_digits(data)
    if len(value) == UPCA_LENGTH - 1:
        value = "0" + value
    if len(value) != EAN13_LENGTH - 1:
        raise InvalidLengthError(
            "Check digit needs 11 (UPC-A) or 12 (EAN-13) data digits",
            context={"length": len(value)},
        )
    total = sum(int(ch) * (3 if i % 2 else 1) for i, ch in enumerate(value))
    return (10 - total % 10) % 10


def append_check_digit(data: str) -> str:
    """
    Complete a code by appending its computed check digit.

    This is the opt-in convenience path; `encode` never derives a missing
    check digit on its own.

    >>> append_check_digit("400638133393")
    '4006381333931'
    >>> append_check_digit("03600029145")
    '036000291452'
    """
    return f"{data}{compute_check_digit(data)}"


def _encode_normalized(value: str) -> str:
    expected = compute_check_digit(value[:-1])
    actual = int(value[-1])
    if expected != actual:
        raise ChecksumMismatchError(
            f"Check digit {actual} does not match computed {expected}",
            expected=expected,
            actual=actual,
            context={"barcode": value},
        )

    parity = PARITY_PATTERNS[value[0]]
    left = "".join(DIGIT_CODES[p][d] for p, d in zip(parity, value[1:7]))
    right = "".join(_R_CODES[d] for d in value[7:])
    return LEFT_GUARD + left + CENTER_GUARD + right + RIGHT_GUARD


def encode_bits(digits: str) -> str:
    """Encode to a 95-character string, "1" per bar module, "0" per space."""
    return _encode_normalized(normalize_digits(digits))


def encode(digits: str) -> ModuleSequence:
    """
    Encode a 12- or 13-digit string as an EAN-13 module sequence.

    Args:
        digits: 13-digit EAN-13 or 12-digit UPC-A code, check digit included.

    Returns:
        ModuleSequence spanning exactly 95 modules.

    Raises:
        InvalidCharactersError: input is empty or contains non-digits.
        InvalidLengthError: input is not 12 or 13 characters long.
        ChecksumMismatchError: the supplied check digit is wrong.
    """
    value = normalize_digits(digits)
    sequence = ModuleSequence.from_bits(value, _encode_normalized(value))
    logger.debug(
        "Encoded barcode %s into %d elements (%d modules)",
        sequence.digits,
        len(sequence),
        sequence.total_width,
    )
    return sequence


def is_valid(digits: object) -> bool:
    """True if `digits` would encode without error."""
    try:
        encode_bits(digits)  # type: ignore[arg-type]
    except EncodeError:
        return False
    return True
