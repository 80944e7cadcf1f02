"""
Исключения генерации штрихкодов EAN-13.

Иерархия типизированных исключений для кодировщика и растрового
рендерера. Каждое исключение несёт стабильный ErrorKind, поэтому
вызывающий код может различать ошибки без разбора текста сообщения.

Example:
    >>> from ean13_renderer.barcodegen.errors import BarcodeGenError
    >>> try:
    ...     encode("12345")
    ... except BarcodeGenError as e:
    ...     logger.error(f"Barcode failed: {e}")
    ...     print(e.kind)

Иерархия:
    BarcodeGenError (базовое)
    ├── EncodeError
    │   ├── InvalidCharactersError
    │   ├── InvalidLengthError
    │   └── ChecksumMismatchError
    └── RenderError
        └── InvalidParameterError
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ean13_renderer.model.enums import ErrorKind

__all__: list[str] = [
    "BarcodeGenError",
    "EncodeError",
    "InvalidCharactersError",
    "InvalidLengthError",
    "ChecksumMismatchError",
    "RenderError",
    "InvalidParameterError",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class BarcodeGenError(Exception):
    """
    Базовое исключение для всех ошибок генерации штрихкода.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        kind: Категория ошибки (ErrorKind); None у групповых классов
              EncodeError и RenderError, которые сами не выбрасываются
        context: Дополнительный контекст для отладки (опционально)
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """
        Строковое представление исключения.

        Example:
            >>> str(InvalidLengthError("EAN-13 requires 12 or 13 digits", context={"length": 5}))
            'InvalidLengthError: EAN-13 requires 12 or 13 digits (length=5)'
        """
        parts = [self.__class__.__name__, ": ", self.message]

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        """Представление для отладки."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"kind={self.kind.value if self.kind else None!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# ENCODER ERRORS
# ==============================================================================


class EncodeError(BarcodeGenError):
    """Входная строка не может быть закодирована как EAN-13."""


class InvalidCharactersError(EncodeError):
    """Input is empty or contains something other than ASCII digits."""

    kind = ErrorKind.INVALID_CHARACTERS


class InvalidLengthError(EncodeError):
    """Input length is neither 12 (UPC-A) nor 13 (EAN-13)."""

    kind = ErrorKind.INVALID_LENGTH


class ChecksumMismatchError(EncodeError):
    """
    Контрольная цифра не совпадает с вычисленной.

    Attributes:
        expected: Вычисленная контрольная цифра
        actual: Контрольная цифра из входной строки
    """

    kind = ErrorKind.CHECKSUM_MISMATCH

    def __init__(
        self,
        message: str,
        *,
        expected: int,
        actual: int,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        ctx = {"expected": expected, "actual": actual}
        ctx.update(context or {})
        super().__init__(message, context=ctx)
        self.expected = expected
        self.actual = actual


# ==============================================================================
# RENDERER ERRORS
# ==============================================================================


class RenderError(BarcodeGenError):
    """Ошибки растрового рендеринга."""


class InvalidParameterError(RenderError):
    """Scale, height or a color is malformed (non-positive, non-finite, unparsable)."""

    kind = ErrorKind.INVALID_PARAMETER
