"""Доменная модель: перечисления и объект штрихкода EAN-13 (см. ean13_barcode)."""

from .enums import ErrorKind, ModuleKind, Parity

__all__ = ["ErrorKind", "ModuleKind", "Parity"]
