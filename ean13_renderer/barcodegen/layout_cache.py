"""Single-entry memo of the most recently prepared barcode layout."""

from __future__ import annotations

import logging
import threading
from typing import NamedTuple, Optional

from ean13_renderer.barcodegen.raster_renderer import BarcodeLayout

logger = logging.getLogger(__name__)

__all__ = ["LayoutKey", "LayoutCache"]


class LayoutKey(NamedTuple):
    digits: str
    scale: float
    height: float


class LayoutCache:
    """
    Holds at most one BarcodeLayout, keyed by (digits, scale, height).

    Colors are not part of the key: a layout is pure geometry and is
    repainted in whatever colors the render call asks for. Invalidation is
    explicit; a lookup with any other key is simply a miss.

    Example:
        >>> cache = LayoutCache()
        >>> key = LayoutKey("4006381333931", 2.0, 40.0)
        >>> cache.store(key, compute_layout(encode(key.digits), 2.0, 40.0))
        >>> cache.get(key) is not None
        True
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._key: Optional[LayoutKey] = None
        self._layout: Optional[BarcodeLayout] = None
        self.hits = 0
        self.misses = 0

    @property
    def key(self) -> Optional[LayoutKey]:
        with self._lock:
            return self._key

    def get(self, key: LayoutKey) -> Optional[BarcodeLayout]:
        with self._lock:
            if self._layout is not None and self._key == key:
                self.hits += 1
                return self._layout
            self.misses += 1
            return None

    def store(self, key: LayoutKey, layout: BarcodeLayout) -> None:
        with self._lock:
            self._key = key
            self._layout = layout
        logger.debug("Cached layout for %s", key)

    def invalidate(self) -> None:
        with self._lock:
            if self._layout is not None:
                logger.debug("Dropping cached layout for %s", self._key)
            self._key = None
            self._layout = None

    def __len__(self) -> int:
        with self._lock:
            return 0 if self._layout is None else 1
