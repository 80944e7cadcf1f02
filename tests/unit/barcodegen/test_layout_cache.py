import threading

import pytest

from ean13_renderer.barcodegen.ean13_encoder import encode
from ean13_renderer.barcodegen.layout_cache import LayoutCache, LayoutKey
from ean13_renderer.barcodegen.raster_renderer import BarcodeLayout, compute_layout


@pytest.fixture
def key() -> LayoutKey:
    return LayoutKey("4006381333931", 2.0, 40.0)


@pytest.fixture
def layout(key: LayoutKey) -> BarcodeLayout:
    return compute_layout(encode(key.digits), key.scale, key.height)


def test_empty_cache_misses(key: LayoutKey) -> None:
    cache = LayoutCache()
    assert cache.get(key) is None
    assert cache.key is None
    assert len(cache) == 0
    assert cache.misses == 1
    assert cache.hits == 0


def test_store_then_hit(key: LayoutKey, layout: BarcodeLayout) -> None:
    cache = LayoutCache()
    cache.store(key, layout)
    assert cache.get(key) is layout
    assert cache.key == key
    assert len(cache) == 1
    assert cache.hits == 1


@pytest.mark.parametrize(
    "other",
    [
        LayoutKey("5901234123457", 2.0, 40.0),
        LayoutKey("4006381333931", 3.0, 40.0),
        LayoutKey("4006381333931", 2.0, 41.0),
    ],
)
def test_different_key_misses(
    key: LayoutKey, layout: BarcodeLayout, other: LayoutKey
) -> None:
    cache = LayoutCache()
    cache.store(key, layout)
    assert cache.get(other) is None
    assert cache.get(key) is layout


def test_store_replaces_single_entry(key: LayoutKey, layout: BarcodeLayout) -> None:
    cache = LayoutCache()
    cache.store(key, layout)
    other = LayoutKey("4006381333931", 1.0, 40.0)
    cache.store(other, compute_layout(layout.sequence, 1.0, 40.0))
    assert len(cache) == 1
    assert cache.get(key) is None
    assert cache.get(other) is not None


def test_invalidate(key: LayoutKey, layout: BarcodeLayout) -> None:
    cache = LayoutCache()
    cache.store(key, layout)
    cache.invalidate()
    assert cache.get(key) is None
    assert cache.key is None
    assert len(cache) == 0
    # invalidating an empty cache is a no-op
    cache.invalidate()


def test_concurrent_access(key: LayoutKey, layout: BarcodeLayout) -> None:
    cache = LayoutCache()
    errors = []

    def worker() -> None:
        try:
            for _ in range(200):
                cache.store(key, layout)
                hit = cache.get(key)
                assert hit is None or hit is layout
                cache.invalidate()
        except AssertionError as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert not errors
    assert cache.hits + cache.misses == 800
