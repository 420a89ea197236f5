import pytest

from workbook_compare.models.diff_model import DiffResult
from workbook_compare.services.cache_service import ResultCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_put_and_get():
    cache = ResultCache(ttl_seconds=10, clock=FakeClock())
    result = DiffResult()
    comparison_id = cache.put(result)

    assert cache.get(comparison_id) is result
    assert len(cache) == 1


def test_unknown_id_returns_none():
    cache = ResultCache()
    assert cache.get("missing") is None


def test_entry_expires_after_ttl():
    clock = FakeClock()
    cache = ResultCache(ttl_seconds=10, clock=clock)
    comparison_id = cache.put(DiffResult())

    clock.now = 9.9
    assert cache.get(comparison_id) is not None
    clock.now = 10
    assert cache.get(comparison_id) is None
    assert len(cache) == 0


def test_evict_expired():
    clock = FakeClock()
    cache = ResultCache(ttl_seconds=10, clock=clock)
    cache.put(DiffResult())
    clock.now = 5
    fresh = cache.put(DiffResult())

    clock.now = 12
    assert cache.evict_expired() == 1
    assert len(cache) == 1
    assert cache.get(fresh) is not None


def test_ids_are_unique():
    cache = ResultCache()
    ids = {cache.put(DiffResult()) for _ in range(20)}
    assert len(ids) == 20


@pytest.mark.parametrize("ttl", [0, -1])
def test_rejects_non_positive_ttl(ttl):
    with pytest.raises(ValueError):
        ResultCache(ttl_seconds=ttl)
