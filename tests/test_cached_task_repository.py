from __future__ import annotations

import threading

import pytest

from taskdesk.errors import StoreError
from taskdesk.models.entities import BasicTask, RecurringTask
from taskdesk.repositories.cached_task_repository import CachedTaskRepository

from .fakes import BrokenRepository, CountingRepository


@pytest.fixture()
def proxy(counting: CountingRepository) -> CachedTaskRepository:
    return CachedTaskRepository(counting)


def test_list_is_served_from_cache_until_a_write(proxy, counting):
    proxy.list_tasks()
    proxy.list_tasks()
    assert counting.calls["list_tasks"] == 1

    proxy.add_task(BasicTask(0, "new"))
    assert [t.title for t in proxy.list_tasks()] == ["new"]
    assert counting.calls["list_tasks"] == 2


def test_list_fill_indexes_by_id(proxy, counting, store):
    store.add_task(BasicTask(0, "a"))
    store.add_task(BasicTask(0, "b"))
    proxy.list_tasks()
    assert proxy.get_task(2).title == "b"
    assert counting.calls["get_task"] == 0


def test_get_hit_is_cached_and_miss_is_not(proxy, counting, store):
    store.add_task(BasicTask(0, "a"))
    assert proxy.get_task(1).title == "a"
    assert proxy.get_task(1).title == "a"
    assert counting.calls["get_task"] == 1

    assert proxy.get_task(9) is None
    assert proxy.get_task(9) is None
    assert counting.calls["get_task"] == 3


@pytest.mark.parametrize(
    "write",
    [
        lambda p: p.add_task(BasicTask(0, "x")),
        lambda p: p.update_task(BasicTask(1, "renamed")),
        lambda p: p.delete_task(1),
        lambda p: p.delete_all_tasks(),
    ],
)
def test_every_write_invalidates_both_caches(proxy, counting, store, write):
    store.add_task(BasicTask(0, "seed"))
    proxy.list_tasks()
    proxy.get_task(1)
    write(proxy)
    assert proxy.list_tasks() == store.list_tasks()
    assert counting.calls["list_tasks"] == 2


def test_update_is_visible_through_get(proxy, store):
    store.add_task(RecurringTask(0, "gym", interval=3))
    proxy.get_task(1)
    proxy.update_task(RecurringTask(1, "Updated", interval=3))
    assert proxy.get_task(1).title == "Updated"


def test_returned_lists_are_copies(proxy, store):
    store.add_task(BasicTask(0, "a"))
    first = proxy.list_tasks()
    first.clear()
    assert len(proxy.list_tasks()) == 1


def test_replacing_target_invalidates(proxy, counting, store):
    store.add_task(BasicTask(0, "a"))
    proxy.list_tasks()
    other = CountingRepository(store)
    proxy.target = other
    proxy.list_tasks()
    assert other.calls["list_tasks"] == 1
    assert proxy.target is other


def test_failed_write_still_invalidates():
    broken = BrokenRepository()
    proxy = CachedTaskRepository(broken)
    proxy._tasks = [BasicTask(1, "stale")]
    with pytest.raises(StoreError):
        proxy.add_task(BasicTask(0, "x"))
    with pytest.raises(StoreError):
        proxy.list_tasks()
    assert broken.calls["list_tasks"] == 1


def test_concurrent_readers_fill_cache_once(proxy, counting, store):
    for i in range(5):
        store.add_task(BasicTask(0, f"t{i}"))
    barrier = threading.Barrier(8)
    results = []

    def reader():
        barrier.wait()
        results.append(len(proxy.list_tasks()))

    threads = [threading.Thread(target=reader) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == [5] * 8
    assert counting.calls["list_tasks"] == 1


def test_count_uses_cached_list(proxy, counting, store):
    store.add_task(BasicTask(0, "a"))
    assert proxy.count_tasks() == 1
    assert proxy.count_tasks() == 1
    assert counting.calls["list_tasks"] == 1
