from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from itemsvc.errors import ItemNotFoundError
from itemsvc.schemas import Item
from itemsvc.storage import ItemStore, NanosecondKeys


def test_put_and_get():
    store = ItemStore()
    store.put(Item(key="k1", value="hello"))
    assert store.get("k1") == Item(key="k1", value="hello")


def test_get_missing_raises_not_found():
    store = ItemStore()
    with pytest.raises(ItemNotFoundError) as exc_info:
        store.get("nope")
    assert exc_info.value.key == "nope"
    assert exc_info.value.status_code == 404


def test_put_overwrites_same_key():
    store = ItemStore()
    store.put(Item(key="k", value="a"))
    store.put(Item(key="k", value="b"))
    assert store.get("k").value == "b"
    assert len(store) == 1


def test_list_is_a_snapshot():
    store = ItemStore()
    store.put(Item(key="a", value="1"))
    snapshot = store.list()
    snapshot.append(Item(key="b", value="2"))
    snapshot.clear()
    assert store.list() == [Item(key="a", value="1")]


def test_list_empty():
    assert ItemStore().list() == []


def test_items_are_immutable():
    item = Item(key="a", value="1")
    with pytest.raises(ValidationError):
        item.value = "changed"


def test_keys_follow_the_clock():
    ticks = iter([1_000, 2_000, 3_000])
    next_key = NanosecondKeys(clock=lambda: next(ticks))
    assert [next_key(), next_key(), next_key()] == ["1000", "2000", "3000"]


def test_keys_stay_unique_when_the_clock_stalls():
    next_key = NanosecondKeys(clock=lambda: 500)
    assert [next_key() for _ in range(3)] == ["500", "501", "502"]


def test_keys_never_go_backwards():
    ticks = iter([900, 100, 950])
    next_key = NanosecondKeys(clock=lambda: next(ticks))
    assert [next_key(), next_key(), next_key()] == ["900", "901", "950"]


def test_default_keys_are_decimal_nanoseconds():
    key = NanosecondKeys()()
    assert key.isdigit()
    assert len(key) >= 19


def test_concurrent_puts_do_not_lose_items():
    store = ItemStore()
    next_key = NanosecondKeys()
    n = 200

    def create(i: int) -> str:
        item = Item(key=next_key(), value=f"v{i}")
        store.put(item)
        return item.key

    with ThreadPoolExecutor(max_workers=16) as pool:
        keys = list(pool.map(create, range(n)))

    assert len(set(keys)) == n
    assert len(store) == n
    assert {item.value for item in store.list()} == {f"v{i}" for i in range(n)}
