import random

import pytest

from symtab.errors import EmptyStructureError
from symtab.indexing import OrderedMap, OrderedSymbolTable


def build_searchexmpl():
    st = OrderedMap()
    for i, key in enumerate("SEARCHEXMPL"):
        st.put(key, i)
    return st


def test_ordered_map_is_an_ordered_symbol_table():
    assert isinstance(OrderedMap(), OrderedSymbolTable)
    with pytest.raises(TypeError):
        OrderedSymbolTable()


def test_searchexmpl_scenario():
    st = build_searchexmpl()

    assert st.size() == 10
    assert len(st) == 10
    assert st.min() == "A"
    assert st.max() == "X"
    assert st.floor("G") == "E"
    assert st.ceiling("N") == "P"
    assert list(st.level_order()) == list("SEXARCHMLP")

    st.delete("H")
    assert st.size() == 9
    assert st.check()
    assert "H" not in st
    assert list(st.level_order()) == list("SEXARCMLP")
    assert list(st) == list("ACELMPRSX")


def test_get_returns_latest_value_and_default_on_miss():
    st = build_searchexmpl()
    assert st.get("E") == 6
    assert st.get("L") == 10
    assert st.get("Z") is None
    assert st.get("B", "missing") == "missing"


def test_overwrite_keeps_size():
    st = OrderedMap()
    st.put(5, "v1")
    st.put(5, "v2")
    assert st.size() == 1
    assert st.get(5) == "v2"


def test_none_value_is_distinguishable_from_miss():
    st = OrderedMap()
    st.put("k", None)
    assert "k" in st
    assert "j" not in st
    assert st.get("k", "default") is None


def test_floor_and_ceiling_boundaries():
    st = build_searchexmpl()
    assert st.floor("0") is None
    assert st.ceiling("Z") is None
    for key in "SEARCHXMPL":
        assert st.floor(key) == key
        assert st.ceiling(key) == key
    assert st.floor("Z") == "X"
    assert st.ceiling("0") == "A"
    assert st.floor("B") == "A"
    assert st.ceiling("B") == "C"
    assert st.floor("Q") == "P"
    assert st.ceiling("T") == "X"


def test_floor_and_ceiling_on_empty_map():
    st = OrderedMap()
    assert st.floor(1) is None
    assert st.ceiling(1) is None


def test_empty_map_order_operations_raise():
    st = OrderedMap()
    assert st.is_empty()
    assert st.size() == 0
    assert st.height() == 0
    for op in (st.min, st.max, st.delete_min, st.delete_max):
        with pytest.raises(EmptyStructureError):
            op()


def test_delete_min_and_max():
    st = build_searchexmpl()

    st.delete_min()
    assert st.min() == "C"
    assert st.size() == 9
    assert list(st.level_order()) == list("SEXCRHMLP")

    st.delete_max()
    assert st.max() == "S"
    assert st.size() == 8
    assert st.check()


def test_delete_min_repeatedly_yields_ascending_keys():
    st = OrderedMap()
    keys = [50, 20, 70, 10, 30, 60, 80, 25, 65]
    for k in keys:
        st.put(k, str(k))

    drained = []
    while not st.is_empty():
        drained.append(st.min())
        st.delete_min()
        assert st.check()
    assert drained == sorted(keys)


def test_delete_max_repeatedly_yields_descending_keys():
    st = OrderedMap()
    keys = [50, 20, 70, 10, 30, 60, 80, 75, 5]
    for k in keys:
        st.put(k, k)

    drained = []
    while not st.is_empty():
        drained.append(st.max())
        st.delete_max()
        assert st.check()
    assert drained == sorted(keys, reverse=True)


def test_delete_node_with_two_children_promotes_successor():
    st = build_searchexmpl()
    assert st.delete("E") is True

    assert st.size() == 9
    assert st.check()
    assert list(st.level_order()) == list("SHXARCMLP")
    assert st.get("H") == 5


def test_delete_root():
    st = build_searchexmpl()
    st.delete("S")
    assert st.size() == 9
    assert st.check()
    assert list(st.level_order())[0] == "X"
    assert list(st) == list("ACEHLMPRX")


def test_delete_leaf_and_single_child_nodes():
    st = build_searchexmpl()
    st.delete("L")  # leaf
    st.delete("A")  # right child only
    st.delete("R")  # left child only
    assert st.size() == 7
    assert st.check()
    assert list(st) == list("CEHMPSX")


def test_delete_absent_key_is_noop():
    st = build_searchexmpl()
    before = list(st.level_order())
    assert st.delete("Z") is False
    assert st.delete("B") is False
    assert st.size() == 10
    assert list(st.level_order()) == before

    assert OrderedMap().delete("A") is False


def test_delete_last_key_empties_map():
    st = OrderedMap()
    st.put(1, "one")
    assert st.delete(1)
    assert st.is_empty()
    with pytest.raises(EmptyStructureError):
        st.min()


def test_none_and_nan_keys_are_rejected():
    st = OrderedMap()
    st.put(1.0, "x")
    for op in (st.get, st.delete, st.floor, st.ceiling):
        with pytest.raises(ValueError):
            op(None)
    with pytest.raises(ValueError):
        st.put(None, 1)
    with pytest.raises(ValueError):
        st.put(float("nan"), 1)
    assert st.size() == 1


def test_incomparable_key_leaves_tree_untouched():
    st = OrderedMap()
    for k in (5, 2, 8, 1, 9):
        st.put(k, k)
    before = list(st.level_order())

    with pytest.raises(TypeError):
        st.put("five", 5)
    with pytest.raises(TypeError):
        st.delete("two")

    assert st.size() == 5
    assert st.check()
    assert list(st.level_order()) == before


def test_items_values_and_keys_are_in_key_order():
    st = OrderedMap()
    for k, v in [(3, "c"), (1, "a"), (2, "b")]:
        st.put(k, v)
    assert list(st.keys()) == [1, 2, 3]
    assert list(st.values()) == ["a", "b", "c"]
    assert list(st.items()) == [(1, "a"), (2, "b"), (3, "c")]


def test_height_tracks_shape():
    st = OrderedMap()
    for k in range(6):
        st.put(k, k)
    assert st.height() == 6

    balanced = OrderedMap()
    for k in (4, 2, 6, 1, 3, 5, 7):
        balanced.put(k, k)
    assert balanced.height() == 3


def test_random_operations_preserve_invariants():
    rng = random.Random(1337)
    st = OrderedMap()
    reference = {}

    for step in range(2000):
        key = rng.randrange(300)
        roll = rng.random()
        if roll < 0.55:
            st.put(key, step)
            reference[key] = step
        elif roll < 0.85:
            assert st.delete(key) == (key in reference)
            reference.pop(key, None)
        elif roll < 0.92 and reference:
            smallest = min(reference)
            st.delete_min()
            del reference[smallest]
        elif reference:
            largest = max(reference)
            st.delete_max()
            del reference[largest]

        assert st.size() == len(reference)
        if step % 50 == 0:
            assert st.check()

    assert st.check()
    assert list(st) == sorted(reference)
    for key, value in reference.items():
        assert st.get(key) == value


def test_copy_is_independent_and_keeps_shape():
    st = build_searchexmpl()
    clone = st.copy()

    assert list(clone.level_order()) == list(st.level_order())
    assert list(clone.items()) == list(st.items())
    assert clone.check()

    clone.delete("E")
    clone.put("Z", 99)
    assert st.size() == 10
    assert "E" in st and "Z" not in st
    assert list(st.level_order()) == list("SEXARCHMLP")
    assert OrderedMap().copy().is_empty()
