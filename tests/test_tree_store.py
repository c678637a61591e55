import json
from unittest import mock

import pytest

from core.errors import CyclicMove, InvalidParent, InvalidTitle, NodeNotFound
from core.item import Item
from core.serializer import deserialize
from core.tree_store import LoadStatus, MoveTarget, TreeStore

from conftest import find, titles


def _on_disk(store):
    return deserialize(store.path.read_text(encoding="utf-8"))


# ---------- load / save ----------

def test_load_missing_file_gives_sample_without_writing(list_path):
    store = TreeStore(list_path)
    assert store.load() is LoadStatus.SAMPLE
    assert titles(store) == ["Shopping lists"]
    assert titles(store, find(store, "Shopping lists")) == ["Dairy", "Bakery"]
    assert not list_path.exists()
    assert store.write_count == 0


def test_load_existing_file(list_path):
    list_path.write_text(json.dumps([{"title": "Garden", "subTasks": [{"title": "Seeds"}]}]), encoding="utf-8")
    store = TreeStore(list_path)
    assert store.load() is LoadStatus.FILE
    assert titles(store) == ["Garden"]
    assert titles(store, find(store, "Garden")) == ["Seeds"]


def test_load_malformed_file_recovers_with_sample(list_path):
    list_path.write_text("[{ this is not json", encoding="utf-8")
    store = TreeStore(list_path)
    assert store.load() is LoadStatus.RECOVERED
    assert store.load_error is not None
    assert titles(store) == ["Shopping lists"]
    # The broken file is left alone until the next mutation.
    assert list_path.read_text(encoding="utf-8") == "[{ this is not json"


def test_load_non_utf8_file_recovers_with_sample(list_path):
    list_path.write_bytes(b"[{\"title\": \"\xff\xfe caf\xe9\"}]")
    store = TreeStore(list_path)
    assert store.load() is LoadStatus.RECOVERED
    assert store.load_error is not None
    assert titles(store) == ["Shopping lists"]


def test_load_deeply_nested_file_recovers_with_sample(list_path):
    list_path.write_text("[" + '{"title": "x", "subTasks": [' * 5000 + "]}" * 5000 + "]", encoding="utf-8")
    store = TreeStore(list_path)
    assert store.load() is LoadStatus.RECOVERED
    assert titles(store) == ["Shopping lists"]


def test_load_replaces_previous_forest(make_store, list_path):
    store = make_store([Item("Old")])
    list_path.write_text('[{"title": "New"}]', encoding="utf-8")
    store.load()
    assert titles(store) == ["New"]
    assert len(store) == 1


def test_every_mutation_writes_file(sample_store):
    dairy = find(sample_store, "Dairy")
    new_id = sample_store.add_child(dairy, "Butter")
    assert sample_store.write_count == 1
    assert [c.title for c in _on_disk(sample_store)[0].children[0].children] == ["Milk", "Cheese", "Butter"]

    sample_store.set_done(new_id, True)
    sample_store.rename(new_id, "Salted butter")
    sample_store.set_quantity(new_id, 2)
    sample_store.set_url(new_id, "https://shop/butter")
    assert sample_store.write_count == 5
    assert _on_disk(sample_store) == sample_store.forest()


def test_save_failure_is_reported_and_memory_kept(sample_store):
    errors = []
    sample_store.on_save_error = errors.append
    with mock.patch.object(sample_store, "save", side_effect=OSError("disk full")):
        new_id = sample_store.add_root("Pharmacy")
    assert sample_store.dirty
    assert len(errors) == 1 and "disk full" in str(errors[0])
    assert sample_store.get(new_id).title == "Pharmacy"

    sample_store.set_done(new_id, True)
    assert not sample_store.dirty
    assert _on_disk(sample_store)[-1].title == "Pharmacy"


# ---------- add ----------

def test_add_child_defaults(sample_store):
    bakery = find(sample_store, "Bakery")
    new_id = sample_store.add_child(bakery, "Rolls")
    item = sample_store.get(new_id)
    assert (item.title, item.url, item.is_done, item.quantity, item.children) == ("Rolls", None, False, 1, [])
    assert sample_store.parent_of(new_id) == bakery
    assert titles(sample_store, bakery) == ["Bread", "Rolls"]


def test_add_child_with_url(sample_store):
    dairy = find(sample_store, "Dairy")
    new_id = sample_store.add_child_with_url(dairy, "Oat milk", "https://shop/oat")
    assert sample_store.get(new_id).url == "https://shop/oat"


@pytest.mark.parametrize("title", ["", "   ", None])
def test_add_child_rejects_blank_title(sample_store, title):
    dairy = find(sample_store, "Dairy")
    with pytest.raises(InvalidParent):
        sample_store.add_child(dairy, title)
    assert sample_store.write_count == 0
    assert titles(sample_store, dairy) == ["Milk", "Cheese"]


def test_add_child_rejects_dead_parent(sample_store):
    milk = find(sample_store, "Milk")
    sample_store.remove(milk)
    with pytest.raises(InvalidParent):
        sample_store.add_child(milk, "Cream")
    with pytest.raises(InvalidParent):
        sample_store.add_child("nope", "Cream")
    assert sample_store.write_count == 1


def test_add_root(sample_store):
    new_id = sample_store.add_root("Hardware", quantity=3)
    assert sample_store.roots[-1] == new_id
    assert sample_store.parent_of(new_id) is None
    with pytest.raises(InvalidTitle):
        sample_store.add_root(" ")


# ---------- remove ----------

def test_remove_scenario_milk(sample_store):
    sample_store.remove(find(sample_store, "Milk"))
    dairy = find(sample_store, "Dairy")
    assert titles(sample_store, dairy) == ["Cheese"]
    assert [c.title for c in _on_disk(sample_store)[0].children[0].children] == ["Cheese"]


def test_remove_cascades_to_descendants(sample_store):
    root = find(sample_store, "Shopping lists")
    gone = [item.id for item in sample_store.walk()]
    sample_store.remove(root)
    assert sample_store.roots == []
    assert len(sample_store) == 0
    assert not any(sample_store.contains(nid) for nid in gone)
    assert _on_disk(sample_store) == []


def test_remove_twice_raises(sample_store):
    milk = find(sample_store, "Milk")
    sample_store.remove(milk)
    with pytest.raises(NodeNotFound):
        sample_store.remove(milk)
    assert sample_store.write_count == 1


# ---------- set_done ----------

def test_set_done_does_not_cascade(sample_store):
    dairy = find(sample_store, "Dairy")
    sample_store.set_done(dairy, True)
    assert sample_store.get(dairy).is_done
    assert not sample_store.get(find(sample_store, "Milk")).is_done
    assert not sample_store.get(find(sample_store, "Shopping lists")).is_done


def test_set_done_twice_writes_twice(sample_store):
    milk = find(sample_store, "Milk")
    with mock.patch.object(sample_store, "save", wraps=sample_store.save) as save:
        sample_store.set_done(milk, True)
        sample_store.set_done(milk, True)
    assert sample_store.get(milk).is_done is True
    assert save.call_count == 2


# ---------- queries ----------

def test_ancestors_and_descendants(sample_store):
    milk = find(sample_store, "Milk")
    dairy = find(sample_store, "Dairy")
    root = find(sample_store, "Shopping lists")
    assert sample_store.ancestors(milk) == [dairy, root]
    assert sample_store.is_descendant(milk, root)
    assert sample_store.is_descendant(dairy, dairy)
    assert not sample_store.is_descendant(root, milk)
    assert sample_store.index_of(find(sample_store, "Cheese")) == 1


# ---------- move ----------

def test_move_into_own_subtree_is_rejected(sample_store):
    sample_store.save()
    before = sample_store.path.read_bytes()
    root = find(sample_store, "Shopping lists")
    for target in (root, find(sample_store, "Dairy"), find(sample_store, "Milk")):
        with pytest.raises(CyclicMove):
            sample_store.move(root, MoveTarget(parent=target))
    assert sample_store.path.read_bytes() == before
    assert sample_store.write_count == 0


def test_move_reparents_and_updates_parent(sample_store):
    milk = find(sample_store, "Milk")
    bakery = find(sample_store, "Bakery")
    sample_store.move(milk, MoveTarget(parent=bakery, index=0))
    assert titles(sample_store, bakery) == ["Milk", "Bread"]
    assert sample_store.parent_of(milk) == bakery
    assert titles(sample_store, find(sample_store, "Dairy")) == ["Cheese"]


def test_move_index_counts_after_detach(make_store):
    store = make_store([Item("A"), Item("B"), Item("C"), Item("D")])
    store.move(find(store, "A"), MoveTarget(parent=None, index=2))
    assert titles(store) == ["B", "C", "A", "D"]
    store.move(find(store, "D"), MoveTarget(parent=None, index=99))
    assert titles(store) == ["B", "C", "A", "D"]


def test_random_moves_never_create_cycles(make_store):
    import random
    rng = random.Random(7)
    store = make_store([Item(f"n{i}") for i in range(8)])
    for _ in range(300):
        ids = [item.id for item in store.walk()]
        node, target = rng.choice(ids), rng.choice(ids + [None])
        try:
            store.move(node, MoveTarget(parent=target))
        except CyclicMove:
            assert store.is_descendant(target, node)
        for nid in ids:
            assert nid not in store.ancestors(nid)
    assert len(list(store.walk())) == 8
