import pytest

from core.drag_drop import DragDropController, DropKind, plan_drop
from core.item import Item
from core.serializer import deserialize

from conftest import find, titles


def _drop(store, source_title, target_title):
    controller = DragDropController(store)
    assert controller.begin_drag(find(store, source_title))
    target = find(store, target_title) if target_title is not None else None
    return controller.drop(target)


@pytest.fixture
def abcd(make_store):
    return make_store([Item("A"), Item("B"), Item("C"), Item("D")])


def test_reorder_moving_down_inserts_after(abcd):
    result = _drop(abcd, "A", "C")
    assert result.kind is DropKind.REORDERED
    assert titles(abcd) == ["B", "C", "A", "D"]
    assert result.node_id == find(abcd, "A")


def test_reorder_moving_up_inserts_before(abcd):
    result = _drop(abcd, "D", "B")
    assert result.kind is DropKind.REORDERED
    assert titles(abcd) == ["A", "D", "B", "C"]


def test_reorder_down_onto_last_appends(abcd):
    _drop(abcd, "B", "D")
    assert titles(abcd) == ["A", "C", "D", "B"]


def test_reorder_onto_adjacent_siblings(abcd):
    _drop(abcd, "B", "C")
    assert titles(abcd) == ["A", "C", "B", "D"]
    _drop(abcd, "B", "C")
    assert titles(abcd) == ["A", "B", "C", "D"]


def test_reorder_among_children(sample_store):
    result = _drop(sample_store, "Cheese", "Milk")
    assert result.kind is DropKind.REORDERED
    assert titles(sample_store, find(sample_store, "Dairy")) == ["Cheese", "Milk"]


def test_reparent_onto_non_sibling(make_store):
    store = make_store([Item("X"), Item("Y", children=[Item("Z")])])
    result = _drop(store, "X", "Y")
    assert result.kind is DropKind.REPARENTED
    assert result.expand_id == find(store, "Y")
    assert titles(store) == ["Y"]
    assert titles(store, find(store, "Y")) == ["Z", "X"]


def test_reparent_across_branches(sample_store):
    _drop(sample_store, "Milk", "Bakery")
    assert titles(sample_store, find(sample_store, "Bakery")) == ["Bread", "Milk"]
    assert titles(sample_store, find(sample_store, "Dairy")) == ["Cheese"]


def test_drop_on_empty_canvas_makes_last_root(sample_store):
    sample_store.add_child(find(sample_store, "Milk"), "Semi-skimmed")
    milk = find(sample_store, "Milk")
    result = _drop(sample_store, "Milk", None)
    assert result.kind is DropKind.ROOTED
    assert sample_store.roots[-1] == milk
    assert sample_store.parent_of(milk) is None
    assert titles(sample_store, milk) == ["Semi-skimmed"]
    assert titles(sample_store, find(sample_store, "Dairy")) == ["Cheese"]


def test_drop_root_on_empty_canvas_moves_it_last(make_store):
    store = make_store([Item("A"), Item("B")])
    _drop(store, "A", None)
    assert titles(store) == ["B", "A"]


def test_drop_onto_own_parent_reappends_as_last_child(sample_store):
    result = _drop(sample_store, "Milk", "Dairy")
    assert result.kind is DropKind.REPARENTED
    assert titles(sample_store, find(sample_store, "Dairy")) == ["Cheese", "Milk"]


@pytest.mark.parametrize("source,target", [
    ("Dairy", "Dairy"),
    ("Dairy", "Milk"),
    ("Shopping lists", "Bread"),
])
def test_drop_into_self_or_subtree_is_rejected(sample_store, source, target):
    sample_store.save()
    before = sample_store.path.read_bytes()
    result = _drop(sample_store, source, target)
    assert result.kind is DropKind.REJECTED
    assert not result.changed
    assert result.reason
    assert sample_store.write_count == 0
    assert sample_store.path.read_bytes() == before


def test_mutating_drop_persists(abcd):
    _drop(abcd, "A", "C")
    assert abcd.write_count == 1
    on_disk = deserialize(abcd.path.read_text(encoding="utf-8"))
    assert [item.title for item in on_disk] == ["B", "C", "A", "D"]


def test_drag_over_only_tracks_highlight(abcd):
    controller = DragDropController(abcd)
    controller.begin_drag(find(abcd, "A"))
    assert controller.drag_over(find(abcd, "C")) == find(abcd, "C")
    assert controller.drag_over(None) is None
    assert controller.drag_over("gone") is None
    assert titles(abcd) == ["A", "B", "C", "D"]
    assert abcd.write_count == 0


def test_drop_without_drag_is_rejected(abcd):
    controller = DragDropController(abcd)
    assert controller.drop(find(abcd, "B")).kind is DropKind.REJECTED
    assert controller.drag_over(find(abcd, "B")) is None


def test_cancel_clears_drag(abcd):
    controller = DragDropController(abcd)
    controller.begin_drag(find(abcd, "A"))
    controller.cancel()
    assert not controller.dragging
    assert controller.drop(None).kind is DropKind.REJECTED
    assert titles(abcd) == ["A", "B", "C", "D"]


def test_source_removed_during_drag(abcd):
    controller = DragDropController(abcd)
    controller.begin_drag(find(abcd, "A"))
    abcd.remove(find(abcd, "A"))
    assert controller.drop(find(abcd, "B")).kind is DropKind.REJECTED
    assert titles(abcd) == ["B", "C", "D"]


def test_plan_drop_does_not_mutate(abcd):
    kind, destination, _ = plan_drop(abcd, find(abcd, "D"), find(abcd, "B"))
    assert kind is DropKind.REORDERED
    assert destination.parent is None and destination.index == 1
    assert titles(abcd) == ["A", "B", "C", "D"]
