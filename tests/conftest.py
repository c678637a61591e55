from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from core.item import Item
from core.tree_store import TreeStore


def find(store: TreeStore, title: str) -> str:
    """Id of the first item with this title (titles are unique in the fixtures)."""
    for item in store.walk():
        if item.title == title:
            return item.id
    raise KeyError(title)


def titles(store: TreeStore, parent_id: Optional[str] = None) -> List[str]:
    return [store.get(nid).title for nid in store.children_of(parent_id)]


@pytest.fixture
def list_path(tmp_path):
    return tmp_path / "tasks.json"


@pytest.fixture
def make_store(list_path) -> Callable[[List[Item]], TreeStore]:
    """Build a store over a fresh file whose initial forest is the given items."""
    def _make(forest: List[Item]) -> TreeStore:
        store = TreeStore(list_path, sample_factory=lambda: forest)
        store.load()
        return store
    return _make


@pytest.fixture
def sample_store(list_path) -> TreeStore:
    store = TreeStore(list_path)
    store.load()
    return store
