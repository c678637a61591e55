# core/tree_store.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

from core.errors import CyclicMove, InvalidParent, InvalidTitle, MalformedDocument, NodeNotFound
from core.item import Item, iter_subtree, sample_forest
from core.log import Log
from core.serializer import deserialize, serialize
from utils.fs_atomic import atomic_write_text

__all__ = ["TreeStore", "MoveTarget", "LoadStatus"]

Pathish = Union[str, Path]


class LoadStatus(Enum):
    FILE = "file"            # loaded from the save file
    SAMPLE = "sample"        # no save file yet; sample data
    RECOVERED = "recovered"  # save file unreadable; sample data


@dataclass(frozen=True)
class MoveTarget:
    """
    Where a moved item lands.

    • parent – id of the new parent, or None for the root list
    • index  – slot in the parent's children counted *after* the item has been
               detached; None (or past the end) appends
    """
    parent: Optional[str] = None
    index: Optional[int] = None


class TreeStore:
    """
    Owner of the item forest. Every successful mutation is followed by one
    whole-file write of the forest to self.path.
    """

    def __init__(self, path: Pathish, sample_factory: Callable[[], List[Item]] = sample_forest):
        self.path = Path(path)
        self.sample_factory = sample_factory
        self.on_save_error: Optional[Callable[[OSError], None]] = None
        self.load_error: Optional[MalformedDocument] = None
        self.write_count = 0
        self.dirty = False
        self._roots: List[Item] = []
        self._index: Dict[str, Item] = {}
        self._parent: Dict[str, Optional[str]] = {}

    # ------------------------------------------------------------------ #
    # Load / save
    # ------------------------------------------------------------------ #

    def load(self) -> LoadStatus:
        """Replace the forest with the save file contents, or sample data."""
        self.load_error = None
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            Log.debug(f"No save file at {self.path}; loading sample list.", 1)
            self._set_forest(self.sample_factory())
            return LoadStatus.SAMPLE
        except (OSError, UnicodeDecodeError) as e:
            self.load_error = MalformedDocument(f"Cannot read {self.path}: {e}")
        else:
            try:
                forest = deserialize(text)
            except MalformedDocument as e:
                self.load_error = e
            else:
                self._set_forest(forest)
                Log.debug(f"Loaded {len(self._index)} items from {self.path}.", 1)
                return LoadStatus.FILE

        Log.debug(f"Error loading tasks: {self.load_error}", 0)
        self._set_forest(self.sample_factory())
        return LoadStatus.RECOVERED

    def save(self) -> None:
        """Write the whole forest. Raises OSError on failure."""
        atomic_write_text(self.path, serialize(self._roots))

    def _persist(self) -> None:
        self.write_count += 1
        try:
            self.save()
        except OSError as e:
            self.dirty = True
            Log.debug(f"Error saving tasks to {self.path}: {e}", 0)
            if callable(self.on_save_error):
                self.on_save_error(e)
            return
        self.dirty = False

    def _set_forest(self, forest: List[Item]) -> None:
        self._roots = list(forest)
        self._index.clear()
        self._parent.clear()
        for root in self._roots:
            self._register(root, None)

    def _register(self, item: Item, parent_id: Optional[str]) -> None:
        self._index[item.id] = item
        self._parent[item.id] = parent_id
        for child in item.children:
            self._register(child, item.id)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def roots(self) -> List[str]:
        return [item.id for item in self._roots]

    def forest(self) -> List[Item]:
        return self._roots

    def __len__(self) -> int:
        return len(self._index)

    def contains(self, node_id: Optional[str]) -> bool:
        return node_id is not None and node_id in self._index

    def get(self, node_id: str) -> Item:
        try:
            return self._index[node_id]
        except KeyError:
            raise NodeNotFound(f"No item with id {node_id}") from None

    def parent_of(self, node_id: str) -> Optional[str]:
        self.get(node_id)
        return self._parent[node_id]

    def children_of(self, parent_id: Optional[str]) -> List[str]:
        return [item.id for item in self._owner_list(parent_id)]

    def index_of(self, node_id: str) -> int:
        siblings = self._owner_list(self.parent_of(node_id))
        return next(i for i, item in enumerate(siblings) if item.id == node_id)

    def ancestors(self, node_id: str) -> List[str]:
        """Ancestor ids from the parent up to the root (excluding node_id)."""
        out = []
        current = self.parent_of(node_id)
        while current is not None:
            out.append(current)
            current = self._parent[current]
        return out

    def is_descendant(self, node_id: str, ancestor_id: str) -> bool:
        """True if node_id is ancestor_id itself or lies somewhere below it."""
        current: Optional[str] = node_id
        while current is not None:
            if current == ancestor_id:
                return True
            current = self._parent.get(current)
        return False

    def walk(self) -> Iterator[Item]:
        for root in self._roots:
            yield from iter_subtree(root)

    def _owner_list(self, parent_id: Optional[str]) -> List[Item]:
        if parent_id is None:
            return self._roots
        return self.get(parent_id).children

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    @staticmethod
    def _check_title(title: str) -> None:
        if title is None or not title.strip():
            raise InvalidTitle("Title must not be blank")

    def add_child(self, parent: str, title: str, url: Optional[str] = None, quantity: int = 1) -> str:
        """Append a new leaf under parent. Returns its id."""
        if not self.contains(parent):
            raise InvalidParent(f"Parent {parent} is not part of the list")
        self._check_title(title)

        item = Item(title=title, url=url, quantity=quantity)
        self._index[parent].children.append(item)
        self._register(item, parent)
        self._persist()
        return item.id

    def add_child_with_url(self, parent: str, title: str, url: str) -> str:
        return self.add_child(parent, title, url=url)

    def add_root(self, title: str, url: Optional[str] = None, quantity: int = 1) -> str:
        self._check_title(title)
        item = Item(title=title, url=url, quantity=quantity)
        self._roots.append(item)
        self._register(item, None)
        self._persist()
        return item.id

    def remove(self, node: str) -> None:
        """Detach node and drop it together with its whole subtree."""
        item = self.get(node)
        self._detach(node)
        for gone in iter_subtree(item):
            del self._index[gone.id]
            del self._parent[gone.id]
        self._persist()

    def set_done(self, node: str, done: bool) -> None:
        self.get(node).is_done = bool(done)
        self._persist()

    def rename(self, node: str, title: str) -> None:
        item = self.get(node)
        self._check_title(title)
        item.title = title
        self._persist()

    def set_quantity(self, node: str, quantity: int) -> None:
        self.get(node).quantity = int(quantity)
        self._persist()

    def set_url(self, node: str, url: Optional[str]) -> None:
        item = self.get(node)
        item.url = url if url and url.strip() else None
        self._persist()

    def move(self, node: str, destination: MoveTarget) -> None:
        """
        Detach node and insert it under destination.parent at destination.index.
        Raises CyclicMove if the destination is node itself or inside its subtree.
        """
        item = self.get(node)
        if destination.parent is not None:
            self.get(destination.parent)
            if self.is_descendant(destination.parent, node):
                raise CyclicMove(node, destination.parent)

        self._detach(node)
        siblings = self._owner_list(destination.parent)
        index = destination.index
        if index is None or index < 0 or index > len(siblings):
            siblings.append(item)
        else:
            siblings.insert(index, item)
        self._parent[node] = destination.parent
        self._persist()

    def _detach(self, node: str) -> Item:
        siblings = self._owner_list(self._parent[node])
        idx = next(i for i, item in enumerate(siblings) if item.id == node)
        return siblings.pop(idx)
