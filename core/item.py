# core/item.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

__all__ = ["Item", "new_id", "display_label", "iter_subtree", "sample_forest"]


def new_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class Item:
    """
    One list entry: a heading or a product line.

    • title     – display text, may be empty but never None
    • url       – page to open on double-click; None when absent
    • is_done   – checkbox state, never propagated up or down
    • quantity  – cosmetic count shown as "(N) " prefix when > 1
    • children  – owned sub-items, in display order
    • id        – runtime handle used by the store and the view; not persisted
    """
    title: str
    url: Optional[str] = None
    is_done: bool = False
    quantity: int = 1
    children: List["Item"] = field(default_factory=list)
    id: str = field(default_factory=new_id, compare=False, repr=False)

    @property
    def has_url(self) -> bool:
        return bool(self.url and self.url.strip())


def display_label(item: Item) -> str:
    if item.quantity > 1:
        return f"({item.quantity}) {item.title}"
    return item.title


def iter_subtree(item: Item) -> Iterator[Item]:
    """Yield item and all of its descendants, depth first."""
    stack = [item]
    while stack:
        cur = stack.pop()
        yield cur
        stack.extend(reversed(cur.children))


def sample_forest() -> List[Item]:
    """Starter list used on first run and when the save file cannot be read."""
    dairy = Item("Dairy", children=[Item("Milk"), Item("Cheese")])
    bakery = Item("Bakery", children=[Item("Bread")])
    return [Item("Shopping lists", children=[dairy, bakery])]
