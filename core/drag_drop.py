# core/drag_drop.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.errors import TreeStoreError
from core.log import Log
from core.tree_store import MoveTarget, TreeStore

__all__ = ["DropKind", "DropResult", "DragDropController", "plan_drop"]


class DropKind(Enum):
    REJECTED = "rejected"
    ROOTED = "rooted"          # dropped on empty space; now the last root
    REORDERED = "reordered"    # moved among its siblings
    REPARENTED = "reparented"  # appended to the target's children


@dataclass(frozen=True)
class DropResult:
    kind: DropKind
    node_id: Optional[str] = None
    expand_id: Optional[str] = None   # item the view should expand to show node
    reason: str = ""

    @property
    def changed(self) -> bool:
        return self.kind is not DropKind.REJECTED


def plan_drop(store: TreeStore, source: str, target: Optional[str]):
    """
    Work out what dropping source onto target means, without mutating anything.
    Returns (DropKind, MoveTarget or None, reason).
    """
    # Case 1: dropped onto an empty area, make it a root node.
    if target is None:
        return DropKind.ROOTED, MoveTarget(parent=None, index=None), ""

    # Case 2: cannot drop a node on itself or on one of its descendants.
    if target == source:
        return DropKind.REJECTED, None, "Cannot drop an item onto itself"
    if store.is_descendant(target, source):
        return DropKind.REJECTED, None, "Cannot drop an item into its own sub-list"

    source_parent = store.parent_of(source)
    target_parent = store.parent_of(target)

    if source_parent == target_parent:
        # Sibling reorder. The index is taken before the source is detached.
        target_idx = store.index_of(target)
        # MoveTarget.index counts slots after the source is detached. Moving up
        # takes the target's slot; moving down lands right after the target,
        # which sits at target_idx - 1 once the source is gone. Both are
        # target_idx.
        return DropKind.REORDERED, MoveTarget(parent=source_parent, index=target_idx), ""

    # Not siblings (this includes dropping onto the item's own parent):
    # append as the target's last child.
    return DropKind.REPARENTED, MoveTarget(parent=target, index=None), ""


class DragDropController:
    """
    Tracks one drag gesture at a time and applies the drop through the store.
    drag_over() only moves the highlight; the model changes in drop() alone.
    """

    def __init__(self, store: TreeStore):
        self.store = store
        self.source_id: Optional[str] = None
        self.current_target: Optional[str] = None

    @property
    def dragging(self) -> bool:
        return self.source_id is not None

    def begin_drag(self, source_id: str) -> bool:
        if not self.store.contains(source_id):
            return False
        self.source_id = source_id
        self.current_target = None
        Log.debug(f"Drag start {source_id=}.", 2)
        return True

    def drag_over(self, target_id: Optional[str]) -> Optional[str]:
        """Update the live target. Returns the id that should be highlighted."""
        if not self.dragging:
            return None
        self.current_target = target_id if self.store.contains(target_id) else None
        return self.current_target

    def cancel(self) -> None:
        self.source_id = None
        self.current_target = None

    def drop(self, target_id: Optional[str]) -> DropResult:
        source = self.source_id
        self.cancel()

        if source is None or not self.store.contains(source):
            return DropResult(DropKind.REJECTED, reason="Nothing is being dragged")
        if target_id is not None and not self.store.contains(target_id):
            return DropResult(DropKind.REJECTED, node_id=source, reason="Drop target no longer exists")

        kind, destination, reason = plan_drop(self.store, source, target_id)
        if kind is DropKind.REJECTED:
            Log.debug(f"Drop rejected {source=} {target_id=}: {reason}", 1)
            return DropResult(kind, node_id=source, reason=reason)

        try:
            self.store.move(source, destination)
        except TreeStoreError as e:
            Log.debug(f"Move failed {source=} {target_id=}: {e}", 0)
            return DropResult(DropKind.REJECTED, node_id=source, reason=str(e))

        Log.debug(f"Drop {kind.value} {source=} {target_id=}.", 1)
        expand_id = target_id if kind is DropKind.REPARENTED else None
        return DropResult(kind, node_id=source, expand_id=expand_id)
