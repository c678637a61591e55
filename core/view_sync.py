# core/view_sync.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional, Protocol, Set

from core.drag_drop import DragDropController, DropResult
from core.errors import TreeStoreError
from core.item import Item, display_label
from core.log import Log
from core.tree_store import TreeStore

__all__ = ["TreeWidget", "ViewSync"]

Handle = Any


class TreeWidget(Protocol):
    """What ViewSync needs from the on-screen tree. Handles are opaque."""

    def clear(self) -> None: ...
    def append_node(self, parent: Optional[Handle], node_id: str, label: str, checked: bool) -> Handle: ...
    def set_checked(self, handle: Handle, checked: bool) -> None: ...
    def expand(self, handle: Handle) -> None: ...
    def is_expanded(self, handle: Handle) -> bool: ...
    def select(self, handle: Optional[Handle]) -> None: ...
    def set_drop_highlight(self, handle: Optional[Handle]) -> None: ...


class ViewSync:
    """
    One-way projection of a TreeStore onto a TreeWidget, plus the handlers
    the widget calls back into. The widget reports item ids, never Items;
    the store stays the only owner of list state.
    """

    def __init__(
        self,
        store: TreeStore,
        widget: TreeWidget,
        notify: Callable[[str], None] = lambda message: None,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.widget = widget
        self.notify = notify
        self.navigate = navigate
        self.drag = DragDropController(store)
        self._handles: Dict[str, Handle] = {}
        self.selected_id: Optional[str] = None

    # ------------------------------------------------------------------ #
    # Projection
    # ------------------------------------------------------------------ #

    def handle_for(self, node_id: str) -> Optional[Handle]:
        return self._handles.get(node_id)

    def expanded_ids(self) -> Set[str]:
        return {nid for nid, h in self._handles.items() if self.widget.is_expanded(h)}

    def rebuild(self, select_id: Optional[str] = None, expand_ids: Iterable[str] = ()) -> None:
        """Redraw the whole tree, keeping expansion and selection where possible."""
        keep_open = self.expanded_ids() | set(expand_ids)
        if select_id is None:
            select_id = self.selected_id

        self.widget.clear()
        self._handles.clear()
        for root in self.store.forest():
            self._append(None, root)

        for nid in keep_open:
            handle = self._handles.get(nid)
            if handle is not None:
                self.widget.expand(handle)

        self.selected_id = select_id if self.store.contains(select_id) else None
        if self.selected_id is not None:
            # Reveal the selection inside collapsed parents.
            for ancestor in self.store.ancestors(self.selected_id):
                self.widget.expand(self._handles[ancestor])
        self.widget.select(self._handles.get(self.selected_id))

    def _append(self, parent: Optional[Handle], item: Item) -> None:
        handle = self.widget.append_node(parent, item.id, display_label(item), item.is_done)
        self._handles[item.id] = handle
        for child in item.children:
            self._append(handle, child)

    # ------------------------------------------------------------------ #
    # Widget events
    # ------------------------------------------------------------------ #

    def on_selection_changed(self, node_id: Optional[str]) -> None:
        self.selected_id = node_id if self.store.contains(node_id) else None

    def on_item_checked(self, node_id: str, checked: bool) -> bool:
        try:
            self.store.set_done(node_id, checked)
        except TreeStoreError as e:
            self.notify(f"Could not update item: {e}")
            return False
        self.widget.set_checked(self._handles[node_id], checked)
        return True

    def on_item_activated(self, node_id: str) -> bool:
        """Double-click: open the item's URL in the browser, if it has one."""
        if not self.store.contains(node_id):
            return False
        item = self.store.get(node_id)
        if not item.has_url or self.navigate is None:
            return False
        try:
            self.navigate(item.url.strip())
        except Exception as e:
            self.notify(f"Browser error: {e}")
            return False
        return True

    def on_begin_drag(self, node_id: str) -> bool:
        return self.drag.begin_drag(node_id)

    def on_drag_over(self, node_id: Optional[str]) -> None:
        target = self.drag.drag_over(node_id)
        self.widget.set_drop_highlight(self._handles.get(target) if target else None)

    def on_drag_cancel(self) -> None:
        self.drag.cancel()
        self.widget.set_drop_highlight(None)

    def on_drag_end(self, node_id: Optional[str], inside: bool) -> Optional[DropResult]:
        """Finish a drag; a release outside the widget cancels it."""
        if not inside:
            self.on_drag_cancel()
            return None
        return self.on_drop(node_id)

    def on_drop(self, node_id: Optional[str]) -> DropResult:
        result = self.drag.drop(node_id)
        self.widget.set_drop_highlight(None)
        if result.changed:
            expand = [result.expand_id] if result.expand_id else []
            self.rebuild(select_id=result.node_id, expand_ids=expand)
        elif result.reason:
            self.notify(result.reason)
        return result

    # ------------------------------------------------------------------ #
    # Commands from buttons / editors
    # ------------------------------------------------------------------ #

    def add_heading(
        self,
        parent_id: Optional[str],
        title: str,
        url: Optional[str] = None,
        quantity: int = 1,
    ) -> Optional[str]:
        """Add under parent_id, or as a new root when nothing is selected."""
        url = url.strip() if url and url.strip() else None
        try:
            if parent_id is None:
                new_id = self.store.add_root(title, url=url, quantity=quantity)
            else:
                new_id = self.store.add_child(parent_id, title, url=url, quantity=quantity)
        except TreeStoreError as e:
            self.notify(f"Cannot add item: {e}")
            return None
        expand = [parent_id] if parent_id else []
        self.rebuild(select_id=parent_id or new_id, expand_ids=expand)
        return new_id

    def add_item_with_url(self, parent_id: str, title: str, url: str) -> Optional[str]:
        """Completion of an "add from current page" request."""
        if not self.store.contains(parent_id):
            self.notify("The item you were adding to has been removed")
            return None
        try:
            new_id = self.store.add_child_with_url(parent_id, title or url, url)
        except TreeStoreError as e:
            self.notify(f"Cannot add item: {e}")
            return None
        self.rebuild(select_id=parent_id, expand_ids=[parent_id])
        return new_id

    def remove(self, node_id: Optional[str]) -> bool:
        if node_id is None:
            return False
        try:
            parent_id = self.store.parent_of(node_id)
            self.store.remove(node_id)
        except TreeStoreError as e:
            self.notify(f"Cannot remove item: {e}")
            return False
        Log.debug(f"Removed {node_id=}.", 1)
        self.rebuild(select_id=parent_id)
        return True

    def rename(self, node_id: str, title: str) -> bool:
        try:
            self.store.rename(node_id, title)
        except TreeStoreError as e:
            self.notify(f"Cannot rename item: {e}")
            # Put the stored label back over the edited text.
            self.rebuild(select_id=node_id)
            return False
        self.rebuild(select_id=node_id)
        return True

    def set_quantity(self, node_id: str, quantity: int) -> bool:
        try:
            self.store.set_quantity(node_id, quantity)
        except TreeStoreError as e:
            self.notify(f"Cannot change quantity: {e}")
            return False
        self.rebuild(select_id=node_id)
        return True
