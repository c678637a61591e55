# ui/tree_panel.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Optional

import wx

from core.log import Log
from core.item import display_label
from ui.constants import DROP_HIGHLIGHT_COLOR, STATE_CHECKED, STATE_UNCHECKED
from ui.icons import CheckImages

__all__ = ["ListTree", "is_row_hit"]

# HitTest flags that mean the point is off every row.
_OFF_ROW_FLAGS = (wx.TREE_HITTEST_NOWHERE | wx.TREE_HITTEST_ABOVE | wx.TREE_HITTEST_BELOW
                  | wx.TREE_HITTEST_TOLEFT | wx.TREE_HITTEST_TORIGHT)


def is_row_hit(flags: int) -> bool:
    """True when HitTest flags land anywhere on a row, indent and margins included."""
    return not (flags & _OFF_ROW_FLAGS)


class ListTree(wx.TreeCtrl):
    """
    wx.TreeCtrl with checkbox state images, satisfying core.view_sync.TreeWidget.
    Each tree item carries its list item id as item data; all events are
    forwarded to the ViewSync as ids.
    """

    def __init__(self, parent: wx.Window):
        style = (wx.TR_DEFAULT_STYLE | wx.TR_HIDE_ROOT | wx.TR_EDIT_LABELS
                 | wx.TR_SINGLE | wx.BORDER_SIMPLE)
        super().__init__(parent, style=style)
        self.SetFont(wx.Font(wx.FontInfo(10)))
        self.SetStateImageList(CheckImages.Get(self))
        self.sync = None
        self._dragging = False
        self._highlight: Optional[wx.TreeItemId] = None
        self._root = self.AddRoot("")

        self.Bind(wx.EVT_TREE_STATE_IMAGE_CLICK, self._on_state_click)
        self.Bind(wx.EVT_TREE_KEY_DOWN, self._on_key_down)
        self.Bind(wx.EVT_TREE_ITEM_ACTIVATED, self._on_activated)
        self.Bind(wx.EVT_TREE_SEL_CHANGED, self._on_sel_changed)
        self.Bind(wx.EVT_TREE_BEGIN_DRAG, self._on_begin_drag)
        self.Bind(wx.EVT_TREE_END_DRAG, self._on_end_drag)
        self.Bind(wx.EVT_TREE_BEGIN_LABEL_EDIT, self._on_begin_label_edit)
        self.Bind(wx.EVT_TREE_END_LABEL_EDIT, self._on_end_label_edit)
        self.Bind(wx.EVT_MOTION, self._on_motion)

    def bind_sync(self, sync) -> None:
        self.sync = sync

    # ------------------------------------------------------------------ #
    # TreeWidget protocol
    # ------------------------------------------------------------------ #

    def clear(self) -> None:
        self._highlight = None
        self.DeleteChildren(self._root)

    def append_node(self, parent, node_id: str, label: str, checked: bool) -> wx.TreeItemId:
        handle = self.AppendItem(parent if parent is not None else self._root, label)
        self.SetItemData(handle, node_id)
        self.set_checked(handle, checked)
        return handle

    def set_checked(self, handle: wx.TreeItemId, checked: bool) -> None:
        self.SetItemState(handle, STATE_CHECKED if checked else STATE_UNCHECKED)

    def expand(self, handle: wx.TreeItemId) -> None:
        self.Expand(handle)

    def is_expanded(self, handle: wx.TreeItemId) -> bool:
        return handle.IsOk() and self.IsExpanded(handle)

    def select(self, handle: Optional[wx.TreeItemId]) -> None:
        if handle is None:
            self.UnselectAll()
            return
        self.SelectItem(handle)
        self.EnsureVisible(handle)

    def set_drop_highlight(self, handle: Optional[wx.TreeItemId]) -> None:
        if self._highlight is not None and self._highlight.IsOk():
            self.SetItemDropHighlight(self._highlight, False)
            self.SetItemBackgroundColour(self._highlight, wx.NullColour)
        self._highlight = handle
        if handle is not None:
            self.SetItemDropHighlight(handle, True)
            self.SetItemBackgroundColour(handle, DROP_HIGHLIGHT_COLOR)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def node_id(self, handle: Optional[wx.TreeItemId]) -> Optional[str]:
        if handle is None or not handle.IsOk() or handle == self._root:
            return None
        return self.GetItemData(handle)

    def node_at(self, pos: wx.Point) -> Optional[str]:
        """Item id under pos (client coordinates), or None for empty space."""
        handle, flags = self.HitTest(pos)
        if not handle.IsOk() or not is_row_hit(flags):
            return None
        return self.node_id(handle)

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def _toggle(self, handle: wx.TreeItemId) -> None:
        node_id = self.node_id(handle)
        if node_id is None or self.sync is None:
            return
        checked = self.GetItemState(handle) != STATE_CHECKED
        self.sync.on_item_checked(node_id, checked)

    def _on_state_click(self, evt: wx.TreeEvent):
        self._toggle(evt.GetItem())

    def _on_key_down(self, evt: wx.TreeEvent):
        key = evt.GetKeyCode()
        handle = self.GetSelection()
        if key == wx.WXK_SPACE and handle.IsOk():
            self._toggle(handle)
        elif key == wx.WXK_DELETE and self.sync is not None:
            self.sync.remove(self.node_id(handle))
        else:
            evt.Skip()

    def _on_activated(self, evt: wx.TreeEvent):
        node_id = self.node_id(evt.GetItem())
        if node_id is not None and self.sync is not None:
            if not self.sync.on_item_activated(node_id):
                evt.Skip()

    def _on_sel_changed(self, evt: wx.TreeEvent):
        if self.sync is not None and not self._dragging:
            self.sync.on_selection_changed(self.node_id(evt.GetItem()))
        evt.Skip()

    def _on_begin_drag(self, evt: wx.TreeEvent):
        node_id = self.node_id(evt.GetItem())
        if node_id is None or self.sync is None:
            return
        if self.sync.on_begin_drag(node_id):
            self._dragging = True
            evt.Allow()
            Log.debug(f"Begin drag {node_id=}.", 2)

    def _on_motion(self, evt: wx.MouseEvent):
        if self._dragging and self.sync is not None:
            self.sync.on_drag_over(self.node_at(evt.GetPosition()))
        evt.Skip()

    def _on_end_drag(self, evt: wx.TreeEvent):
        if not self._dragging or self.sync is None:
            return
        self._dragging = False
        pos = evt.GetPoint()
        self.sync.on_drag_end(self.node_at(pos), self.GetClientRect().Contains(pos))

    def _on_begin_label_edit(self, evt: wx.TreeEvent):
        node_id = self.node_id(evt.GetItem())
        if node_id is None or self.sync is None:
            evt.Veto()
            return
        # Edit the bare title, not the "(N) " display prefix.
        self.SetItemText(evt.GetItem(), self.sync.store.get(node_id).title)

    def _on_end_label_edit(self, evt: wx.TreeEvent):
        node_id = self.node_id(evt.GetItem())
        if node_id is None or self.sync is None:
            return
        # The tree is rebuilt from the store either way, so never let wx
        # apply the edited text itself.
        evt.Veto()
        if evt.IsEditCancelled():
            item = self.sync.store.get(node_id)
            self.SetItemText(evt.GetItem(), display_label(item))
            return
        wx.CallAfter(self.sync.rename, node_id, evt.GetLabel())
