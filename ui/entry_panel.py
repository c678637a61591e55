from __future__ import annotations

import wx

from ui.constants import (
    BUTTON_BG_COLOR,
    BUTTON_FG_COLOR,
    BUTTON_SIZE,
    LABEL_FG_COLOR,
    PADDING,
    QTY_MAX,
)
from ui.drag_drop import LinkDropTarget

class EntryPanel(wx.Panel):
    """
    Input fields and command buttons below the tree.
    Buttons are defined in a simple list and call on_action_* methods on the frame.
    """

    def __init__(self, parent: wx.Window, main_frame: wx.Frame):
        super().__init__(parent, style=wx.BORDER_NONE)
        self.main_frame = main_frame

        self._create_controls()
        self._setup_layout()

    def _create_controls(self):
        bold = wx.Font(wx.FontInfo(9).Bold())

        self.title_label = wx.StaticText(self, label="New Heading")
        self.title_label.SetFont(bold)
        self.title_label.SetForegroundColour(LABEL_FG_COLOR)
        self.title_text = wx.TextCtrl(self, style=wx.TE_PROCESS_ENTER)
        self.title_text.SetHint("Title (drop a link here to fill it in)")
        self.title_text.SetDropTarget(LinkDropTarget(self.title_text, self.main_frame.on_link_dropped))
        self.title_text.Bind(wx.EVT_TEXT_ENTER, self.main_frame.on_action_add_heading)

        self.url_label = wx.StaticText(self, label="URL")
        self.url_label.SetFont(bold)
        self.url_label.SetForegroundColour(LABEL_FG_COLOR)
        self.url_text = wx.TextCtrl(self)
        self.url_text.SetHint("Optional link opened on double-click")

        self.qty_label = wx.StaticText(self, label="Qty")
        self.qty_label.SetFont(bold)
        self.qty_label.SetForegroundColour(LABEL_FG_COLOR)
        self.qty_spin = wx.SpinCtrl(self, min=1, max=QTY_MAX, initial=1)

        # (label, method_name, primary)
        self.actions = [
            ("Add Heading", "on_action_add_heading", True),
            ("Add From Page", "on_action_add_from_page", True),
            ("Remove Selected", "on_action_remove", False),
        ]
        self.buttons = {}
        for label, method_name, primary in self.actions:
            self.buttons[method_name] = self._create_button(label, method_name, primary)

    def _create_button(self, label: str, method_name: str, primary: bool) -> wx.Button:
        btn = wx.Button(self, label=label, size=BUTTON_SIZE, style=wx.BORDER_NONE)
        if primary:
            btn.SetBackgroundColour(BUTTON_BG_COLOR)
            btn.SetForegroundColour(BUTTON_FG_COLOR)
        btn.Bind(wx.EVT_BUTTON, getattr(self.main_frame, method_name))
        return btn

    def _setup_layout(self):
        fields = wx.FlexGridSizer(cols=2, vgap=PADDING, hgap=PADDING)
        fields.AddGrowableCol(1)
        fields.Add(self.title_label, 0, wx.ALIGN_CENTER_VERTICAL)
        fields.Add(self.title_text, 1, wx.EXPAND)
        fields.Add(self.url_label, 0, wx.ALIGN_CENTER_VERTICAL)
        fields.Add(self.url_text, 1, wx.EXPAND)
        fields.Add(self.qty_label, 0, wx.ALIGN_CENTER_VERTICAL)
        fields.Add(self.qty_spin, 0)

        buttons = wx.BoxSizer(wx.HORIZONTAL)
        for _, method_name, _ in self.actions:
            buttons.Add(self.buttons[method_name], 0, wx.RIGHT, PADDING)

        main = wx.BoxSizer(wx.VERTICAL)
        main.Add(fields, 0, wx.EXPAND | wx.BOTTOM, PADDING)
        main.Add(buttons, 0, wx.EXPAND)
        self.SetSizer(main)

    # ---------------- Field access ----------------

    def values(self):
        """(title, url, quantity) as currently entered."""
        return (
            self.title_text.GetValue().strip(),
            self.url_text.GetValue().strip(),
            self.qty_spin.GetValue(),
        )

    def set_link(self, title: str | None = None, url: str | None = None):
        if title is not None:
            self.title_text.SetValue(title)
        if url is not None:
            self.url_text.SetValue(url)

    def clear(self):
        self.title_text.Clear()
        self.url_text.Clear()
        self.qty_spin.SetValue(1)
