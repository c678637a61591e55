################################################################################################
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the code for the main window's status bar and its log viewer.
'''
################################################################################################

import wx

from core.log import Log

################################################################################################
class LogDialog(wx.Dialog):
    """Read-only dump of the in-memory log."""

    def __init__(self, parent):
        super().__init__(parent, title="BasketPad Log", size=(640, 360),
                         style=wx.DEFAULT_DIALOG_STYLE | wx.RESIZE_BORDER)
        text = "\n".join(f"[{timestamp}] {message}" for timestamp, message in Log.get())
        ctrl = wx.TextCtrl(self, value=text, style=wx.TE_MULTILINE | wx.TE_READONLY | wx.HSCROLL)
        ctrl.SetFont(wx.Font(wx.FontInfo(9).Family(wx.FONTFAMILY_TELETYPE)))
        ctrl.SetInsertionPointEnd()
        box_main = wx.BoxSizer(wx.VERTICAL)
        box_main.Add(ctrl, 1, wx.EXPAND | wx.ALL, 4)
        box_main.Add(self.CreateButtonSizer(wx.CLOSE), 0, wx.EXPAND | wx.ALL, 4)
        self.SetSizer(box_main)
        self.SetEscapeId(wx.ID_CLOSE)

################################################################################################
class StatusBar(wx.StatusBar):
    def __init__(self, parent):
        super(StatusBar, self).__init__(parent)
        self.Bind(wx.EVT_RIGHT_DOWN, self.OnRightDown)
        Log.add("Create StatusBar")

    def OnRightDown(self, event):
        """Handle right-click to show context menu with log options."""
        menu = wx.Menu()

        item_show_log = menu.Append(wx.ID_ANY, "Show Log")
        menu.AppendSeparator()
        item_save = menu.Append(wx.ID_SAVE, "Save Log to File...")
        item_clear = menu.Append(wx.ID_CLEAR, "Clear Log")

        self.Bind(wx.EVT_MENU, self.OnShowLog, item_show_log)
        self.Bind(wx.EVT_MENU, self.OnSaveLogToFile, item_save)
        self.Bind(wx.EVT_MENU, self.OnClearLog, item_clear)

        self.PopupMenu(menu)
        menu.Destroy()

    def OnShowLog(self, event):
        with LogDialog(self.GetParent()) as dlg:
            dlg.ShowModal()

    def OnSaveLogToFile(self, event):
        """Save log to a text file."""
        with wx.FileDialog(
            self,
            "Save Log to file",
            wildcard="Text files (*.txt)|*.txt|Log files (*.log)|*.log|All files (*.*)|*.*",
            style=wx.FD_SAVE | wx.FD_OVERWRITE_PROMPT
        ) as fileDialog:

            if fileDialog.ShowModal() == wx.ID_CANCEL:
                return

            path = fileDialog.GetPath()
            if Log.write_to_file(path):
                self.SetStatusText(f"Log saved to: {path}")
            else:
                self.SetStatusText(f"Could not save log to: {path}")

    def OnClearLog(self, event):
        Log.clear()
        self.SetStatusText("Log cleared")

################################################################################################
