import wx

class LinkDropTarget(wx.TextDropTarget):
    """
    Drag & drop handler for links dragged out of a browser.
    Browsers drop plain text (title and URL lines); the callback sorts it out.
    """
    def __init__(self, window, on_link_drop_callback):
        super().__init__()
        self.window = window
        self.on_link_drop = on_link_drop_callback

    def OnEnter(self, x, y, defResult):
        """Visual feedback when drag enters the field"""
        self.window.SetCursor(wx.Cursor(wx.CURSOR_COPY_ARROW))
        return wx.DragCopy

    def OnLeave(self):
        """Clean up when drag leaves"""
        self.window.SetCursor(wx.Cursor(wx.CURSOR_DEFAULT))

    def OnDragOver(self, x, y, defResult):
        return wx.DragCopy

    def OnDropText(self, x, y, text):
        """Handle the actual drop"""
        self.window.SetCursor(wx.Cursor(wx.CURSOR_DEFAULT))

        if not text or not text.strip():
            return False

        if callable(self.on_link_drop):
            self.on_link_drop(text)

        return True
