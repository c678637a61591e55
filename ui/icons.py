################################################################################################
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

This file holds the code for the checkbox bitmaps shown beside tree items.
'''
################################################################################################

import wx

from ui.constants import CHECK_SIZE, STATE_CHECKED, STATE_UNCHECKED

################################################################################################

class CheckImageManager:
    """
    Lazy builder for the tree's checkbox state images:
      - Does NOT create bitmaps at import time (needs a wx.App).
      - Draws with the native renderer so boxes match the platform theme.
    """
    __images = None

    def _render(self, window: wx.Window, flags: int) -> wx.Bitmap:
        bmp = wx.Bitmap(CHECK_SIZE, CHECK_SIZE)
        dc = wx.MemoryDC(bmp)
        dc.SetBackground(wx.Brush(window.GetBackgroundColour()))
        dc.Clear()
        wx.RendererNative.Get().DrawCheckBox(window, dc, wx.Rect(0, 0, CHECK_SIZE, CHECK_SIZE), flags)
        dc.SelectObject(wx.NullBitmap)
        return bmp

    def Get(self, window: wx.Window) -> wx.ImageList:
        """Image list with STATE_UNCHECKED / STATE_CHECKED entries, built once."""
        if CheckImageManager.__images is None:
            images = wx.ImageList(CHECK_SIZE, CHECK_SIZE)
            boxes = {STATE_UNCHECKED: 0, STATE_CHECKED: wx.CONTROL_CHECKED}
            for state in sorted(boxes):
                images.Add(self._render(window, boxes[state]))
            CheckImageManager.__images = images
        return CheckImageManager.__images

################################################################################################

CheckImages = CheckImageManager()

################################################################################################
