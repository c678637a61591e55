'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import wx

# Shared UI constants
APP_TITLE = "BasketPad"
FRAME_SIZE = (450, 600)
FRAME_MIN_SIZE = (400, 500)
PADDING = 6
CHECK_SIZE = 16
BUTTON_SIZE = (125, 25)
QTY_MAX = 999
DEFAULT_BG_COLOR = wx.Colour(240, 242, 245)
BUTTON_BG_COLOR = wx.Colour(24, 119, 242)
BUTTON_FG_COLOR = wx.Colour(255, 255, 255)
LABEL_FG_COLOR = wx.Colour(96, 103, 112)
DROP_HIGHLIGHT_COLOR = wx.Colour(210, 228, 255)

# Indices into the tree's state image list
STATE_UNCHECKED = 0
STATE_CHECKED = 1
