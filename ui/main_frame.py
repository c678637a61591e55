'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from pathlib import Path

import wx

from core.browser import BrowserSession, DEFAULT_START_URL
from core.io_worker import IOWorker
from core.link_title import extract_url, fetch_page_title
from core.log import Log
from core.tree_store import LoadStatus, TreeStore
from core.view_sync import ViewSync
from ui.constants import APP_TITLE, DEFAULT_BG_COLOR, FRAME_MIN_SIZE, FRAME_SIZE, PADDING
from ui.entry_panel import EntryPanel
from ui.statusbar import StatusBar
from ui.tree_panel import ListTree


class MainFrame(wx.Frame):
    """Main application frame for BasketPad."""
    def __init__(
        self,
        save_path: Path,
        verbosity: int = 0,
        start_url: str | None = DEFAULT_START_URL,
        use_browser: bool = True,
        log_file: str | None = None,
    ):
        super().__init__(None, title=APP_TITLE, size=FRAME_SIZE,
                         style=wx.DEFAULT_FRAME_STYLE | wx.STAY_ON_TOP)
        self.SetMinSize(FRAME_MIN_SIZE)
        self.SetBackgroundColour(DEFAULT_BG_COLOR)
        Log.set_verbosity(verbosity)

        self.log_file = log_file
        self.io = IOWorker()
        self.browser = BrowserSession(start_url=start_url)
        self._browser_starting = False

        self.store = TreeStore(save_path)
        self.store.on_save_error = self._on_save_error

        self._build_menu()
        self.SetStatusBar(StatusBar(self))
        self._build_body()

        self.sync = ViewSync(self.store, self.tree, notify=self.notify, navigate=self._navigate)
        self.tree.bind_sync(self.sync)
        self._load()

        if use_browser:
            self._start_browser()
        self.Bind(wx.EVT_CLOSE, self._on_close)

    # ---------------- Construction ----------------

    def _build_menu(self):
        menubar = wx.MenuBar()
        file_menu = wx.Menu()
        item_save = file_menu.Append(wx.ID_SAVE, "&Save Now\tCtrl+S", "Write the list to disk")
        item_browser = file_menu.Append(wx.ID_ANY, "Start &Browser", "Launch the shopping browser")
        file_menu.AppendSeparator()
        item_exit = file_menu.Append(wx.ID_EXIT, "E&xit")
        menubar.Append(file_menu, "&File")
        self.SetMenuBar(menubar)

        self.Bind(wx.EVT_MENU, self.on_action_save, item_save)
        self.Bind(wx.EVT_MENU, lambda evt: self._start_browser(), item_browser)
        self.Bind(wx.EVT_MENU, lambda evt: self.Close(), item_exit)

    def _build_body(self):
        panel = wx.Panel(self)
        panel.SetBackgroundColour(DEFAULT_BG_COLOR)
        self.tree = ListTree(panel)
        self.entry = EntryPanel(panel, self)

        s = wx.BoxSizer(wx.VERTICAL)
        s.Add(self.tree, 1, wx.EXPAND | wx.ALL, PADDING * 2)
        s.Add(self.entry, 0, wx.EXPAND | wx.LEFT | wx.RIGHT | wx.BOTTOM, PADDING * 2)
        panel.SetSizer(s)

    def _load(self):
        status = self.store.load()
        self.sync.rebuild()
        if status is LoadStatus.RECOVERED:
            msg = f"Error loading tasks: {self.store.load_error}\n\nA sample list has been loaded instead."
            wx.CallAfter(wx.MessageBox, msg, "Error", wx.OK | wx.ICON_ERROR, self)
            self.SetStatusText("Sample list loaded (save file could not be read)")
        elif status is LoadStatus.SAMPLE:
            self.SetStatusText("Sample list loaded")
        else:
            self.SetStatusText(f"Loaded {len(self.store)} items")

    # ---------------- Notices ----------------

    def notify(self, message: str):
        Log.debug(message, 0)
        self.SetStatusText(message)

    def _on_save_error(self, error: OSError):
        self.notify(f"Error saving tasks: {error}")

    # ---------------- Browser ----------------

    def _start_browser(self):
        if self.browser.is_running or self._browser_starting:
            return
        self._browser_starting = True
        self.SetStatusText("Starting browser...")
        self.io.submit(self.browser.launch, callback=self._on_browser_launched)

    def _on_browser_launched(self, result, err):
        self._browser_starting = False
        if err is not None:
            Log.debug(err[1], 1)
            wx.MessageBox(f"Browser error: {err[0]}", "Error", wx.OK | wx.ICON_ERROR, self)
            self.SetStatusText("Browser not available")
            return
        self.SetStatusText("Browser ready")

    def _navigate(self, url: str):
        if not self.browser.is_running:
            raise RuntimeError("Browser is not running")
        self.SetStatusText(f"Opening {url}")
        self.io.submit(self.browser.navigate, url, callback=self._on_browser_done)

    def _on_browser_done(self, result, err):
        if err is not None:
            self.notify(f"Browser error: {err[0]}")

    # ---------------- Actions ----------------

    def on_action_add_heading(self, event=None):
        title, url, quantity = self.entry.values()
        if not title:
            self.SetStatusText("Type a title first")
            return
        if self.sync.add_heading(self.sync.selected_id, title, url=url or None, quantity=quantity):
            self.entry.clear()
            self.SetStatusText(f"Added {title}")

    def on_action_add_from_page(self, event=None):
        parent_id = self.sync.selected_id
        if parent_id is None:
            self.SetStatusText("Select a heading to add the page to")
            return
        if not self.browser.is_running:
            self.SetStatusText("Browser not available")
            return

        def _done(result, err):
            if err is not None:
                self.notify(f"Browser error: {err[0]}")
                return
            title, url = result
            if self.sync.add_item_with_url(parent_id, title, url):
                self.entry.clear()
                self.SetStatusText(f"Added {title or url}")

        self.io.submit(self.browser.active_document, callback=_done)

    def on_action_remove(self, event=None):
        if self.sync.selected_id is None:
            self.SetStatusText("Nothing selected")
            return
        self.sync.remove(self.sync.selected_id)

    def on_action_save(self, event=None):
        try:
            self.store.save()
        except OSError as e:
            self._on_save_error(e)
            return
        self.store.dirty = False
        self.SetStatusText(f"Saved to {self.store.path}")

    def on_link_dropped(self, text: str):
        url = extract_url(text)
        if url is None:
            first_line = text.strip().splitlines()[0]
            self.entry.set_link(title=first_line.strip())
            return

        self.entry.set_link(url=url)
        self.SetStatusText(f"Fetching title for {url}")

        def _done(title, err):
            if err is not None:
                self.notify(f"Could not fetch page title: {err[0]}")
                return
            if self:
                self.entry.set_link(title=title)
                self.SetStatusText("Title filled in from link")

        self.io.submit(fetch_page_title, url, callback=_done)

    # ---------------- Shutdown ----------------

    def _on_close(self, event):
        if self.store.dirty:
            self.on_action_save()
        self.io.shutdown(final=self.browser.close)
        if self.log_file:
            Log.write_to_file(self.log_file)
        self.Destroy()
