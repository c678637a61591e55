# app.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import sys
import traceback
import wx

from core.log import Log
from core.browser import DEFAULT_START_URL
from core.storage import APP_DIR_NAME, resolve_save_path

def on_exception(exc_type, exc_value, exc_traceback):
    """Show unhandled exceptions in the status bar instead of silent failure."""
    if issubclass(exc_type, KeyboardInterrupt):
        # Allow Ctrl+C to work normally
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    tb_text = ''.join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    error_message = f"!ERROR! Unhandled Exception:\n{tb_text}"
    Log.debug(error_message, 0)

    main_frame = wx.GetApp().GetTopWindow() if wx.GetApp() else None
    if main_frame is not None and hasattr(main_frame, 'SetStatusText'):
        main_frame.SetStatusText(f"!ERROR! {exc_type.__name__}: {exc_value}")
    else:
        print(error_message, file=sys.stderr)

if tuple(getattr(wx, 'VERSION', (0,0,0))[:3]) < (4, 2, 0):
    raise RuntimeError(f"BasketPad requires wxPython ≥ 4.2.0; found {wx.__version__}")

from ui.main_frame import MainFrame

def main(
    verbosity: int = 0,
    stdexp: bool = False,
    data_file: str = None,
    start_url: str = DEFAULT_START_URL,
    use_browser: bool = True,
    log_file: str = None,
):
    # Install the exception handler
    if not stdexp:
        sys.excepthook = on_exception

    Log.set_verbosity(verbosity)
    app = wx.App(False)
    app.SetAppName(APP_DIR_NAME)

    # Per-user local data dir, e.g. %LOCALAPPDATA%\BasketPad or ~/.local/share/basketpad
    data_dir = wx.StandardPaths.Get().GetUserLocalDataDir()
    save_path = resolve_save_path(data_file=data_file, data_dir=data_dir)
    Log.debug(f"Save file: {save_path}", 1)

    frame = MainFrame(
        save_path,
        verbosity=verbosity,
        start_url=start_url,
        use_browser=use_browser,
        log_file=log_file,
    )
    frame.Show()

    return app.MainLoop()
