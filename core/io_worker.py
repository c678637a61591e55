# core/io_worker.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import threading
import queue
import traceback

import wx

from core.log import Log

class IOWorker:
    """
    Single background thread for blocking collaborator calls (browser, HTTP).
    GUI stays in the wx main thread; results come back through wx.CallAfter.
    """

    _STOP = object()

    def __init__(self, name: str = "IOWorker"):
        self._q = queue.Queue()
        self._closed = False
        self._t = threading.Thread(target=self._run, name=name, daemon=True)
        self._t.start()

    def submit(self, fn, *args, callback=None, **kwargs):
        """Queue a task; callback(result, error) runs on GUI thread via wx.CallAfter."""
        if self._closed:
            return False
        self._q.put((fn, args, kwargs, callback))
        return True

    def shutdown(self, final=None, timeout: float = 5.0):
        """Run final() on the worker thread (if given), then stop the thread."""
        if self._closed:
            return
        if final is not None:
            self._q.put((final, (), {}, None))
        self._closed = True
        self._q.put(self._STOP)
        self._t.join(timeout)

    def _run(self):
        """Background thread main loop."""
        while True:
            task = self._q.get()
            if task is self._STOP:
                self._q.task_done()
                return

            fn, args, kwargs, cb = task
            result = None
            err = None

            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                err = (e, traceback.format_exc())

            if cb and not self._closed:
                wx.CallAfter(cb, result, err)
            elif err is not None:
                # Nobody is waiting for this result; keep the traceback.
                Log.debug(err[1], 0)

            self._q.task_done()
