import logging
import os
import threading
import time
from pathlib import Path

from .config import WATCH_POLL_INTERVAL, WATCH_STABILITY_THRESHOLD


def _file_signature(path):
    """(size, mtime) of a file, or None when it does not exist."""
    try:
        st = os.stat(path)
    except OSError:
        return None
    return st.st_size, st.st_mtime_ns


def read_last_line(path):
    """Return the last non-empty line of a text file, or None."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            data = f.read()
    except OSError as e:
        logging.error(f"Read error: {e}")
        return None

    trimmed = data.strip()
    if not trimmed:
        return None
    return trimmed.splitlines()[-1].strip() or None


class LogWatcher:
    """Polls watched files and calls a handler once a change has settled.

    A change is reported after the file's size and mtime stay the same for
    ``stability_threshold`` seconds, so a burst of writes fires the handler once.
    """

    def __init__(self, poll_interval=WATCH_POLL_INTERVAL, stability_threshold=WATCH_STABILITY_THRESHOLD,
                 clock=time.monotonic):
        self.poll_interval = poll_interval
        self.stability_threshold = stability_threshold
        self.clock = clock
        self._watches = {}
        self._stop = threading.Event()
        self.thread = None

    def on_stabilized_change(self, path, handler):
        path = Path(path)
        self._watches[path] = {
            "handler": handler,
            "signature": _file_signature(path),
            "changed_at": None,
        }

    def poll_once(self, now=None):
        """Check every watched file once; returns the paths whose handler fired."""
        now = self.clock() if now is None else now
        fired = []
        for path, watch in list(self._watches.items()):
            signature = _file_signature(path)
            if signature != watch["signature"]:
                watch["signature"] = signature
                # A deleted file is not a change worth reporting
                watch["changed_at"] = now if signature is not None else None
                continue

            changed_at = watch["changed_at"]
            if changed_at is not None and now - changed_at >= self.stability_threshold:
                watch["changed_at"] = None
                logging.info(f"File changed: {path}")
                self._fire(path, watch["handler"])
                fired.append(path)
        return fired

    def _fire(self, path, handler):
        try:
            handler(path)
        except Exception as e:
            logging.exception(f"Watcher callback error for {path}: {e}")

    def _run(self):
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self.poll_interval)

    def start(self):
        if self.thread and self.thread.is_alive():
            return self.thread
        self._stop.clear()
        self.thread = threading.Thread(target=self._run, name="log-watcher", daemon=True)
        self.thread.start()
        return self.thread

    def stop(self):
        self._stop.set()
        if self.thread:
            self.thread.join(timeout=5)
            self.thread = None
