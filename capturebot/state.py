import copy
import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from .errors import NoActiveCaptureError, ValidationError
from .page import make_file_name, render_capture_page, write_capture_page

GANGS = ("ballas", "marabunta", "families", "vagos", "bloods")


# ---------- Stats Store ----------
class StatsStore:
    """Per-gang, per-nickname hit counters, pre-populated with the fixed gang set."""

    def __init__(self, gangs=GANGS):
        self._stats = {gang: {} for gang in gangs}

    def apply_hit(self, event):
        """Add a HitRecorded event to the counters. Returns False if the gang is unknown."""
        bucket = self._stats.get(event.gang)
        if bucket is None:
            logging.warning(f"Unknown gang in HIT line: {event.gang}")
            return False

        counters = bucket.setdefault(event.nick, {"hits": 0, "headshots": 0, "damage": 0})
        counters["hits"] += event.hits
        counters["headshots"] += event.headshots
        counters["damage"] += event.damage

        logging.info(f"Updated stats for {event.gang}/{event.nick}: {counters}")
        return True

    def snapshot(self):
        return self._stats


# ---------- Capture State ----------
@dataclass
class CaptureState:
    gang1: Optional[str] = None
    gang2: Optional[str] = None
    start: Optional[str] = None
    weapon: Optional[str] = None
    winner: Optional[str] = None
    file_name: Optional[str] = None

    @property
    def active(self):
        return bool(self.gang1)


def _require(name, value):
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing required field: {name}")
    return value


# ---------- Capture Service ----------
class CaptureService:
    """Single owner of the stats store and the current capture.

    Every mutation and snapshot runs under one lock: the Flask request threads,
    the log watcher thread and the Discord loop all reach this object.
    """

    def __init__(self, web_dir, site_url, notifier=None, stats=None, clock=time.time,
                 subtitle="Auto generated from server.log"):
        self.web_dir = web_dir
        self.site_url = site_url.rstrip("/")
        self.notifier = notifier
        self.stats = stats if stats is not None else StatsStore()
        self.capture = CaptureState()
        self.clock = clock
        self.subtitle = subtitle
        self._lock = threading.Lock()

    def page_url(self, file_name):
        return f"{self.site_url}/{file_name}"

    # ---------- Hits ----------
    def record_hit(self, event):
        with self._lock:
            return self.stats.apply_hit(event)

    # ---------- Capture lifecycle ----------
    def start_capture(self, gang1, gang2, start, weapon):
        """Replace the current capture, publish its page and announce it. Returns the page URL."""
        gang1 = _require("gang1", gang1).strip().lower()
        gang2 = _require("gang2", gang2).strip().lower()
        _require("start", start)
        _require("weapon", weapon)

        with self._lock:
            file_name = make_file_name(gang1, gang2, int(self.clock() * 1000))
            self.capture = CaptureState(gang1=gang1, gang2=gang2, start=start, weapon=weapon,
                                        file_name=file_name)
            site_url = self.page_url(file_name)
            self._publish_page()
            logging.info(f"Capture started: {gang1} vs {gang2} at {start} ({weapon}) -> {site_url}")
            self._notify(site_url)
            return site_url

    def declare_winner(self, winner):
        """Record the winner on the current capture and re-render the same page."""
        winner = _require("winner", winner).strip().lower()

        with self._lock:
            if not self.capture.active:
                raise NoActiveCaptureError("No active capture. Start a capture first.")
            self.capture.winner = winner
            self._publish_page()
            logging.info(f"Winner declared: {winner} ({self.capture.gang1} vs {self.capture.gang2})")
            return self.page_url(self.capture.file_name)

    # ---------- Snapshots ----------
    def stats_snapshot(self):
        with self._lock:
            return copy.deepcopy(self.stats.snapshot())

    def capture_snapshot(self):
        with self._lock:
            c = self.capture
            return {
                "gang1": c.gang1,
                "gang2": c.gang2,
                "start": c.start,
                "weapon": c.weapon,
                "winner": c.winner,
                "generatedFileName": c.file_name,
                "siteUrl": self.page_url(c.file_name) if c.file_name else None,
            }

    # ---------- Internals ----------
    def _publish_page(self):
        c = self.capture
        document = render_capture_page(c.gang1, c.gang2, c.start, c.weapon, c.winner, subtitle=self.subtitle)
        try:
            write_capture_page(self.web_dir, c.file_name, document)
        except OSError as e:
            logging.error(f"Failed to write capture page {c.file_name}: {e}")

    def _notify(self, site_url):
        if self.notifier is None:
            logging.warning("No notifier configured; skipping capture announcement")
            return
        result = self.notifier.notify_capture(self.capture, site_url)
        if not result.ok:
            logging.error(f"Capture announcement failed: {result.error}")
