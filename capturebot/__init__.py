"""Capture notifier: log watcher / HTTP control, capture pages and Discord alerts."""

__version__ = "1.0.0"
