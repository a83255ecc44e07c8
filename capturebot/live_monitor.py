import logging
from pathlib import Path

from colorama import Fore

from .console import print_colored
from .errors import ValidationError
from .log_parser import CaptureStarted, HitRecorded, parse_line
from .watcher import LogWatcher, read_last_line


def dispatch_event(service, event):
    """Apply one parsed log event to the capture service."""
    if isinstance(event, HitRecorded):
        service.record_hit(event)
    elif isinstance(event, CaptureStarted):
        try:
            service.start_capture(event.gang1, event.gang2, event.start, event.weapon)
        except ValidationError as e:
            logging.warning(f"Ignoring CAPTURE line: {e}")


def process_line(service, line):
    event = parse_line(line)
    dispatch_event(service, event)
    return event


def make_change_handler(service):
    """Watcher callback: only the newest line of the log is considered."""
    def handle_change(path):
        line = read_last_line(path)
        if not line:
            return
        logging.info(f"NEW LINE: {line}")
        process_line(service, line)
    return handle_change


def start_monitoring(service, log_path, watcher=None):
    """Begin following ``log_path``; returns the running watcher."""
    log_path = Path(log_path)
    watcher = watcher or LogWatcher()

    if not log_path.exists():
        logging.warning(f"LOG_PATH does not exist: {log_path}")
        print_colored(f"⚠ LOG_PATH does not exist: {log_path}", Fore.YELLOW)
        print_colored("   Create the file or set LOG_PATH env var correctly.", Fore.YELLOW)
    else:
        print_colored(f"📄 Watching log file: {log_path}", Fore.GREEN)

    watcher.on_stabilized_change(log_path, make_change_handler(service))
    watcher.start()
    return watcher
