# capturebot/log_simulator.py

import logging
import threading
import time

from colorama import Fore, Style

from .config import SIMULATED_LOG_FILE, SIMULATION_SPEED, TEST_LOGS_DIR, ensure_directories
from .log_parser import CAPTURE_MARKER, HIT_MARKER

SAMPLE_LOG = """[2025-11-20 19:58:02] server started
[2025-11-20 20:00:00] [CAPTURE] gang1=Ballas gang2=Families start=20:00 weapon=Desert Eagle
[2025-11-20 20:00:14] [HIT] gang=Ballas nick=AV_ASSA hits=3 headshots=1 dmg=90
[2025-11-20 20:00:19] [HIT] gang=Families nick=Nika_Green hits=2 headshots=0 dmg=54
[2025-11-20 20:00:31] [HIT] gang=Ballas nick=AV_ASSA hits=4 headshots=2 dmg=132
[2025-11-20 20:00:40] [HIT] gang=Families nick=Levan_Grove hits=5 headshots=1 dmg=150
[2025-11-20 20:00:52] [HIT] gang=Ballas nick=Dato_Purple hits=1 headshots=1 dmg=45
[2025-11-20 20:01:05] [HIT] gang=Families nick=Nika_Green hits=3 headshots=2 dmg=110
[2025-11-20 20:15:00] [CAPTURE] gang1=Vagos gang2=Bloods start=20:15 weapon=M4
[2025-11-20 20:15:09] [HIT] gang=Vagos nick=Gio_Yellow hits=6 headshots=2 dmg=168
[2025-11-20 20:15:22] [HIT] gang=Bloods nick=Saba_Red hits=2 headshots=1 dmg=70
"""


class SimulationManager:
    """Replays a test log into the simulated live log, one line at a time."""

    def __init__(self, quiet=False, speed=SIMULATION_SPEED, output_file=SIMULATED_LOG_FILE):
        self.thread = None
        self.stop_flag = threading.Event()
        self.speed = speed
        self.output_file = output_file
        self.total_lines = 0
        self.current_line = 0
        self.is_running = False
        self.simulation_complete = False
        self.source_file = None
        self.quiet = quiet

    def get_progress(self):
        """Get current simulation progress as percentage."""
        if self.total_lines == 0:
            return 0.0
        return self.current_line / self.total_lines * 100

    def is_complete(self):
        return self.simulation_complete

    def start(self):
        """Start the simulation in a separate thread."""
        test_files = get_test_log_files()

        if not test_files:
            self._print_colored(f"No test log files found in {TEST_LOGS_DIR}", Fore.RED)
            self._print_colored("Creating sample test data...", Fore.YELLOW)
            test_files = [self.create_sample_test_data()]

        self.source_file = test_files[0]
        self._print_colored(f"Using test file: {self.source_file.name}", Fore.CYAN)
        self.stop_flag.clear()

        self.thread = threading.Thread(
            target=self._simulate_live_log,
            args=(self.source_file, self.output_file),
            daemon=True
        )
        self.thread.start()
        return True

    def stop(self):
        """Stop the simulation."""
        if self.thread and self.is_running:
            self.stop_flag.set()
            self.thread.join(timeout=5)
            self.is_running = False

    def _print_colored(self, text, color=Fore.WHITE):
        if not self.quiet:
            print(f"{color}{text}{Style.RESET_ALL}")

    @staticmethod
    def event_lines(log_content):
        """Lines the watcher would react to; other server chatter is dropped."""
        return [
            line for line in log_content.splitlines()
            if HIT_MARKER in line or CAPTURE_MARKER in line
        ]

    def _simulate_live_log(self, source_file, output_file):
        """
        Append one event line at a time to the output file, pausing long enough
        between lines for the watcher to see each write settle.
        """
        self.is_running = True
        self.simulation_complete = False

        try:
            with open(source_file, "r", encoding="utf-8") as f:
                lines = self.event_lines(f.read())
            self.total_lines = len(lines)
            self._print_colored(f"Parsed {self.total_lines} log lines.", Fore.MAGENTA)

            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w", encoding="utf-8") as f:
                f.truncate(0)

            logging.info(f"Starting simulation from {source_file.name}")

            with open(output_file, "a", encoding="utf-8") as out:
                self.current_line = 0
                while self.current_line < self.total_lines and not self.stop_flag.is_set():
                    out.write(lines[self.current_line] + "\n")
                    out.flush()
                    self.current_line += 1
                    self.stop_flag.wait(self.speed)

        except OSError as e:
            logging.error(f"Simulation error: {e}")
        finally:
            self.is_running = False
            self.simulation_complete = True
            logging.info("Simulation completed.")

    def create_sample_test_data(self):
        """Create sample test data for demonstration."""
        ensure_directories()

        sample_file = TEST_LOGS_DIR / "sample_capture.txt"
        with open(sample_file, "w", encoding="utf-8") as f:
            f.write(SAMPLE_LOG)

        self._print_colored(f"Created sample test file: {sample_file}", Fore.GREEN)
        return sample_file


def get_test_log_files():
    """Public function to get test log files."""
    if not TEST_LOGS_DIR.exists():
        return []
    return sorted(file for file in TEST_LOGS_DIR.glob("*.txt") if file.is_file())
