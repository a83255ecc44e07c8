# capturebot/config.py

import os
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError

# Silently does nothing when there is no .env (real env vars still apply)
load_dotenv()

# ---------- Directory Configuration ----------
ROOT_DIR = Path(__file__).parent.parent  # Go up one level from capturebot/ to project root

# Static site (capture pages, main panel)
WEB_DIR = Path(os.environ.get("WEB_DIR") or ROOT_DIR / "public")

# Log directories
LOGS_DIR = ROOT_DIR / "logs"
TEST_LOGS_DIR = LOGS_DIR / "test"
SIMULATED_LOG_FILE = ROOT_DIR / "simulated_live.txt"

# ---------- Discord Configuration ----------
DISCORD_TOKEN = os.environ.get("TOKEN", "")
CHANNEL_ID = os.environ.get("CHANNEL_ID") or "1441330193883987999"

# ---------- Log Watch Configuration ----------
DEFAULT_LOG_PATH = ROOT_DIR / "server.log"
LOG_PATH = Path(os.environ.get("LOG_PATH") or DEFAULT_LOG_PATH)

# ---------- Timing Configuration ----------
WATCH_POLL_INTERVAL = 0.3  # How often the watcher stats the log file
WATCH_STABILITY_THRESHOLD = 0.5  # File must stay unchanged this long before the callback
SIMULATION_SPEED = 1.5  # Seconds between simulated log lines

# ---------- Server Configuration ----------
WEB_SERVER_PORT = int(os.environ.get("PORT") or 3000)
WEB_SERVER_HOST = os.environ.get("HOST") or "0.0.0.0"
SITE_URL = os.environ.get("SITE_URL") or f"http://localhost:{WEB_SERVER_PORT}"

# ---------- Mode ----------
MODES = ("watch", "http")
DEFAULT_MODE = os.environ.get("MODE", "watch").lower()

# ---------- Logging Configuration ----------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def require_token(token=None):
    """Return the bot token, or raise ConfigurationError when it is missing."""
    token = DISCORD_TOKEN if token is None else token
    if not token or not token.strip():
        raise ConfigurationError("No TOKEN environment variable found. Set TOKEN in .env or the host's variables.")
    return token.strip()


def parse_channel_id(raw=None):
    """CHANNEL_ID as an int; Discord snowflakes are numeric."""
    raw = CHANNEL_ID if raw is None else raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ConfigurationError(f"CHANNEL_ID must be numeric, got {raw!r}")


# ---------- Create Required Directories ----------
def ensure_directories():
    """Create all required directories if they don't exist."""
    directories = [
        WEB_DIR,
        LOGS_DIR,
        TEST_LOGS_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


# ---------- Validation ----------
def validate_config():
    """Return a list of non-fatal configuration issues."""
    ensure_directories()

    issues = []

    if not LOG_PATH.exists():
        issues.append(f"LOG_PATH does not exist: {LOG_PATH}")

    if DEFAULT_MODE not in MODES:
        issues.append(f"Unknown MODE {DEFAULT_MODE!r}, expected one of {', '.join(MODES)}")

    return issues
