import pytest

from capturebot.notifier import NotifyResult
from capturebot.state import CaptureService
from capturebot.webserver import create_app

SITE_URL = "http://localhost:3000"
FIXED_NOW = 1700000000.5


class RecordingNotifier:
    """Stands in for DiscordNotifier; remembers every announcement."""

    def __init__(self, ok=True):
        self.ok = ok
        self.calls = []

    def notify_capture(self, capture, site_url):
        self.calls.append({
            "gang1": capture.gang1,
            "gang2": capture.gang2,
            "start": capture.start,
            "weapon": capture.weapon,
            "siteUrl": site_url,
        })
        if self.ok:
            return NotifyResult(True)
        return NotifyResult(False, "Channel not found. Check CHANNEL_ID.")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def web_dir(tmp_path):
    path = tmp_path / "public"
    path.mkdir()
    return path


@pytest.fixture
def service(web_dir, notifier):
    return CaptureService(web_dir, SITE_URL, notifier, clock=lambda: FIXED_NOW)


@pytest.fixture
def client(service, web_dir):
    app = create_app(service, web_dir)
    app.testing = True
    return app.test_client()


@pytest.fixture
def watch_client(service, web_dir):
    app = create_app(service, web_dir, control=False)
    app.testing = True
    return app.test_client()
