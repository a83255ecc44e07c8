from capturebot.live_monitor import make_change_handler, process_line, start_monitoring
from capturebot.log_parser import CaptureStarted, Unrecognized


def write_log(path, *lines):
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")


def test_capture_line_starts_capture(tmp_path, service, notifier):
    log = tmp_path / "server.log"
    write_log(log, "[HIT] gang=Ballas nick=A hits=1 headshots=0 dmg=10",
              "[CAPTURE] gang1=Ballas gang2=Families start=20:00 weapon=AK")

    make_change_handler(service)(log)

    assert service.capture.gang1 == "ballas"
    assert service.capture.weapon == "AK"
    assert len(notifier.calls) == 1
    # only the newest line is considered
    assert service.stats_snapshot()["ballas"] == {}


def test_hit_line_updates_stats(tmp_path, service):
    log = tmp_path / "server.log"
    write_log(log, "[HIT] gang=Ballas nick=AV_ASSA hits=3 headshots=1 dmg=90")
    handler = make_change_handler(service)

    handler(log)
    handler(log)

    assert service.stats_snapshot()["ballas"]["AV_ASSA"] == {"hits": 6, "headshots": 2, "damage": 180}


def test_unknown_gang_hit_is_dropped(service):
    process_line(service, "[HIT] gang=Cartel nick=X hits=1 headshots=1 dmg=5")
    assert "cartel" not in service.stats_snapshot()


def test_unmatched_line_changes_nothing(service, notifier):
    before = service.stats_snapshot()
    event = process_line(service, "[CAPTURE] something odd")
    assert isinstance(event, Unrecognized)
    assert service.stats_snapshot() == before
    assert not service.capture.active
    assert notifier.calls == []


def test_capture_line_with_empty_gang_is_ignored(service, web_dir, notifier):
    event = process_line(service, "[CAPTURE] gang1= gang2=Families start=20:00 weapon=AK")
    assert isinstance(event, CaptureStarted)
    assert not service.capture.active
    assert list(web_dir.iterdir()) == []
    assert notifier.calls == []


def test_empty_log_is_ignored(tmp_path, service):
    log = tmp_path / "server.log"
    log.write_text("\n\n", encoding="utf-8")
    make_change_handler(service)(log)
    assert not service.capture.active


class FakeWatcher:
    def __init__(self):
        self.watches = []
        self.started = False

    def on_stabilized_change(self, path, handler):
        self.watches.append((path, handler))

    def start(self):
        self.started = True


def test_start_monitoring_registers_log(tmp_path, service):
    log = tmp_path / "server.log"
    watcher = FakeWatcher()

    assert start_monitoring(service, log, watcher=watcher) is watcher
    assert watcher.started
    assert watcher.watches[0][0] == log
