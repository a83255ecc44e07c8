from capturebot.watcher import LogWatcher, read_last_line


def append(path, text):
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)


def test_handler_fires_once_after_write_settles(tmp_path):
    log = tmp_path / "server.log"
    log.write_text("first\n", encoding="utf-8")
    calls = []
    watcher = LogWatcher(stability_threshold=0.5)
    watcher.on_stabilized_change(log, calls.append)

    assert watcher.poll_once(now=0.0) == []
    append(log, "second\n")
    assert watcher.poll_once(now=1.0) == []
    assert watcher.poll_once(now=1.2) == []
    assert watcher.poll_once(now=1.6) == [log]
    assert watcher.poll_once(now=3.0) == []
    assert calls == [log]


def test_burst_of_writes_fires_once(tmp_path):
    log = tmp_path / "server.log"
    log.write_text("", encoding="utf-8")
    calls = []
    watcher = LogWatcher(stability_threshold=0.5)
    watcher.on_stabilized_change(log, calls.append)

    append(log, "a\n")
    watcher.poll_once(now=1.0)
    append(log, "bb\n")
    watcher.poll_once(now=1.3)
    assert watcher.poll_once(now=1.7) == []
    assert watcher.poll_once(now=1.9) == [log]
    assert len(calls) == 1


def test_file_created_after_registration(tmp_path):
    log = tmp_path / "server.log"
    calls = []
    watcher = LogWatcher(stability_threshold=0.5)
    watcher.on_stabilized_change(log, calls.append)

    log.write_text("hello\n", encoding="utf-8")
    watcher.poll_once(now=1.0)
    watcher.poll_once(now=2.0)
    assert calls == [log]


def test_deleted_file_does_not_fire(tmp_path):
    log = tmp_path / "server.log"
    log.write_text("hello\n", encoding="utf-8")
    calls = []
    watcher = LogWatcher(stability_threshold=0.5)
    watcher.on_stabilized_change(log, calls.append)

    log.unlink()
    watcher.poll_once(now=1.0)
    watcher.poll_once(now=2.0)
    assert calls == []


def test_handler_errors_are_contained(tmp_path):
    log = tmp_path / "server.log"
    log.write_text("", encoding="utf-8")

    def boom(path):
        raise RuntimeError("bad line")

    watcher = LogWatcher(stability_threshold=0.5)
    watcher.on_stabilized_change(log, boom)
    append(log, "x\n")
    watcher.poll_once(now=1.0)
    assert watcher.poll_once(now=2.0) == [log]


def test_start_and_stop(tmp_path):
    watcher = LogWatcher(poll_interval=0.01)
    watcher.on_stabilized_change(tmp_path / "server.log", lambda path: None)
    thread = watcher.start()
    assert thread.is_alive()
    watcher.stop()
    assert not thread.is_alive()


def test_read_last_line(tmp_path):
    log = tmp_path / "server.log"
    log.write_text("one\r\ntwo\r\n\n\n", encoding="utf-8")
    assert read_last_line(log) == "two"


def test_read_last_line_empty_or_missing(tmp_path):
    log = tmp_path / "server.log"
    assert read_last_line(log) is None
    log.write_text("  \n\n", encoding="utf-8")
    assert read_last_line(log) is None
