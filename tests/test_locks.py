import threading
import time

import pytest

from src.alerting.infrastructure.locks import ReadWriteLock


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    inside = threading.Barrier(3, timeout=5)

    def reader() -> None:
        with lock.read_locked():
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert not any(t.is_alive() for t in threads)


def test_writer_waits_for_readers() -> None:
    lock = ReadWriteLock()
    events: list[str] = []
    lock.acquire_read()

    def writer() -> None:
        with lock.write_locked():
            events.append("write")

    t = threading.Thread(target=writer)
    t.start()
    time.sleep(0.05)
    events.append("read-done")
    lock.release_read()
    t.join(timeout=5)

    assert events == ["read-done", "write"]


def test_waiting_writer_blocks_new_readers() -> None:
    lock = ReadWriteLock()
    events: list[str] = []
    lock.acquire_read()

    def writer() -> None:
        with lock.write_locked():
            events.append("write")

    def late_reader() -> None:
        with lock.read_locked():
            events.append("late-read")

    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.05)
    r = threading.Thread(target=late_reader)
    r.start()
    time.sleep(0.05)
    assert events == []

    lock.release_read()
    w.join(timeout=5)
    r.join(timeout=5)
    assert events == ["write", "late-read"]


def test_writers_are_exclusive() -> None:
    lock = ReadWriteLock()
    counter = {"active": 0, "max": 0}

    def writer() -> None:
        for _ in range(50):
            with lock.write_locked():
                counter["active"] += 1
                counter["max"] = max(counter["max"], counter["active"])
                counter["active"] -= 1

    threads = [threading.Thread(target=writer) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert counter["max"] == 1


def test_unbalanced_release_raises() -> None:
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()


def test_lock_released_when_block_raises() -> None:
    lock = ReadWriteLock()
    with pytest.raises(ValueError):
        with lock.write_locked():
            raise ValueError("boom")
    # Would deadlock if the write lock were still held
    with lock.read_locked():
        pass
