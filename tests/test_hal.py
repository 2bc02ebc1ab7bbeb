import threading

import pytest

from tinyproto import hal
from tinyproto.hal import EVENT_BITS_ALL, Events, Mutex


@pytest.fixture(autouse=True)
def _restore_hal():
    yield
    hal.reset_hal()


class FakeClock:
    def __init__(self, start=0):
        self.now = start
        self.sleeps = []
        self.on_sleep = None

    def millis(self):
        return self.now

    def sleep(self, ms):
        self.sleeps.append(ms)
        self.now = (self.now + ms) & 0xFFFFFFFF
        if self.on_sleep is not None:
            self.on_sleep()


@pytest.fixture
def clock():
    fake = FakeClock()
    hal.install_hal(sleep=fake.sleep, millis=fake.millis)
    return fake


def test_try_lock_exclusive():
    m = Mutex()
    assert m.try_lock() is True
    assert m.try_lock() is False
    m.unlock()
    assert m.try_lock() is True


def test_context_manager_holds_and_releases():
    m = Mutex()
    with m:
        assert m.locked is True
        assert m.try_lock() is False
    assert m.locked is False
    assert m.try_lock() is True


def test_unlock_free_mutex_is_harmless():
    m = Mutex()
    m.unlock()
    assert m.try_lock() is True


def test_lock_polls_with_one_ms_sleep(clock):
    m = Mutex()
    assert m.try_lock()
    clock.on_sleep = m.unlock
    m.lock()
    assert clock.sleeps == [1]
    assert m.locked is True


def test_mutex_across_threads():
    m = Mutex()
    counter = {"n": 0}

    def work():
        for _ in range(200):
            with m:
                counter["n"] += 1

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter["n"] == 800
    assert m.locked is False
    assert m.try_lock() is True
    assert m.try_lock() is False


def test_events_set_and_check_leave():
    ev = Events()
    ev.set(0x05)
    assert ev.check(0x01, False) == 0x05
    assert ev.bits == 0x05


def test_events_check_clear_returns_previous_bits():
    ev = Events()
    ev.set(0x05)
    assert ev.check(0x01, True) == 0x05
    assert ev.check(EVENT_BITS_ALL, False) == 0x04


def test_events_check_clear_without_match_keeps_bits():
    ev = Events()
    ev.set(0x04)
    assert ev.check(0x01, True) == 0x04
    assert ev.bits == 0x04


def test_events_clear():
    ev = Events()
    ev.set(EVENT_BITS_ALL)
    ev.clear(0x0F)
    ev.clear(0xF0)
    assert ev.bits == 0


def test_events_bits_limited_to_eight():
    ev = Events()
    ev.set(0x1FF)
    assert ev.bits == EVENT_BITS_ALL


def test_wait_returns_immediately_when_set(clock):
    ev = Events()
    ev.set(0x02)
    assert ev.wait(0x02, False, 100) == 0x02
    assert clock.sleeps == []
    assert ev.bits == 0x02


def test_wait_clear(clock):
    ev = Events()
    ev.set(0x03)
    assert ev.wait(0x01, True, 100) == 0x03
    assert ev.bits == 0x02


def test_wait_times_out(clock):
    ev = Events()
    assert ev.wait(0x01, False, 10) == 0
    assert len(clock.sleeps) == 10
    assert clock.now == 10


def test_wait_zero_timeout_does_not_sleep(clock):
    ev = Events()
    assert ev.wait(0x01, False, 0) == 0
    assert clock.sleeps == []


def test_wait_timeout_across_clock_wrap():
    fake = FakeClock(start=0xFFFFFFFB)
    hal.install_hal(sleep=fake.sleep, millis=fake.millis)
    ev = Events()
    assert ev.wait(0x01, False, 10) == 0
    assert len(fake.sleeps) == 10


def test_wait_woken_by_set(clock):
    ev = Events()
    clock.on_sleep = lambda: ev.set(0x08) if len(clock.sleeps) == 3 else None
    assert ev.wait(0x08, True, 100) == 0x08
    assert len(clock.sleeps) == 3
    assert ev.bits == 0


def test_install_hal_partial_keeps_others(clock):
    recorded = []
    hal.install_hal(sleep=recorded.append)
    hal.sleep(7)
    assert recorded == [7]
    assert hal.millis() == clock.now


def test_reset_hal_restores_defaults():
    recorded = []
    hal.install_hal(sleep=recorded.append, millis=lambda: 42)
    assert hal.millis() == 42
    hal.reset_hal()
    hal.sleep(0)
    assert recorded == []


def test_millis_wraps_to_32_bits():
    hal.install_hal(millis=lambda: 0x1_0000_0005, micros=lambda: 0x1_0000_0007)
    assert hal.millis() == 5
    assert hal.micros() == 7


def test_default_micros_advances_with_sleep_us():
    before = hal.micros()
    hal.sleep_us(2000)
    after = hal.micros()
    assert ((after - before) & 0xFFFFFFFF) >= 1999


def test_default_millis_advances_with_sleep():
    before = hal.millis()
    hal.sleep(20)
    after = hal.millis()
    assert ((after - before) & 0xFFFFFFFF) >= 19