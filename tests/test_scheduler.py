import threading

from hospitality.modules.scheduler import ManualScheduler, ThreadingScheduler


def test_manual_scheduler_runs_due_callbacks_in_order():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(2.0, lambda: calls.append('b'))
    scheduler.call_later(1.0, lambda: calls.append('a'))
    scheduler.call_later(5.0, lambda: calls.append('c'))

    scheduler.advance(2.0)

    assert calls == ['a', 'b']
    assert scheduler.now == 2.0
    assert scheduler.pending == 1


def test_manual_scheduler_cancel():
    scheduler = ManualScheduler()
    calls = []
    handle = scheduler.call_later(1.0, lambda: calls.append('x'))
    handle.cancel()

    scheduler.advance(10.0)

    assert calls == []
    assert handle.cancelled


def test_manual_scheduler_runs_callbacks_scheduled_while_advancing():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(1.0, lambda: scheduler.call_later(1.0, lambda: calls.append(scheduler.now)))

    scheduler.advance(3.0)

    assert calls == [2.0]


def test_threading_scheduler_runs_callback():
    done = threading.Event()
    ThreadingScheduler().call_later(0.01, done.set)
    assert done.wait(2.0)


def test_threading_scheduler_cancel():
    fired = threading.Event()
    handle = ThreadingScheduler().call_later(0.2, fired.set)
    handle.cancel()
    assert not fired.wait(0.4)
