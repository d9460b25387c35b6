from exam_player.services.exam.timefmt import format_mm_ss
from exam_player.services.exam.timers import Countdown, Stopwatch


def test_format_mm_ss():
    assert format_mm_ss(0) == '00:00'
    assert format_mm_ss(65) == '01:05'
    assert format_mm_ss(12.9) == '00:12'
    assert format_mm_ss(-3) == '00:00'
    assert format_mm_ss(3600) == '60:00'


# ---- Stopwatch ----

def test_stopwatch_starts_at_zero(clock):
    sw = Stopwatch(clock)
    assert sw.elapsed_seconds == 0
    assert sw.display == '00:00'
    assert not sw.running


def test_stopwatch_counts_whole_seconds(clock):
    sw = Stopwatch(clock)
    sw.start()
    clock.advance(2200)
    assert sw.elapsed_seconds == 2
    assert sw.display == '00:02'
    assert sw.running


def test_stopwatch_stop_freezes_value(clock):
    sw = Stopwatch(clock)
    sw.start()
    clock.advance(4100)
    assert sw.stop() == 4
    assert sw.elapsed_seconds == 4
    clock.advance(3000)
    assert sw.elapsed_seconds == 4
    assert not sw.running
    # Stopping again returns the same frozen value
    assert sw.stop() == 4


def test_stopwatch_resumes_from_accumulated_value(clock):
    sw = Stopwatch(clock)
    sw.start()
    clock.advance(3500)
    sw.stop()
    clock.advance(10000)
    sw.start()
    clock.advance(2000)
    assert sw.elapsed_seconds == 5


def test_stopwatch_double_start_does_not_restart(clock):
    sw = Stopwatch(clock)
    sw.start()
    clock.advance(1500)
    sw.start()
    clock.advance(1500)
    assert sw.stop() == 3


def test_stopwatch_reset_from_any_state(clock):
    sw = Stopwatch(clock)
    sw.start()
    clock.advance(5000)
    sw.reset()
    assert sw.elapsed_seconds == 0
    assert not sw.running
    assert clock.pending == 0
    sw.reset()
    assert sw.elapsed_seconds == 0


def test_stopwatch_ignores_missed_ticks(clock):
    # A throttled host may deliver a single tick after a long gap; the value
    # comes from the clock delta, not from the number of ticks delivered.
    seen = []
    sw = Stopwatch(clock, on_tick=seen.append)
    sw.start()
    clock.advance(1000)
    assert seen == [1]
    sw._tick.cancel()
    clock.advance(59000)
    assert sw.elapsed_seconds == 60
    assert sw.stop() == 60


def test_stopwatch_close_cancels_tick(clock):
    seen = []
    sw = Stopwatch(clock, on_tick=seen.append)
    sw.start()
    sw.close()
    clock.advance(3000)
    assert seen == []


# ---- Countdown ----

def test_countdown_warning_then_expiry(clock):
    fired = []
    cd = Countdown(clock, 45, on_expire=lambda: fired.append(True))
    assert cd.display == '00:45'
    assert cd.is_warning
    cd.start()
    clock.advance(44 * 1000)
    assert cd.seconds == 1
    assert cd.is_warning
    assert not cd.is_expired
    assert fired == []
    clock.advance(1000)
    assert fired == [True]
    assert cd.is_expired
    assert not cd.is_warning
    assert not cd.running
    assert cd.display == '00:00'
    clock.advance(10000)
    assert fired == [True]


def test_countdown_not_warning_above_threshold(clock):
    cd = Countdown(clock, 120)
    assert not cd.is_warning
    cd.start()
    clock.advance(59 * 1000)
    assert cd.seconds == 61
    assert not cd.is_warning
    clock.advance(1000)
    assert cd.is_warning


def test_countdown_stop_never_expires(clock):
    fired = []
    cd = Countdown(clock, 45, on_expire=lambda: fired.append(True))
    cd.start()
    clock.advance(10000)
    cd.stop()
    assert cd.seconds == 35
    clock.advance(60000)
    assert cd.seconds == 35
    assert fired == []
    cd.stop()
    assert fired == []


def test_countdown_reset_restores_budget(clock):
    fired = []
    cd = Countdown(clock, 10, on_expire=lambda: fired.append(True))
    cd.start()
    clock.advance(4000)
    cd.reset()
    assert cd.seconds == 10
    assert not cd.running
    clock.advance(20000)
    assert fired == []


def test_countdown_double_start_is_noop(clock):
    cd = Countdown(clock, 10)
    cd.start()
    cd.start()
    clock.advance(3000)
    assert cd.seconds == 7
    assert clock.pending == 1


def test_countdown_restart_after_expiry_fires_again(clock):
    fired = []
    cd = Countdown(clock, 2, on_expire=lambda: fired.append(True))
    cd.start()
    clock.advance(2000)
    cd.reset()
    cd.start()
    clock.advance(2000)
    assert fired == [True, True]


def test_countdown_to_dict(clock):
    cd = Countdown(clock, 90)
    assert cd.to_dict() == {
        'seconds': 90,
        'display': '01:30',
        'isWarning': False,
        'isExpired': False,
        'running': False,
    }


def test_stopwatch_without_listener_schedules_nothing(clock):
    sw = Stopwatch(clock)
    sw.start()
    assert clock.pending == 0
    clock.advance(3000)
    assert sw.elapsed_seconds == 3


def test_stopwatch_close_freezes_value(clock):
    sw = Stopwatch(clock, on_tick=lambda s: None)
    sw.start()
    clock.advance(7300)
    sw.close()
    assert not sw.running
    assert sw.elapsed_seconds == 7
    assert clock.pending == 0
    clock.advance(5000)
    assert sw.elapsed_seconds == 7
