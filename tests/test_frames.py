import pytest

from gardenray.frames import MAX_FRAMES, FrameTimer


def test_empty_timer_reports_disabled():
    timer = FrameTimer()
    assert timer.average_ms() is None
    assert timer.report().endswith("timer disabled")


def test_average_of_equal_frames():
    timer = FrameTimer()
    for _ in range(3):
        timer.add_frame(20000)
    assert timer.average_ms() == 20
    assert len(timer) == 3


def test_report_mentions_average_and_rate():
    timer = FrameTimer()
    timer.add_frame(20000)
    text = timer.report()
    assert "Average time per frame (ms): 20" in text
    assert "Average frames per second: 50" in text


def test_microseconds_truncate_to_milliseconds():
    timer = FrameTimer()
    timer.add_frame(1999)
    assert timer.average_ms() == 1


def test_ring_drops_oldest_frames():
    timer = FrameTimer(max_frames=4)
    timer.add_frame(1_000_000)
    for _ in range(4):
        timer.add_frame(10000)
    assert len(timer) == 4
    assert timer.average_ms() == 10


def test_default_capacity_matches_constant():
    timer = FrameTimer()
    for _ in range(MAX_FRAMES + 10):
        timer.add_frame(5000)
    assert len(timer) == MAX_FRAMES
    assert timer.average_ms() == 5


def test_zero_average_omits_rate():
    timer = FrameTimer()
    timer.add_frame(500)
    assert timer.average_ms() == 0
    assert "frames per second" not in timer.report()


def test_negative_time_rejected():
    with pytest.raises(ValueError):
        FrameTimer().add_frame(-1)


def test_bad_capacity_rejected():
    with pytest.raises(ValueError):
        FrameTimer(max_frames=0)