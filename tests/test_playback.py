"""
Overlay playback: timing, wrap-around, restart, frame application
"""

import asyncio

import pytest

from conftest import write_png
from models.domain.overlay import OverlayFrame, OverlayImages
from models.enums import OverlaySlot, PlaybackState
from services.playback import Playback


def _frames(tmp_path, durations):
    return [
        OverlayFrame(duration=d, top=write_png(tmp_path / f"top_{i}.png"))
        for i, d in enumerate(durations)
    ]


def _indexed_playback(frames, sleep):
    """Playback whose callback records the index of every applied frame"""
    applied = []
    playback = None

    def on_frame(images):
        applied.append(playback.current_index)

    playback = Playback(frames, on_frame, sleep=sleep, name="test")
    return playback, applied


def test_empty_sequence_stays_idle(recorder):
    playback = Playback([], recorder, name="empty")

    playback.start()

    assert playback.state is PlaybackState.IDLE
    assert recorder.items == []
    assert not playback.has_pending_tick


@pytest.mark.asyncio
async def test_non_uniform_durations_and_wrap(tmp_path, manual_sleep):
    playback, applied = _indexed_playback(_frames(tmp_path, [1, 2, 3]), manual_sleep)

    playback.start()
    assert playback.state is PlaybackState.RUNNING
    assert applied == [0]

    await manual_sleep.wait_pending()
    for _ in range(4):
        await manual_sleep.tick()

    assert manual_sleep.delays == [1, 2, 3, 1, 2]
    assert applied == [0, 1, 2, 0, 1]

    playback.stop()
    await playback.wait_closed()
    assert playback.state is PlaybackState.STOPPED


@pytest.mark.asyncio
async def test_stop_then_start_restarts_at_first_frame(tmp_path, manual_sleep):
    playback, applied = _indexed_playback(_frames(tmp_path, [1, 1, 1]), manual_sleep)

    playback.start()
    await manual_sleep.wait_pending()
    await manual_sleep.tick()
    await manual_sleep.tick()
    assert playback.current_index == 2

    playback.stop()
    await playback.wait_closed()
    assert not playback.has_pending_tick

    playback.start()
    assert playback.current_index == 0
    assert applied[-1] == 0

    playback.stop()
    await playback.wait_closed()


@pytest.mark.asyncio
async def test_restart_leaves_one_pending_tick(tmp_path, manual_sleep):
    playback, _ = _indexed_playback(_frames(tmp_path, [5, 5]), manual_sleep)

    playback.start()
    first = playback._task
    playback.start()
    second = playback._task

    for _ in range(5):
        await asyncio.sleep(0)

    assert first is not second
    assert first.done()
    assert not second.done()
    assert playback.has_pending_tick

    playback.stop()
    await playback.wait_closed()
    assert second.done()


def test_images_keep_only_existing_files_per_slot(tmp_path):
    frame = OverlayFrame(
        duration=1,
        bottom=write_png(tmp_path / "bottom.png"),
        background=tmp_path / "gone.png",
    )

    images = OverlayImages.from_frame(frame)

    assert list(frame.paths()) == list(OverlaySlot)
    assert images.paths() == {
        OverlaySlot.TOP: None,
        OverlaySlot.BOTTOM: tmp_path / "bottom.png",
        OverlaySlot.LEFT: None,
        OverlaySlot.RIGHT: None,
        OverlaySlot.BACKGROUND: None,
    }
    assert not images.is_empty()


@pytest.mark.asyncio
async def test_missing_file_clears_slot(tmp_path, manual_sleep, recorder):
    frames = [
        OverlayFrame(duration=1, top=write_png(tmp_path / "top.png"), left=write_png(tmp_path / "left.png")),
        OverlayFrame(duration=1, top=tmp_path / "not_there.png"),
    ]
    playback = Playback(frames, recorder, sleep=manual_sleep)

    playback.start()
    await manual_sleep.wait_pending()
    await manual_sleep.tick()

    shown, cleared = recorder.items
    assert shown.top == tmp_path / "top.png"
    assert shown.left == tmp_path / "left.png"
    assert cleared.top is None
    assert cleared.left is None
    assert cleared.is_empty()

    playback.stop()
    await playback.wait_closed()


@pytest.mark.asyncio
async def test_zero_duration_advances_on_next_iteration(tmp_path, recorder):
    playback = Playback(_frames(tmp_path, [0, 0]), recorder)

    playback.start()
    for _ in range(10):
        await asyncio.sleep(0)

    assert len(recorder.items) > 2

    playback.stop()
    await playback.wait_closed()


@pytest.mark.asyncio
async def test_failing_callback_does_not_stop_playback(tmp_path, manual_sleep):
    calls = []

    def on_frame(images):
        calls.append(images)
        raise RuntimeError("widget gone")

    playback = Playback(_frames(tmp_path, [1, 1]), on_frame, sleep=manual_sleep)

    playback.start()
    await manual_sleep.wait_pending()
    await manual_sleep.tick()

    assert len(calls) == 2
    assert playback.state is PlaybackState.RUNNING

    playback.stop()
    await playback.wait_closed()


@pytest.mark.asyncio
async def test_callback_may_stop_playback(tmp_path, manual_sleep):
    playback = None

    def on_frame(images):
        playback.stop()

    playback = Playback(_frames(tmp_path, [1]), on_frame, sleep=manual_sleep)
    playback.start()

    assert playback.state is PlaybackState.STOPPED
    assert not playback.has_pending_tick
    assert manual_sleep.delays == []
