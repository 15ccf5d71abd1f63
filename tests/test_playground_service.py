"""
PlaygroundService: selection workflow and the events it publishes
"""

import asyncio
import shutil

import pytest

from lifecycle.task_registry import TaskRegistry
from managers.config_manager import ConfigManager
from models.enums import PlaybackState
from models.events import (
    AnimationScriptRejectedEvent,
    EventType,
    OverlayFrameChangedEvent,
    PlaygroundLoadFailedEvent,
    PlaygroundSelectedEvent,
    PlaygroundsChangedEvent,
)
from services.event_bus import EventBus
from services.playground_catalog import PlaygroundCatalog
import services.playground_service as playground_service_module
from services.playground_service import PlaygroundService

ANIMATION = "sec_1\nTopAnim=top_a.png\nsec_2\nTopAnim=top_b.png\n"


@pytest.fixture
def event_bus(recorder):
    bus = EventBus()
    for event_type in EventType:
        bus.subscribe(event_type, recorder)
    return bus


@pytest.fixture
def service(make_playground, settings_yaml, event_bus, manual_sleep):
    catalog = PlaygroundCatalog(make_playground.root)
    config_manager = ConfigManager(settings_yaml["settings"], settings_yaml["defaults"])
    return PlaygroundService(catalog, config_manager, event_bus, sleep=manual_sleep)


async def _drain():
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_refresh_selects_first_when_saved_is_missing(service, make_playground, recorder):
    make_playground("Cave")
    make_playground("Beach")

    changed = await service.refresh_catalog()

    assert changed is True
    assert service.selected.name == "Beach"
    assert service.config_manager.settings.selected_playground == "Beach"
    changes = recorder.of_type(PlaygroundsChangedEvent)
    assert changes[0].added == ["Beach", "Cave"]
    assert recorder.of_type(PlaygroundSelectedEvent)[0].playground.name == "Beach"

    await service.shutdown()


@pytest.mark.asyncio
async def test_refresh_prefers_saved_selection(service, make_playground):
    make_playground("Beach")
    make_playground("Cave")
    service.config_manager.settings.selected_playground = "Cave"

    await service.refresh_catalog()

    assert service.selected.name == "Cave"
    await service.shutdown()


@pytest.mark.asyncio
async def test_select_unknown_playground(service, recorder):
    service.catalog.refresh()

    assert await service.select("Nowhere") is False
    assert service.selected is None
    assert recorder.items == []


@pytest.mark.asyncio
async def test_select_starts_playback_and_publishes_frames(service, make_playground, recorder, manual_sleep):
    directory = make_playground("Beach", images=["playground.png", "top_a.png", "top_b.png"], animation=ANIMATION)
    service.catalog.refresh()

    assert await service.select("Beach") is True

    selected = recorder.of_type(PlaygroundSelectedEvent)[0]
    assert selected.frame_count == 2
    assert selected.config.background_image_path == directory / "playground.png"
    assert service.playback.state is PlaybackState.RUNNING

    await manual_sleep.wait_pending()
    await manual_sleep.tick()
    await _drain()

    frames = recorder.of_type(OverlayFrameChangedEvent)
    assert [(e.playground, e.index) for e in frames] == [("Beach", 0), ("Beach", 1)]
    assert frames[0].images.top == directory / "top_a.png"
    assert service.current_images.top == directory / "top_b.png"

    await service.shutdown()
    assert service.playback.state is PlaybackState.STOPPED


@pytest.mark.asyncio
async def test_select_without_animation_is_static(service, make_playground, recorder):
    make_playground("Beach")
    service.catalog.refresh()

    assert await service.select("Beach") is True
    await _drain()

    assert service.frames == []
    assert service.playback.state is PlaybackState.IDLE
    assert recorder.of_type(OverlayFrameChangedEvent) == []


@pytest.mark.asyncio
async def test_missing_main_image_stops_previous_playback(service, make_playground, recorder):
    make_playground("Beach", images=["playground.png", "top_a.png"], animation=ANIMATION)
    broken = make_playground("Broken", images=["preview.png"])
    service.catalog.refresh()
    await service.select("Beach")
    old_playback = service.playback

    assert await service.select("Broken") is False

    assert old_playback.state is PlaybackState.STOPPED
    assert service.playback is None
    assert service.config is None
    assert service.frames == []
    failed = recorder.of_type(PlaygroundLoadFailedEvent)[0]
    assert failed.playground.name == "Broken"
    assert failed.missing_path == broken / "playground.png"
    assert "main image" in failed.message

    await old_playback.wait_closed()


@pytest.mark.asyncio
async def test_malformed_animation_is_rejected(service, make_playground, recorder):
    make_playground("Beach", animation="TopAnim=top.png\nsec_1\n")
    service.catalog.refresh()

    assert await service.select("Beach") is True

    rejected = recorder.of_type(AnimationScriptRejectedEvent)[0]
    assert rejected.line_number == 1
    assert service.frames == []
    assert service.playback.state is PlaybackState.IDLE
    assert recorder.of_type(PlaygroundSelectedEvent)[0].frame_count == 0


@pytest.mark.asyncio
async def test_removed_selection_falls_back(service, make_playground, recorder):
    make_playground("Beach", animation=ANIMATION)
    make_playground("Cave")
    await service.refresh_catalog()
    beach_playback = service.playback
    assert service.selected.name == "Beach"

    shutil.rmtree(make_playground.root / "Beach")
    await service.refresh_catalog()

    assert service.selected.name == "Cave"
    assert beach_playback.state is PlaybackState.STOPPED
    assert recorder.of_type(PlaygroundsChangedEvent)[-1].removed == ["Beach"]

    await beach_playback.wait_closed()
    await service.shutdown()


@pytest.mark.asyncio
async def test_shutdown_cancels_watcher(service, make_playground):
    make_playground("Beach", animation=ANIMATION)

    watcher = service.start_watching(interval=0.01)
    assert service.start_watching(interval=0.01) is watcher

    for _ in range(20):
        if service.selected is not None:
            break
        await asyncio.sleep(0.01)
    assert service.selected.name == "Beach"

    await service.shutdown()

    assert watcher.done()
    assert service._watch_task is None
    assert service.playback.state is PlaybackState.STOPPED


@pytest.mark.asyncio
async def test_unreadable_settings_fail_the_selection(service, make_playground, recorder, monkeypatch):
    directory = make_playground("Beach")
    service.catalog.refresh()

    def denied(directory, defaults):
        raise PermissionError(13, "Permission denied", str(directory / "settings.txt"))

    monkeypatch.setattr(service.resolver, "resolve", denied)

    assert await service.select("Beach") is False

    failed = recorder.of_type(PlaygroundLoadFailedEvent)[0]
    assert failed.missing_path == directory / "settings.txt"
    assert "unreadable" in failed.message
    assert service.playback is None
    assert service.config is None


@pytest.mark.asyncio
async def test_unreadable_animation_plays_nothing(service, make_playground, recorder, monkeypatch):
    make_playground("Beach", animation=ANIMATION)
    service.catalog.refresh()

    def denied(directory):
        raise PermissionError(13, "Permission denied", str(directory / "animation.txt"))

    monkeypatch.setattr(playground_service_module, "parse_animation", denied)

    assert await service.select("Beach") is True

    rejected = recorder.of_type(AnimationScriptRejectedEvent)[0]
    assert rejected.line_number == 0
    assert service.frames == []
    assert service.playback.state is PlaybackState.IDLE


@pytest.mark.asyncio
async def test_watcher_survives_non_utf8_settings(service, make_playground, recorder):
    directory = make_playground("Beach")
    (directory / "settings.txt").write_bytes(b"PlaygroundPath=caf\xe9.png\nWindowWidth=300\n")
    service.config_manager.settings.selected_playground = "Beach"

    watcher = service.start_watching(interval=0.01)
    await asyncio.sleep(0.1)

    assert not watcher.done()
    failed = recorder.of_type(PlaygroundLoadFailedEvent)
    assert failed and failed[0].missing_path == directory / "caf\ufffd.png"

    await service.shutdown()


@pytest.mark.asyncio
async def test_watcher_survives_failed_refresh(service, make_playground, monkeypatch):
    make_playground("Beach")
    original_refresh = service.catalog.refresh
    calls = []

    def flaky_refresh():
        calls.append(1)
        if len(calls) == 1:
            raise OSError("playgrounds folder busy")
        return original_refresh()

    monkeypatch.setattr(service.catalog, "refresh", flaky_refresh)

    watcher = service.start_watching(interval=0.01)
    for _ in range(50):
        if service.selected is not None:
            break
        await asyncio.sleep(0.01)

    assert len(calls) >= 2
    assert not watcher.done()
    assert service.selected.name == "Beach"

    await service.shutdown()


@pytest.mark.asyncio
async def test_long_playback_keeps_task_registry_bounded(service, make_playground, manual_sleep, monkeypatch):
    registry = TaskRegistry(history_limit=20)
    monkeypatch.setattr(TaskRegistry, "_instance", registry)
    make_playground("Beach", images=["playground.png", "top_a.png", "top_b.png"], animation=ANIMATION)
    service.catalog.refresh()
    await service.select("Beach")

    await manual_sleep.wait_pending()
    for _ in range(300):
        await manual_sleep.tick()
    await _drain()

    assert len(registry.list_all()) <= 25
    assert registry._next_id - 1 >= 300

    await service.shutdown()
