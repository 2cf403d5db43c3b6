"""Tests for the scene lifecycle event bus."""

from parallaxanimator.scene.events import SceneEvent, SceneEventEmitter, SceneEventType


class TestSceneEventEmitter:
    """Subscribe/emit/unsubscribe behavior."""

    def test_emit_reaches_subscriber(self):
        emitter = SceneEventEmitter()
        received = []
        emitter.subscribe(SceneEventType.SCENE_SETUP, received.append)

        emitter.emit(SceneEvent(SceneEventType.SCENE_SETUP, data={"note": "x"}))

        assert len(received) == 1
        assert received[0].data == {"note": "x"}
        assert received[0].timestamp is not None

    def test_only_matching_type(self):
        emitter = SceneEventEmitter()
        received = []
        emitter.subscribe(SceneEventType.SCENE_UPDATE, received.append)
        emitter.emit(SceneEvent(SceneEventType.INITIAL_DRAW))
        assert received == []

    def test_duplicate_subscribe_ignored(self):
        emitter = SceneEventEmitter()
        calls = []

        def callback(evt):
            calls.append(evt)

        emitter.subscribe(SceneEventType.SCENE_UPDATE, callback)
        emitter.subscribe(SceneEventType.SCENE_UPDATE, callback)
        emitter.emit(SceneEvent(SceneEventType.SCENE_UPDATE))

        assert len(calls) == 1
        assert emitter.subscriber_count(SceneEventType.SCENE_UPDATE) == 1

    def test_unsubscribe(self):
        emitter = SceneEventEmitter()
        calls = []
        emitter.subscribe(SceneEventType.SCENE_UNLOAD, calls.append)
        emitter.unsubscribe(SceneEventType.SCENE_UNLOAD, calls.append)
        emitter.emit(SceneEvent(SceneEventType.SCENE_UNLOAD))
        assert calls == []

    def test_failing_callback_does_not_block_others(self, caplog):
        emitter = SceneEventEmitter()
        calls = []

        def broken(evt):
            raise RuntimeError("boom")

        emitter.subscribe(SceneEventType.SCENE_UPDATE, broken)
        emitter.subscribe(SceneEventType.SCENE_UPDATE, calls.append)
        emitter.emit(SceneEvent(SceneEventType.SCENE_UPDATE))

        assert len(calls) == 1
        assert any("Callback error" in r.getMessage() for r in caplog.records)

    def test_clear_all(self):
        emitter = SceneEventEmitter()
        emitter.subscribe(SceneEventType.SCENE_SETUP, lambda evt: None)
        emitter.clear_all()
        assert emitter.subscriber_count(SceneEventType.SCENE_SETUP) == 0

    def test_str(self):
        assert str(SceneEvent(SceneEventType.SCENE_UNLOAD)) == "SceneEvent(SCENE_UNLOAD)"
        assert "note='a'" in str(SceneEvent(SceneEventType.SCENE_SETUP, data={"note": "a"}))
