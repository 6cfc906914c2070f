import asyncio

from mouthtrap.core.events import Event, EventBus, EventType, activate_event, resize_event
from mouthtrap.core.state import State, StateMachine


class TestStateMachine:
    def test_starts_idle(self):
        assert StateMachine().state is State.IDLE

    def test_valid_cycle(self):
        sm = StateMachine()
        assert sm.transition(State.RUNNING)
        assert sm.transition(State.GAME_OVER)
        assert sm.transition(State.RUNNING)
        assert sm.state is State.RUNNING

    def test_invalid_transitions_are_refused(self):
        sm = StateMachine()
        assert not sm.can_transition(State.GAME_OVER)
        assert not sm.transition(State.GAME_OVER)
        assert sm.state is State.IDLE

        sm.transition(State.RUNNING)
        assert not sm.transition(State.IDLE)
        assert not sm.transition(State.RUNNING)
        assert sm.state is State.RUNNING

    def test_listeners(self):
        sm = StateMachine()
        seen = []

        def listener(old, new):
            seen.append((old, new))

        sm.add_listener(listener)
        sm.transition(State.RUNNING)
        sm.transition(State.RUNNING)  # refused, not reported
        sm.remove_listener(listener)
        sm.transition(State.GAME_OVER)

        assert seen == [(State.IDLE, State.RUNNING)]

    def test_listener_error_does_not_block_transition(self):
        sm = StateMachine()

        def broken(old, new):
            raise RuntimeError("boom")

        sm.add_listener(broken)
        assert sm.transition(State.RUNNING)
        assert sm.state is State.RUNNING


class TestEventBus:
    def test_subscribe_and_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(EventType.ACTIVATE, received.append)

        bus.emit(activate_event("pointer"))
        bus.emit(resize_event(480, 720))
        unsubscribe()
        bus.emit(activate_event())

        assert [e.source for e in received] == ["pointer"]

    def test_handler_error_does_not_stop_others(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(EventType.SCORE_CHANGED, broken)
        bus.subscribe(EventType.SCORE_CHANGED, received.append)

        bus.emit(Event(EventType.SCORE_CHANGED, data={"score": 1}))

        assert len(received) == 1

    def test_history(self):
        bus = EventBus()
        for score in range(1, 16):
            bus.emit(Event(EventType.SCORE_CHANGED, data={"score": score}))
        bus.emit(Event(EventType.GAME_OVER))

        recent = bus.get_history(EventType.SCORE_CHANGED)
        assert [e.data["score"] for e in recent] == list(range(6, 16))
        assert bus.get_history(limit=1)[0].type is EventType.GAME_OVER

    def test_queued_events_wait_for_the_next_frame(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.RESIZE, received.append)

        bus.queue_event(resize_event(600, 900))
        bus.queue_event(resize_event(320, 480))
        assert received == []
        assert bus.get_history(EventType.RESIZE) == []

        asyncio.run(bus.process_queue())

        assert [e.data["width"] for e in received] == [600, 320]
        assert bus.get_history(EventType.RESIZE)[0].data["height"] == 900

        asyncio.run(bus.process_queue())
        assert len(received) == 2
