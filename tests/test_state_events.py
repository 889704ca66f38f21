"""Tests for the state machine and the event bus."""

from santa_rush.core.events import Event, EventBus, EventType, tick_event
from santa_rush.core.state import State, StateMachine


class TestStateMachine:

    def test_starts_in_menu(self):
        assert StateMachine().state is State.MENU

    def test_valid_cycle(self):
        machine = StateMachine()
        assert machine.transition(State.PLAYING)
        assert machine.transition(State.GAME_OVER, last_score=12, rounds_played=1)
        assert machine.context.last_score == 12
        assert machine.transition(State.PLAYING)
        assert machine.state is State.PLAYING

    def test_invalid_transition_is_refused(self):
        machine = StateMachine()
        assert not machine.transition(State.GAME_OVER)
        assert machine.state is State.MENU

    def test_unknown_context_fields_are_ignored(self):
        machine = StateMachine()
        machine.transition(State.PLAYING, nonsense=1)
        assert not hasattr(machine.context, "nonsense")

    def test_listeners(self):
        machine = StateMachine()
        seen = []

        def listener(old, new, context):
            seen.append((old, new))

        machine.add_listener(listener)
        machine.transition(State.PLAYING)
        machine.remove_listener(listener)
        machine.transition(State.GAME_OVER)

        assert seen == [(State.MENU, State.PLAYING)]

    def test_failing_listener_does_not_block(self):
        machine = StateMachine()

        def broken(old, new, context):
            raise RuntimeError("boom")

        machine.add_listener(broken)
        assert machine.transition(State.PLAYING)
        assert machine.state is State.PLAYING


class TestEventBus:

    def test_subscribe_and_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(EventType.GIFT_COLLECTED, received.append)

        bus.emit(Event(EventType.GIFT_COLLECTED, data={"bonus": 5}))
        unsubscribe()
        bus.emit(Event(EventType.GIFT_COLLECTED))

        assert len(received) == 1
        assert received[0].data["bonus"] == 5

    def test_global_handler(self):
        bus = EventBus()
        received = []
        bus.subscribe_all(received.append)

        bus.emit(tick_event(1))
        bus.emit(Event(EventType.SHUTDOWN))

        assert [e.type for e in received] == [EventType.TICK, EventType.SHUTDOWN]

    def test_failing_handler_does_not_stop_others(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise ValueError("nope")

        bus.subscribe(EventType.TICK, broken)
        bus.subscribe(EventType.TICK, received.append)
        bus.emit(tick_event(3))

        assert len(received) == 1

    def test_history_filter_and_limit(self):
        bus = EventBus()
        for frame in range(5):
            bus.emit(tick_event(frame))
        bus.emit(Event(EventType.PLAYER_DIED))

        ticks = bus.get_history(EventType.TICK, limit=2)
        assert [e.data["frame"] for e in ticks] == [3, 4]
        assert bus.get_history(limit=1)[0].type is EventType.PLAYER_DIED

        bus.clear_history()
        assert bus.get_history() == []

    def test_history_is_bounded(self):
        bus = EventBus()
        for frame in range(150):
            bus.emit(tick_event(frame))
        assert len(bus.get_history(limit=1000)) == 100

    async def test_emit_async_awaits_coroutines(self):
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event.type)

        bus.subscribe(EventType.ROUND_ENDED, handler)
        bus.emit(Event(EventType.ROUND_ENDED))
        assert received == []

        await bus.emit_async(Event(EventType.ROUND_ENDED))
        assert received == [EventType.ROUND_ENDED]

    async def test_queued_events(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.FOLLOWER_ADDED, received.append)

        bus.queue_event(Event(EventType.FOLLOWER_ADDED, data={"followers": 1}))
        assert received == []

        await bus.process_queue()
        assert len(received) == 1
        assert bus.get_history(EventType.FOLLOWER_ADDED)
