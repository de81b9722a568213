"""Tests for Tracker."""

from datetime import datetime, timedelta, timezone

import pytest


class TestTrackerTrack:
    """Tests for Tracker.track() method."""

    @pytest.mark.asyncio
    async def test_track_creates_event(self, tracker):
        """Test that track() creates a TraceEvent."""
        await tracker.track(
            event_type="test_event",
            actor="test_actor",
            data={"key": "value"},
        )

        events = tracker.get_events()
        assert len(events) == 1
        assert events[0].event_type == "test_event"
        assert events[0].actor == "test_actor"
        assert events[0].data == {"key": "value"}

    @pytest.mark.asyncio
    async def test_track_generates_id_and_timestamp(self, tracker):
        await tracker.track(event_type="test_event", actor="test_actor", data={})

        event = tracker.get_events()[0]
        assert event.id
        assert event.timestamp.tzinfo is not None

    @pytest.mark.asyncio
    async def test_keeps_most_recent_events(self):
        from diagnostic.tracker import Tracker

        tracker = Tracker(max_events=2)
        for i in range(3):
            await tracker.track("e", "a", {"i": i})

        assert [e.data["i"] for e in tracker.get_events()] == [1, 2]


class TestTrackerGetEvents:
    """Tests for Tracker.get_events() filters."""

    @pytest.mark.asyncio
    async def test_filter_by_type_and_actor(self, tracker):
        await tracker.track("message_received", "conversation_session", {})
        await tracker.track("session_started", "application", {})

        assert len(tracker.get_events(event_types=["session_started"])) == 1
        assert len(tracker.get_events(actor="conversation_session")) == 1

    @pytest.mark.asyncio
    async def test_filter_after_and_limit(self, tracker):
        for _ in range(5):
            await tracker.track("e", "a", {})

        future = datetime.now(timezone.utc) + timedelta(minutes=1)
        assert tracker.get_events(after=future) == []
