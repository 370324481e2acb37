"""Unit tests for engagement counters, comments and event ordering"""
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from broadcast.events import EngagementUpdated
from core.errors import DomainValidationError, NotFoundError
from engagement.store import EngagementStore


@pytest.fixture
def video_id(engagement):
    engagement.initialize("v1")
    return "v1"


class TestViews:
    """Test view counting"""

    def test_each_call_adds_one(self, engagement, video_id):
        """Test every view call increments by exactly one"""
        results = [engagement.record_view(video_id) for _ in range(5)]

        assert results == [1, 2, 3, 4, 5]
        assert engagement.snapshot(video_id).view_count == 5

    def test_concurrent_views_are_not_lost(self, engagement, video_id):
        """Test concurrent views from many threads all count"""
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: engagement.record_view(video_id), range(400)))

        assert engagement.snapshot(video_id).view_count == 400

    def test_unknown_video_raises_not_found(self, engagement):
        """Test views on an unknown id raise NotFoundError"""
        with pytest.raises(NotFoundError):
            engagement.record_view("missing")


class TestLikes:
    """Test aggregate like counter and clamping"""

    @pytest.mark.parametrize("sequence, expected", [
        ([True, True, False], 1),
        ([False], 0),
        ([False, False, True], 1),
        ([True, False, False, True, True], 2),
    ])
    def test_like_sequences_clamp_at_zero(self, engagement, video_id, sequence, expected):
        """Test like/unlike sequences follow a running sum clamped at zero"""
        running = 0
        for liked in sequence:
            running = max(0, running + (1 if liked else -1))
            assert engagement.set_like(video_id, liked) == running

        assert engagement.snapshot(video_id).like_count == expected

    def test_repeated_likes_accumulate(self, engagement, video_id):
        """Test likes are aggregate, not deduplicated per user"""
        engagement.set_like(video_id, True)
        engagement.set_like(video_id, True)

        assert engagement.snapshot(video_id).like_count == 2

    def test_concurrent_like_toggles(self, engagement, video_id):
        """Test concurrent likes are not lost"""
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: engagement.set_like(video_id, True), range(200)))

        assert engagement.snapshot(video_id).like_count == 200

    def test_unknown_video_raises_not_found(self, engagement):
        """Test likes on an unknown id raise NotFoundError"""
        with pytest.raises(NotFoundError):
            engagement.set_like("missing", True)


class TestComments:
    """Test comment validation and ordering"""

    def test_empty_text_rejected(self, engagement, video_id):
        """Test blank comment text fails validation and stores nothing"""
        with pytest.raises(DomainValidationError):
            engagement.add_comment(video_id, "", "Al")
        with pytest.raises(DomainValidationError):
            engagement.add_comment(video_id, "   ", "Al")

        assert engagement.snapshot(video_id).comments == []

    def test_text_is_trimmed(self, engagement, video_id):
        """Test comment text is stored trimmed"""
        comment = engagement.add_comment(video_id, "  hi  ", "Al")

        assert comment.text == "hi"
        assert engagement.snapshot(video_id).comments[0].text == "hi"

    def test_author_defaults_to_anonymous(self, engagement, video_id):
        """Test missing or blank authors become the anonymous placeholder"""
        assert engagement.add_comment(video_id, "hi", None).author == "Anonymous"
        assert engagement.add_comment(video_id, "hi", "  ").author == "Anonymous"

    def test_custom_anonymous_author(self, hub):
        """Test the anonymous placeholder is configurable"""
        store = EngagementStore(hub, anonymous_author="Guest")
        store.initialize("v1")

        assert store.add_comment("v1", "hi").author == "Guest"

    def test_newest_first_even_with_identical_timestamps(self, hub):
        """Test insertion order wins over equal timestamps"""
        stamp = datetime(2025, 1, 1, tzinfo=timezone.utc)
        store = EngagementStore(hub, clock=lambda: stamp)
        store.initialize("v1")

        store.add_comment("v1", "a", "Al")
        store.add_comment("v1", "b", "Al")

        assert [c.text for c in store.snapshot("v1").comments] == ["b", "a"]

    def test_comment_ids_are_unique(self, engagement, video_id):
        """Test each comment gets its own id"""
        first = engagement.add_comment(video_id, "a", "Al")
        second = engagement.add_comment(video_id, "b", "Al")

        assert first.id != second.id

    def test_unknown_video_raises_not_found(self, engagement):
        """Test comments on an unknown id raise NotFoundError"""
        with pytest.raises(NotFoundError):
            engagement.add_comment("missing", "hi", "Al")

    def test_comments_are_not_broadcast(self, engagement, video_id, events):
        """Test posting a comment publishes no event"""
        engagement.add_comment(video_id, "hi", "Al")

        assert events == []


class TestSnapshot:
    """Test snapshot isolation and initialization"""

    def test_new_video_starts_at_zero(self, engagement, video_id):
        """Test fresh state has zero counters and no comments"""
        snapshot = engagement.snapshot(video_id)

        assert snapshot.view_count == 0
        assert snapshot.like_count == 0
        assert snapshot.comments == []

    def test_snapshot_is_a_copy(self, engagement, video_id):
        """Test mutating a snapshot does not touch the store"""
        engagement.add_comment(video_id, "a", "Al")
        snapshot = engagement.snapshot(video_id)
        snapshot.comments.clear()

        assert len(engagement.snapshot(video_id).comments) == 1

    def test_initialize_twice_rejected(self, engagement, video_id):
        """Test an id cannot be initialized twice"""
        with pytest.raises(DomainValidationError):
            engagement.initialize(video_id)

    def test_initialize_runs_on_ready_hook(self, engagement):
        """Test the ready hook runs once the state exists"""
        seen = []

        engagement.initialize("v2", on_ready=lambda: seen.append("v2" in engagement))

        assert seen == [True]

    def test_failing_on_ready_hook_removes_state(self, engagement):
        """Test a failing ready hook leaves no state for the id"""
        def boom():
            raise RuntimeError("registration failed")

        with pytest.raises(RuntimeError):
            engagement.initialize("v2", on_ready=boom)

        assert "v2" not in engagement
        with pytest.raises(NotFoundError):
            engagement.record_view("v2")

    def test_counters(self, engagement, video_id):
        """Test counters returns (views, likes)"""
        engagement.record_view(video_id)
        engagement.set_like(video_id, True)

        assert engagement.counters(video_id) == (1, 1)


class TestEngagementEvents:
    """Test update events published on mutation"""

    def test_view_event_omits_likes(self, engagement, video_id, events):
        """Test a view event carries only the view count"""
        engagement.record_view(video_id)

        assert events == [EngagementUpdated(video_id=video_id, view_count=1)]
        assert events[0].to_wire() == {
            "type": "engagement_updated",
            "video_id": video_id,
            "view_count": 1,
        }

    def test_like_event_omits_views(self, engagement, video_id, events):
        """Test a like event carries only the like count"""
        engagement.set_like(video_id, True)

        assert events[0].to_wire() == {
            "type": "engagement_updated",
            "video_id": video_id,
            "like_count": 1,
        }

    def test_events_follow_mutation_order(self, engagement, video_id, events):
        """Test concurrent views publish counts in increasing order"""
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: engagement.record_view(video_id), range(100)))

        assert [e.view_count for e in events] == list(range(1, 101))

    def test_store_without_publisher(self):
        """Test the store works with no publisher attached"""
        store = EngagementStore()
        store.initialize("v1")

        assert store.record_view("v1") == 1
