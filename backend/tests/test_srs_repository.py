"""Tests for the SRS state repository (Cosmos container mocked)."""

from unittest.mock import MagicMock

import pytest
from azure.core import MatchConditions
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosResourceNotFoundError,
)

from phrasebook.repositories.srs_repository import (
    MAX_UPDATE_ATTEMPTS,
    ConcurrentUpdateError,
    MissingStateError,
    SrsRepository,
    state_from_document,
    state_to_document,
)
from phrasebook.srs.scheduler import InvalidRatingError, SchedulingState

NOW = 1_750_000_000
DAY = 86400


def stored(phrase_id="p1", ease=250, interval=0, reps=0, next_review=NOW, last_review=None, etag='"1"'):
    return {
        "id": phrase_id,
        "phraseId": phrase_id,
        "easeFactor": ease,
        "interval": interval,
        "repetitions": reps,
        "nextReviewDate": next_review,
        "lastReviewDate": last_review,
        "updatedAt": NOW,
        "_etag": etag,
    }


@pytest.fixture
def container():
    return MagicMock()


@pytest.fixture
def repo(container):
    return SrsRepository(container=container)


class TestDocumentMapping:
    def test_ease_factor_scaled_by_100(self):
        doc = state_to_document("p1", SchedulingState(2.35, 3, 2, NOW, NOW - DAY))
        assert doc["easeFactor"] == 235
        assert doc["id"] == doc["phraseId"] == "p1"
        assert doc["interval"] == 3
        assert doc["nextReviewDate"] == NOW
        assert doc["lastReviewDate"] == NOW - DAY

    def test_reading_divides_by_100(self):
        state = state_from_document(stored(ease=130, interval=4, reps=1))
        assert state.ease_factor == pytest.approx(1.3)
        assert state.interval_days == 4
        assert state.repetitions == 1
        assert state.last_review_at is None


class TestCreateAndGet:
    def test_create_default(self, repo, container):
        state = repo.create_default("p1", next_review_at=NOW)
        assert state.ease_factor == 2.5
        body = container.create_item.call_args.kwargs["body"]
        assert body["easeFactor"] == 250
        assert body["interval"] == 0
        assert body["repetitions"] == 0
        assert body["nextReviewDate"] == NOW
        assert body["lastReviewDate"] is None

    def test_get_missing_raises(self, repo, container):
        container.read_item.side_effect = CosmosResourceNotFoundError(message="missing")
        with pytest.raises(MissingStateError):
            repo.get("nope")

    def test_find_missing_returns_none(self, repo, container):
        container.read_item.side_effect = CosmosResourceNotFoundError(message="missing")
        assert repo.find("nope") is None


class TestApplyRating:
    def test_writes_new_state_conditioned_on_etag(self, repo, container):
        container.read_item.return_value = stored(etag='"abc"')

        state = repo.apply_rating("p1", "good", NOW)

        assert state.interval_days == 1
        assert state.repetitions == 1
        kwargs = container.replace_item.call_args.kwargs
        assert kwargs["item"] == "p1"
        assert kwargs["etag"] == '"abc"'
        assert kwargs["match_condition"] == MatchConditions.IfNotModified
        body = kwargs["body"]
        assert body["easeFactor"] == 250
        assert body["nextReviewDate"] == NOW + DAY
        assert body["lastReviewDate"] == NOW

    def test_stored_ease_rounded_on_write(self, repo, container):
        container.read_item.return_value = stored(ease=250, interval=6, reps=2)
        repo.apply_rating("p1", "easy", NOW)
        body = container.replace_item.call_args.kwargs["body"]
        assert body["easeFactor"] == 260
        assert body["interval"] == 20

    def test_retries_after_conflict_with_fresh_state(self, repo, container):
        container.read_item.side_effect = [
            stored(reps=0, etag='"1"'),
            stored(reps=1, interval=1, etag='"2"'),
        ]
        container.replace_item.side_effect = [
            CosmosAccessConditionFailedError(message="precondition failed"),
            {},
        ]

        state = repo.apply_rating("p1", "good", NOW)

        # Second attempt built on the re-read state (1 -> 2 repetitions)
        assert state.repetitions == 2
        assert state.interval_days == 6
        assert container.replace_item.call_count == 2
        assert container.replace_item.call_args.kwargs["etag"] == '"2"'

    def test_gives_up_after_max_attempts(self, repo, container):
        container.read_item.return_value = stored()
        container.replace_item.side_effect = CosmosAccessConditionFailedError(message="conflict")

        with pytest.raises(ConcurrentUpdateError):
            repo.apply_rating("p1", "good", NOW)
        assert container.replace_item.call_count == MAX_UPDATE_ATTEMPTS

    def test_invalid_rating_rejected_before_any_io(self, repo, container):
        with pytest.raises(InvalidRatingError):
            repo.apply_rating("p1", "meh", NOW)
        container.read_item.assert_not_called()
        container.replace_item.assert_not_called()

    def test_missing_state_is_not_synthesized(self, repo, container):
        container.read_item.side_effect = CosmosResourceNotFoundError(message="missing")
        with pytest.raises(MissingStateError):
            repo.apply_rating("p1", "good", NOW)
        container.replace_item.assert_not_called()
        container.create_item.assert_not_called()


class TestQueries:
    def test_list_due_uses_inclusive_comparison(self, repo, container):
        container.query_items.return_value = iter(["p2", "p1"])
        assert repo.list_due(NOW) == ["p2", "p1"]
        kwargs = container.query_items.call_args.kwargs
        assert "c.nextReviewDate <= @now" in kwargs["query"]
        assert "ORDER BY c.nextReviewDate ASC" in kwargs["query"]
        assert kwargs["parameters"] == [{"name": "@now", "value": NOW}]
        assert kwargs["enable_cross_partition_query"] is True

    def test_count_due(self, repo, container):
        container.query_items.return_value = iter([4])
        assert repo.count_due(NOW) == 4

    def test_list_last_review_dates(self, repo, container):
        container.query_items.return_value = iter([NOW, NOW - DAY])
        assert repo.list_last_review_dates() == [NOW, NOW - DAY]

    def test_latest_review_date_none_when_never_reviewed(self, repo, container):
        container.query_items.return_value = iter([])
        assert repo.latest_review_date() is None


class TestDelete:
    def test_delete(self, repo, container):
        repo.delete("p1")
        container.delete_item.assert_called_once_with(item="p1", partition_key="p1")

    def test_delete_missing_is_ignored(self, repo, container):
        container.delete_item.side_effect = CosmosResourceNotFoundError(message="missing")
        repo.delete("p1")
