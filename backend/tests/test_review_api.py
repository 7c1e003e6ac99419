"""API tests for /review and /stats endpoints (stubbed repositories)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from phrasebook.main import app
from phrasebook.models import Phrase
from phrasebook.repositories import ConcurrentUpdateError, MissingStateError
from phrasebook.srs.due import oldest_due_first
from phrasebook.srs.scheduler import SchedulingState, apply_rating, default_state

NOW = int(datetime(2025, 6, 18, 15, 0, tzinfo=timezone.utc).timestamp())
DAY = 86400


def make_phrase(phrase_id: str, source: str = "hello") -> Phrase:
    return Phrase(
        id=phrase_id,
        sourcePhrase=source,
        translation="hola",
        sourceLanguage="en",
        targetLanguage="es",
        tags=["en-es"],
        createdAt=NOW - 10 * DAY,
        updatedAt=NOW - 10 * DAY,
    )


@dataclass
class StubPhraseRepo:
    phrases: dict[str, Phrase] = field(default_factory=dict)

    def get_many(self, phrase_ids):
        return [self.phrases[pid] for pid in phrase_ids if pid in self.phrases]

    def count(self):
        return len(self.phrases)


@dataclass
class StubSrsRepo:
    states: dict[str, SchedulingState] = field(default_factory=dict)
    conflict: bool = False

    def apply_rating(self, phrase_id, rating, now):
        if self.conflict:
            raise ConcurrentUpdateError("modified concurrently")
        if phrase_id not in self.states:
            raise MissingStateError(f"No SRS data found for phrase ID {phrase_id}")
        self.states[phrase_id] = apply_rating(self.states[phrase_id], rating, now)
        return self.states[phrase_id]

    def list_due(self, now):
        return oldest_due_first(self.states.items(), now)

    def count_due(self, now):
        return len(self.list_due(now))

    def list_last_review_dates(self):
        return [s.last_review_at for s in self.states.values() if s.last_review_at is not None]

    def count_reviewed_since(self, since):
        return sum(1 for ts in self.list_last_review_dates() if ts >= since)

    def latest_review_date(self):
        return max(self.list_last_review_dates(), default=None)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def repos(monkeypatch):
    from phrasebook.routers import review as review_router
    from phrasebook.routers import stats as stats_router
    from phrasebook.config import AppSettings

    phrase_repo = StubPhraseRepo(
        phrases={pid: make_phrase(pid, source=pid) for pid in ("p1", "p2", "p3")}
    )
    srs_repo = StubSrsRepo(
        states={
            "p1": default_state(NOW - 5 * DAY),
            "p2": default_state(NOW + DAY),
            "p3": default_state(NOW),
        }
    )
    for module in (review_router, stats_router):
        monkeypatch.setattr(module, "get_phrase_repository", lambda: phrase_repo)
        monkeypatch.setattr(module, "get_srs_repository", lambda: srs_repo)
        monkeypatch.setattr(module, "epoch_now", lambda: NOW)
    monkeypatch.setattr(stats_router, "get_app_settings", lambda: AppSettings(review_timezone="UTC"))
    return phrase_repo, srs_repo


class TestDueCards:
    def test_returns_due_phrases_oldest_first(self, client, repos):
        resp = client.get("/review/due-cards")
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 2
        assert [card["id"] for card in data["cards"]] == ["p1", "p3"]
        assert data["cards"][0]["languagePair"] == "en-es"

    def test_rated_card_leaves_due_set(self, client, repos):
        client.post("/review/update-rating", json={"phraseId": "p1", "rating": "good"})
        data = client.get("/review/due-cards").json()
        assert [card["id"] for card in data["cards"]] == ["p3"]


class TestUpdateRating:
    def test_good_on_fresh_card(self, client, repos):
        resp = client.post("/review/update-rating", json={"phraseId": "p1", "rating": "good"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["srs"] == {
            "nextReviewDate": NOW + DAY,
            "lastReviewDate": NOW,
            "interval": 1,
            "easeFactor": 2.5,
            "repetitions": 1,
        }

    def test_invalid_rating_is_400(self, client, repos):
        _, srs_repo = repos
        before = srs_repo.states["p1"]
        resp = client.post("/review/update-rating", json={"phraseId": "p1", "rating": "perfect"})
        assert resp.status_code == 400
        assert srs_repo.states["p1"] == before

    @pytest.mark.parametrize("rating", [5, 0, 2.5, True, None, ""])
    def test_non_string_rating_is_400(self, client, repos, rating):
        _, srs_repo = repos
        before = srs_repo.states["p1"]
        resp = client.post("/review/update-rating", json={"phraseId": "p1", "rating": rating})
        assert resp.status_code == 400
        assert "expected one of" in resp.json()["detail"]
        assert srs_repo.states["p1"] == before

    def test_structured_rating_is_422(self, client, repos):
        resp = client.post("/review/update-rating", json={"phraseId": "p1", "rating": ["good"]})
        assert resp.status_code == 422

    def test_missing_state_is_404(self, client, repos):
        resp = client.post("/review/update-rating", json={"phraseId": "nope", "rating": "good"})
        assert resp.status_code == 404
        assert "nope" in resp.json()["detail"]

    def test_missing_fields_is_422(self, client, repos):
        resp = client.post("/review/update-rating", json={"phraseId": "p1"})
        assert resp.status_code == 422

    def test_conflict_is_409(self, client, repos):
        _, srs_repo = repos
        srs_repo.conflict = True
        resp = client.post("/review/update-rating", json={"phraseId": "p1", "rating": "good"})
        assert resp.status_code == 409


class TestReviewStats:
    def test_no_reviews_yet(self, client, repos):
        resp = client.get("/stats/review")
        assert resp.status_code == 200
        assert resp.json() == {
            "totalCards": 3,
            "cardsDueToday": 2,
            "cardsReviewedToday": 0,
            "streak": 0,
            "lastReviewDate": None,
        }

    def test_after_reviews(self, client, repos):
        _, srs_repo = repos
        srs_repo.states["p2"] = SchedulingState(2.5, 1, 1, NOW + DAY, NOW - DAY)
        client.post("/review/update-rating", json={"phraseId": "p1", "rating": "good"})

        data = client.get("/stats/review").json()
        assert data["cardsReviewedToday"] == 1
        assert data["cardsDueToday"] == 1
        assert data["streak"] == 2
        assert data["lastReviewDate"] == "2025-06-18T15:00:00Z"
