"""Tests for the Review aggregate: creation, invariants, status changes, and views."""

from datetime import UTC, datetime

import pytest
from protean.exceptions import ValidationError
from reviews.clock import FixedClock, set_clock
from reviews.review.events import ReviewStatusChanged, ReviewSubmitted
from reviews.review.review import Review, ReviewStatus


def _make_review(**overrides):
    defaults = {
        "site_id": "site-001",
        "author_name": "Maria",
        "author_email": "m@x.com",
        "rating": 4,
        "comment": "Friendly staff and quick service.",
        "status": ReviewStatus.APPROVED.value,
        "ip_address": "192.168.1.10",
        "user_agent": "Mozilla/5.0",
        "country": "Ukraine",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestReviewSubmission:
    def test_submit_creates_review(self):
        review = _make_review()
        assert review.id is not None
        assert str(review.site_id) == "site-001"
        assert review.rating == 4
        assert review.status == ReviewStatus.APPROVED.value

    def test_submit_stamps_times_from_clock(self):
        at = datetime(2024, 5, 1, 8, 0, tzinfo=UTC)
        set_clock(FixedClock(at))
        review = _make_review()
        assert review.created_at == at
        assert review.updated_at == at

    def test_submit_raises_event(self):
        review = _make_review(status=ReviewStatus.PENDING.value)
        assert len(review._events) == 1
        event = review._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert event.review_id == str(review.id)
        assert event.status == "PENDING"
        assert event.country == "Ukraine"

    def test_event_version(self):
        assert ReviewSubmitted.__version__ == "v1"
        assert ReviewStatusChanged.__version__ == "v1"


class TestReviewInvariants:
    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            _make_review(rating=rating)

    def test_rating_bounds_accepted(self):
        assert _make_review(rating=1).rating == 1
        assert _make_review(rating=5).rating == 5

    def test_short_author_name(self):
        with pytest.raises(ValidationError) as exc:
            _make_review(author_name="M")
        assert "author_name" in exc.value.messages

    def test_short_comment(self):
        with pytest.raises(ValidationError) as exc:
            _make_review(comment="Too short")
        assert "comment" in exc.value.messages

    def test_comment_of_ten_characters_accepted(self):
        assert _make_review(comment="Ten chars!").comment == "Ten chars!"

    def test_long_comment(self):
        with pytest.raises(ValidationError):
            _make_review(comment="x" * 1001)


class TestStatusChange:
    def test_change_status(self):
        review = _make_review(status=ReviewStatus.PENDING.value)
        review._events.clear()

        review.change_status("APPROVED", changed_by="owner-1")

        assert review.status == ReviewStatus.APPROVED.value
        event = review._events[0]
        assert isinstance(event, ReviewStatusChanged)
        assert event.previous_status == "PENDING"
        assert event.status == "APPROVED"
        assert event.changed_by == "owner-1"

    def test_any_status_can_follow_any_other(self):
        review = _make_review(status=ReviewStatus.DELETED.value)
        review.change_status("PENDING", changed_by="owner-1")
        assert review.status == ReviewStatus.PENDING.value

    def test_same_status_is_noop(self):
        review = _make_review(status=ReviewStatus.HIDDEN.value)
        review._events.clear()
        updated_at = review.updated_at

        review.change_status("HIDDEN", changed_by="owner-1")

        assert review._events == []
        assert review.updated_at == updated_at

    def test_unknown_status_rejected(self):
        review = _make_review()
        with pytest.raises(ValueError):
            review.change_status("ARCHIVED", changed_by="owner-1")


class TestReviewViews:
    def test_receipt_excludes_submitter_details(self):
        receipt = _make_review().receipt()
        assert set(receipt) == {"id", "author_name", "rating", "comment", "status", "created_at"}

    def test_public_view_excludes_status_and_submitter_details(self):
        view = _make_review().public_view()
        assert set(view) == {"id", "author_name", "rating", "comment", "created_at"}
