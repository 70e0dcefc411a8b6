"""Application tests for the SetReviewStatus command handler."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from reviews.errors import AccessDenied, ModerationNotAvailable, ReviewNotFound
from reviews.review.moderation import SetReviewStatus
from reviews.review.review import Review, ReviewStatus


def _set_status(review_id, acting_user_id, status):
    return current_domain.process(
        SetReviewStatus(review_id=str(review_id), acting_user_id=acting_user_id, status=status),
        asynchronous=False,
    )


def _stored(review_id):
    return current_domain.repository_for(Review).find_by_id(review_id)


class TestOwnerModeration:
    def test_approve_persists(self, make_site, submit_review):
        site = make_site(tier="PREMIUM")
        review = submit_review(site.id)

        result = _set_status(review.id, "owner-1", "APPROVED")

        assert result.status == ReviewStatus.APPROVED.value
        assert _stored(review.id).status == ReviewStatus.APPROVED.value

    def test_hide_approved_review(self, make_site, submit_review):
        site = make_site(tier="PREMIUM")
        review = submit_review(site.id)
        _set_status(review.id, "owner-1", "APPROVED")

        _set_status(review.id, "owner-1", "HIDDEN")

        assert _stored(review.id).status == ReviewStatus.HIDDEN.value

    def test_setting_same_status_is_idempotent(self, clock, make_site, submit_review):
        site = make_site(tier="PREMIUM")
        review = submit_review(site.id)
        _set_status(review.id, "owner-1", "APPROVED")
        first_update = _stored(review.id).updated_at

        clock.advance(minutes=5)
        _set_status(review.id, "owner-1", "APPROVED")

        stored = _stored(review.id)
        assert stored.status == ReviewStatus.APPROVED.value
        assert stored.updated_at == first_update

    def test_unknown_status_rejected(self, make_site, submit_review):
        site = make_site(tier="PREMIUM")
        review = submit_review(site.id)
        with pytest.raises(ValidationError):
            _set_status(review.id, "owner-1", "ARCHIVED")


class TestModerationGuards:
    def test_non_owner_denied(self, make_site, submit_review):
        site = make_site(owner_id="owner-1", tier="PREMIUM")
        review = submit_review(site.id)

        with pytest.raises(AccessDenied):
            _set_status(review.id, "intruder", "APPROVED")
        assert _stored(review.id).status == ReviewStatus.PENDING.value

    def test_free_plan_has_no_moderation(self, make_site, submit_review):
        site = make_site(tier="FREE")
        review = submit_review(site.id)

        with pytest.raises(ModerationNotAvailable):
            _set_status(review.id, "owner-1", "HIDDEN")
        assert _stored(review.id).status == ReviewStatus.APPROVED.value

    def test_unknown_review(self, make_site):
        make_site(tier="PREMIUM")
        with pytest.raises(ReviewNotFound):
            _set_status("missing-review", "owner-1", "APPROVED")

    def test_ownership_checked_before_plan(self, make_site, submit_review):
        site = make_site(owner_id="owner-1", tier="FREE")
        review = submit_review(site.id)
        with pytest.raises(AccessDenied):
            _set_status(review.id, "intruder", "HIDDEN")
