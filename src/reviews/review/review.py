"""Review aggregate: one visitor's rating and comment for a site.

Status is a flat tag rather than a state machine: the site owner may move a
review between any of the four statuses. Whether a fresh review starts as
PENDING or APPROVED is decided by the site's plan at submission time.
"""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from reviews.clock import get_clock
from reviews.domain import reviews
from reviews.review.events import ReviewStatusChanged, ReviewSubmitted


class ReviewStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    HIDDEN = "HIDDEN"
    DELETED = "DELETED"


@reviews.aggregate
class Review:
    site_id = Identifier(required=True)

    # Author
    author_name = String(required=True, max_length=50, sanitize=False)
    author_email = String(max_length=254, sanitize=False)

    # Content
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True, sanitize=False)

    status = String(choices=ReviewStatus, default=ReviewStatus.PENDING.value)

    # Submitter fingerprint, never exposed publicly
    ip_address = String(max_length=45, sanitize=False)
    user_agent = Text(sanitize=False)
    country = String(max_length=100)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def author_name_length(self):
        if self.author_name is not None and len(self.author_name.strip()) < 2:
            raise ValidationError({"author_name": ["Author name must be at least 2 characters"]})

    @invariant.post
    def comment_length(self):
        if self.comment is None:
            return
        if len(self.comment.strip()) < 10:
            raise ValidationError({"comment": ["Comment must be at least 10 characters"]})
        if len(self.comment) > 1000:
            raise ValidationError({"comment": ["Comment must not exceed 1000 characters"]})

    @classmethod
    def submit(
        cls,
        site_id,
        author_name,
        rating,
        comment,
        status,
        author_email=None,
        ip_address=None,
        user_agent=None,
        country=None,
    ):
        """Create a review with the status the submission policy decided on."""
        now = get_clock().now()

        review = cls(
            site_id=site_id,
            author_name=author_name,
            author_email=author_email,
            rating=rating,
            comment=comment,
            status=status,
            ip_address=ip_address,
            user_agent=user_agent,
            country=country,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                site_id=str(site_id),
                author_name=author_name,
                rating=rating,
                status=status,
                country=country,
                submitted_at=now,
            )
        )

        return review

    def change_status(self, status: str, changed_by):
        """Move the review to ``status``. Setting the current status again is a no-op."""
        target = ReviewStatus(status)
        previous = self.status
        if target.value == previous:
            return

        now = get_clock().now()
        self.status = target.value
        self.updated_at = now

        self.raise_(
            ReviewStatusChanged(
                review_id=str(self.id),
                site_id=str(self.site_id),
                previous_status=previous,
                status=target.value,
                changed_by=str(changed_by),
                changed_at=now,
            )
        )

    def receipt(self) -> dict:
        """What the submitter gets back: no email, IP address, or user agent."""
        return {
            "id": str(self.id),
            "author_name": self.author_name,
            "rating": self.rating,
            "comment": self.comment,
            "status": self.status,
            "created_at": self.created_at,
        }

    def public_view(self) -> dict:
        return {
            "id": str(self.id),
            "author_name": self.author_name,
            "rating": self.rating,
            "comment": self.comment,
            "created_at": self.created_at,
        }
