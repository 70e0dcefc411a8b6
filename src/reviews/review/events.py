"""Domain events for the Review aggregate.

Events carry what downstream consumers need without the submitter's
personal data (email, IP address, user agent).
"""

from protean.fields import DateTime, Identifier, Integer, String

from reviews.domain import reviews


@reviews.event(part_of="Review")
class ReviewSubmitted:
    """A visitor submitted a review for a site."""

    __version__ = "v1"

    review_id = Identifier(required=True)
    site_id = Identifier(required=True)
    author_name = String(required=True, sanitize=False)
    rating = Integer(required=True)
    status = String(required=True)
    country = String()
    submitted_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewStatusChanged:
    """The site owner moved a review to a different status."""

    __version__ = "v1"

    review_id = Identifier(required=True)
    site_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_by = Identifier(required=True)
    changed_at = DateTime(required=True)
