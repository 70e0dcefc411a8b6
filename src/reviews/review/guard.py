"""Ownership guard for review mutations."""

from protean.utils.globals import current_domain

from reviews.errors import AccessDenied, ReviewNotFound
from reviews.review.review import Review
from reviews.site.site import Site


def owned_review(review_id, acting_user_id) -> tuple[Review, Site]:
    """Load a review and its site, insisting the acting user owns the site.

    Raises ``ReviewNotFound`` for unknown reviews and ``AccessDenied``
    otherwise, so a non-owner can still tell that the review exists.
    """
    review = current_domain.repository_for(Review).find_by_id(review_id)
    if review is None:
        raise ReviewNotFound({"review": ["Review not found"]})

    site = current_domain.repository_for(Site).get_by_id(review.site_id)
    if site is None or not site.is_owned_by(acting_user_id):
        raise AccessDenied({"review": ["You do not have access to this review"]})

    return review, site
