"""Public read of a site's reviews, used by the widget and the public API."""

from protean.utils.globals import current_domain

from reviews.errors import SiteNotFound
from reviews.review.review import Review, ReviewStatus
from reviews.site.site import Site

PUBLIC_REVIEW_LIMIT = 50


def public_reviews_for(site_id) -> dict:
    """Approved reviews only, newest first, without any submitter details."""
    site = current_domain.repository_for(Site).get_by_id(site_id)
    if site is None:
        raise SiteNotFound({"site": ["Site not found"]})

    approved = current_domain.repository_for(Review).find_many_where(
        {"site_id": str(site.id), "status": ReviewStatus.APPROVED.value},
        order_by="-created_at",
        limit=PUBLIC_REVIEW_LIMIT,
    )

    return {
        "site": {"id": str(site.id), "name": site.name},
        "reviews": [review.public_view() for review in approved],
        "total": len(approved),
    }
