"""Owner dashboards over reviews: the paginated inbox and per-site statistics."""

import math

from protean.utils.globals import current_domain

from reviews.errors import AccessDenied
from reviews.review.review import Review, ReviewStatus
from reviews.site.ownership import owned_site
from reviews.site.site import Site

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _owner_row(review: Review, site: Site) -> dict:
    return {
        "id": str(review.id),
        "site": {"id": str(site.id), "name": site.name, "domain": site.domain},
        "author_name": review.author_name,
        "author_email": review.author_email,
        "rating": review.rating,
        "comment": review.comment,
        "status": review.status,
        "ip_address": review.ip_address,
        "user_agent": review.user_agent,
        "country": review.country,
        "created_at": review.created_at,
    }


def reviews_for_owner(owner_id, site_id=None, status=None, page=1, limit=DEFAULT_PAGE_SIZE) -> dict:
    """Reviews across the owner's sites, newest first, optionally narrowed to one site or status."""
    page = max(page or 1, 1)
    limit = min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)

    sites = current_domain.repository_for(Site).find_for_owner(owner_id)
    sites_by_id = {str(site.id): site for site in sites}
    site_choices = [{"id": str(site.id), "name": site.name} for site in sites]

    if site_id and str(site_id) not in sites_by_id:
        raise AccessDenied({"site": ["Access denied to this site"]})

    if not sites:
        return {"reviews": [], "total": 0, "page": page, "limit": limit, "total_pages": 0, "sites": []}

    filters = {"site_id": str(site_id)} if site_id else {"site_id__in": list(sites_by_id)}
    if status:
        filters["status"] = ReviewStatus(status).value

    repo = current_domain.repository_for(Review)
    total = repo.count_where(**filters)
    rows = repo.find_many_where(filters, order_by="-created_at", limit=limit, offset=(page - 1) * limit)

    return {
        "reviews": [_owner_row(review, sites_by_id[str(review.site_id)]) for review in rows],
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit),
        "sites": site_choices,
    }


def rating_distribution(site_id) -> dict[int, int]:
    """Approved reviews per star rating, with every rating 1..5 present."""
    repo = current_domain.repository_for(Review)
    return {
        rating: repo.count_where(site_id=str(site_id), status=ReviewStatus.APPROVED.value, rating=rating)
        for rating in range(1, 6)
    }


def average_rating(site_id, **filters) -> float:
    """Mean rating of approved reviews, rounded to one decimal; 0 when there are none."""
    approved = current_domain.repository_for(Review).find_all_where(
        site_id=str(site_id), status=ReviewStatus.APPROVED.value, **filters
    )
    if not approved:
        return 0
    return round(sum(review.rating for review in approved) / len(approved), 1)


def site_review_stats(site_id, owner_id) -> dict:
    site = owned_site(site_id, owner_id)
    repo = current_domain.repository_for(Review)
    site_key = str(site.id)

    return {
        "site": {"id": site_key, "name": site.name, "domain": site.domain},
        "stats": {
            "total": repo.count_where(site_id=site_key),
            "approved": repo.count_where(site_id=site_key, status=ReviewStatus.APPROVED.value),
            "pending": repo.count_where(site_id=site_key, status=ReviewStatus.PENDING.value),
            "hidden": repo.count_where(site_id=site_key, status=ReviewStatus.HIDDEN.value),
            "average_rating": average_rating(site_key),
            "rating_distribution": rating_distribution(site_key),
        },
    }
