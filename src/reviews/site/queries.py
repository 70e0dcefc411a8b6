"""Read-side helpers for an owner's sites."""

from protean.utils.globals import current_domain

from reviews.review.review import Review
from reviews.site.ownership import owned_site
from reviews.site.site import Site


def site_summary(site: Site) -> dict:
    return {
        "id": str(site.id),
        "name": site.name,
        "domain": site.domain,
        "tier": site.tier,
        "is_active": site.is_active,
        "settings": site.widget_settings,
        "review_count": current_domain.repository_for(Review).count_where(site_id=str(site.id)),
        "created_at": site.created_at,
        "updated_at": site.updated_at,
    }


def sites_for_owner(owner_id) -> list[dict]:
    """All of the owner's sites, newest first, with their review counts."""
    sites = current_domain.repository_for(Site).find_for_owner(owner_id)
    return [site_summary(site) for site in sites]


def site_for_owner(site_id, owner_id) -> dict:
    return site_summary(owned_site(site_id, owner_id))
