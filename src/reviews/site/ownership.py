"""Ownership check shared by every owner-facing site operation."""

from protean.utils.globals import current_domain

from reviews.errors import AccessDenied, SiteNotFound
from reviews.site.site import Site


def owned_site(site_id, owner_id) -> Site:
    """Load a site for its owner.

    Raises ``SiteNotFound`` when the site does not exist and ``AccessDenied``
    when it belongs to someone else.
    """
    site = current_domain.repository_for(Site).get_by_id(site_id)
    if site is None:
        raise SiteNotFound({"site": ["Site not found"]})
    if not site.is_owned_by(owner_id):
        raise AccessDenied({"site": ["You do not have access to this site"]})
    return site
