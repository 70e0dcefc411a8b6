"""Design settings the embeddable widget renders with."""

from protean.utils.globals import current_domain

from reviews.errors import SiteNotFound
from reviews.plan.policy import get_plan_policy
from reviews.site.site import DEFAULT_WIDGET_SETTINGS, Site


def widget_settings(site_id) -> dict:
    """Defaults overlaid with whatever the owner stored on the site."""
    site = current_domain.repository_for(Site).get_by_id(site_id)
    if site is None:
        raise SiteNotFound({"site": ["Site not found"]})

    # Without custom branding the widget shows its "powered by" badge
    branding = get_plan_policy().limits_for(site.tier).custom_branding

    return {
        "site": {
            "id": str(site.id),
            "name": site.name,
            "domain": site.domain,
            "plan": site.tier,
            "custom_branding": branding,
        },
        "settings": {**DEFAULT_WIDGET_SETTINGS, **site.widget_settings},
    }
