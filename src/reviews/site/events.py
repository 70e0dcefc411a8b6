"""Domain events for the Site aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String, Text

from reviews.domain import reviews


@reviews.event(part_of="Site")
class SiteRegistered:
    """An owner registered a new site."""

    __version__ = "v1"

    site_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True, sanitize=False)
    domain = String(required=True, sanitize=False)
    tier = String(required=True)
    registered_at = DateTime(required=True)


@reviews.event(part_of="Site")
class SiteUpdated:
    """An owner changed a site's name, domain, or active flag."""

    __version__ = "v1"

    site_id = Identifier(required=True)
    name = String(required=True, sanitize=False)
    domain = String(required=True, sanitize=False)
    is_active = Boolean(required=True)
    updated_at = DateTime(required=True)


@reviews.event(part_of="Site")
class SiteSettingsUpdated:
    """An owner changed the widget design settings of a site."""

    __version__ = "v1"

    site_id = Identifier(required=True)
    settings = Text(required=True, sanitize=False)  # JSON object
    updated_at = DateTime(required=True)


@reviews.event(part_of="Site")
class SitePlanChanged:
    """A site moved to a different subscription tier."""

    __version__ = "v1"

    site_id = Identifier(required=True)
    previous_tier = String(required=True)
    tier = String(required=True)
    changed_at = DateTime(required=True)
