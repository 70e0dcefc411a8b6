"""Site aggregate: a tenant's reviewable business.

A site belongs to exactly one owner. Its tier selects the plan limits that
apply to its reviews; changing the tier never rewrites existing reviews.
"""

import json

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text

from reviews.clock import get_clock
from reviews.domain import reviews
from reviews.plan.policy import Tier
from reviews.site.events import SitePlanChanged, SiteRegistered, SiteSettingsUpdated, SiteUpdated

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

DEFAULT_WIDGET_SETTINGS = {
    "theme": "light",
    "primary_color": "#007bff",
    "background_color": "#ffffff",
    "text_color": "#333333",
    "border_radius": "8px",
    "show_avatar": True,
    "show_date": True,
    "show_rating": True,
    "show_submit_form": True,
    "layout": "cards",
    "max_reviews": 10,
}


@reviews.aggregate
class Site:
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=100, sanitize=False)
    domain = String(required=True, max_length=255, sanitize=False)
    tier = String(max_length=20, default=Tier.FREE.value)
    is_active = Boolean(default=True)
    settings = Text(sanitize=False)  # JSON object of widget design settings

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_minimum_length(self):
        if self.name is not None and len(self.name.strip()) < 2:
            raise ValidationError({"name": ["Site name must be at least 2 characters"]})

    @invariant.post
    def domain_minimum_length(self):
        if self.domain is not None and len(self.domain.strip()) < 2:
            raise ValidationError({"domain": ["Domain must be at least 2 characters"]})

    @classmethod
    def register(cls, owner_id, name, domain, tier=Tier.FREE.value, settings=None):
        """Register a new site with default widget settings overlaid by ``settings``."""
        now = get_clock().now()

        site = cls(
            owner_id=owner_id,
            name=name,
            domain=domain,
            tier=tier,
            is_active=True,
            settings=json.dumps({**DEFAULT_WIDGET_SETTINGS, **(settings or {})}),
            created_at=now,
            updated_at=now,
        )

        site.raise_(
            SiteRegistered(
                site_id=str(site.id),
                owner_id=str(owner_id),
                name=name,
                domain=domain,
                tier=tier,
                registered_at=now,
            )
        )

        return site

    @property
    def widget_settings(self) -> dict:
        return json.loads(self.settings) if self.settings else {}

    def is_owned_by(self, user_id) -> bool:
        return str(self.owner_id) == str(user_id)

    def update_details(self, name=_UNSET, domain=_UNSET, is_active=_UNSET):
        now = get_clock().now()

        with atomic_change(self):
            if name is not _UNSET and name is not None:
                self.name = name
            if domain is not _UNSET and domain is not None:
                self.domain = domain
            if is_active is not _UNSET and is_active is not None:
                self.is_active = is_active
            self.updated_at = now

        self.raise_(
            SiteUpdated(
                site_id=str(self.id),
                name=self.name,
                domain=self.domain,
                is_active=self.is_active,
                updated_at=now,
            )
        )

    def update_settings(self, settings: dict):
        """Shallow-merge ``settings`` into the stored widget settings."""
        now = get_clock().now()
        merged = {**self.widget_settings, **settings}

        self.settings = json.dumps(merged)
        self.updated_at = now

        self.raise_(
            SiteSettingsUpdated(
                site_id=str(self.id),
                settings=self.settings,
                updated_at=now,
            )
        )

    def change_tier(self, tier: str):
        if tier == self.tier:
            return

        now = get_clock().now()
        previous = self.tier

        self.tier = tier
        self.updated_at = now

        self.raise_(
            SitePlanChanged(
                site_id=str(self.id),
                previous_tier=previous,
                tier=tier,
                changed_at=now,
            )
        )
