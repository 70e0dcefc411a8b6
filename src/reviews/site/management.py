"""Owner-side site maintenance: details, widget settings, and plan changes."""

import json

from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.errors import InvalidTier
from reviews.plan.policy import get_plan_policy
from reviews.site.ownership import owned_site
from reviews.site.site import Site
from reviews.utils.logging import get_logger

logger = get_logger(__name__)


@reviews.command(part_of="Site")
class UpdateSite:
    site_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(max_length=100, sanitize=False)
    domain = String(max_length=255, sanitize=False)
    is_active = Boolean()


@reviews.command(part_of="Site")
class UpdateSiteSettings:
    site_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    settings = Text(required=True, sanitize=False)  # JSON object, merged into existing settings


@reviews.command(part_of="Site")
class ChangeSitePlan:
    site_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    tier = String(required=True, max_length=20)


@reviews.command_handler(part_of=Site)
class ManageSiteHandler:
    @handle(UpdateSite)
    def update_site(self, command):
        site = owned_site(command.site_id, command.owner_id)
        site.update_details(
            name=command.name,
            domain=command.domain,
            is_active=command.is_active,
        )
        current_domain.repository_for(Site).add(site)

    @handle(UpdateSiteSettings)
    def update_settings(self, command):
        site = owned_site(command.site_id, command.owner_id)
        site.update_settings(json.loads(command.settings))
        current_domain.repository_for(Site).add(site)

    @handle(ChangeSitePlan)
    def change_plan(self, command):
        site = owned_site(command.site_id, command.owner_id)

        policy = get_plan_policy()
        if not policy.knows(command.tier):
            known = ", ".join(policy.tiers)
            raise InvalidTier({"tier": [f"Unknown plan tier: {command.tier}. Available tiers: {known}"]})

        previous = site.tier
        site.change_tier(command.tier)
        current_domain.repository_for(Site).add(site)

        logger.info("Site plan changed", site_id=str(site.id), previous_tier=previous, tier=command.tier)
