"""RegisterSite: an owner adds a new site.

The owner's plan is the tier of the sites they already have (new owners start
on FREE), and the plan caps how many sites they may own.
"""

import json

from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.errors import SiteLimitReached
from reviews.plan.policy import Tier, get_plan_policy
from reviews.site.site import Site
from reviews.utils.logging import get_logger

logger = get_logger(__name__)


@reviews.command(part_of="Site")
class RegisterSite:
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=100, sanitize=False)
    domain = String(required=True, max_length=255, sanitize=False)
    settings = Text(sanitize=False)  # JSON object of widget settings


@reviews.command_handler(part_of=Site)
class RegisterSiteHandler:
    @handle(RegisterSite)
    def register_site(self, command):
        repo = current_domain.repository_for(Site)
        existing = repo.find_for_owner(command.owner_id)

        tier = existing[0].tier if existing else Tier.FREE.value
        limits = get_plan_policy().limits_for(tier)

        if len(existing) >= limits.max_sites_per_user:
            raise SiteLimitReached(
                {
                    "site": [
                        f"Your {tier} plan allows only {limits.max_sites_per_user} site(s). "
                        "Please upgrade to add more sites."
                    ]
                }
            )

        site = Site.register(
            owner_id=command.owner_id,
            name=command.name,
            domain=command.domain,
            tier=tier,
            settings=json.loads(command.settings) if command.settings else None,
        )
        repo.add(site)

        logger.info("Site registered", site_id=str(site.id), owner_id=str(command.owner_id), tier=tier)
        return str(site.id)
