"""Reviews bounded context: Sites, Customer Reviews, Moderation, and Widget Analytics.

Site owners register sites (one per business), end customers submit reviews
through the embeddable widget, and owners moderate them. Plan tiers (FREE,
PREMIUM) decide quotas, moderation, and analytics access.
"""

from protean.domain import Domain

from reviews.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

reviews = Domain(name="reviews")
