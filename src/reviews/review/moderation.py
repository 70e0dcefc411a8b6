"""SetReviewStatus: the site owner approves, hides, or otherwise re-tags a review.

Only plans with moderation have a queue to work; on the others reviews are
auto-approved and status changes are refused even for the owner.
"""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.errors import ModerationNotAvailable
from reviews.plan.policy import get_plan_policy
from reviews.review.guard import owned_review
from reviews.review.review import Review, ReviewStatus
from reviews.utils.logging import get_logger

logger = get_logger(__name__)


@reviews.command(part_of="Review")
class SetReviewStatus:
    review_id = Identifier(required=True)
    acting_user_id = Identifier(required=True)
    status = String(required=True, choices=ReviewStatus)


@reviews.command_handler(part_of=Review)
class SetReviewStatusHandler:
    @handle(SetReviewStatus)
    def set_review_status(self, command):
        review, site = owned_review(command.review_id, command.acting_user_id)

        if not get_plan_policy().limits_for(site.tier).moderation_required:
            raise ModerationNotAvailable({"review": [f"Review moderation is not available on {site.tier} plan"]})

        previous = review.status
        review.change_status(command.status, changed_by=command.acting_user_id)
        current_domain.repository_for(Review).add(review)

        logger.info(
            "Review status changed",
            review_id=str(review.id),
            site_id=str(site.id),
            previous_status=previous,
            status=review.status,
        )
        return review
