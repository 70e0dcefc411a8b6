"""DeleteReview: the site owner permanently removes a review, on any plan."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.review.guard import owned_review
from reviews.review.review import Review
from reviews.utils.logging import get_logger

logger = get_logger(__name__)


@reviews.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    acting_user_id = Identifier(required=True)


@reviews.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        review, site = owned_review(command.review_id, command.acting_user_id)
        current_domain.repository_for(Review).delete(review)

        logger.info("Review deleted", review_id=str(review.id), site_id=str(site.id))
