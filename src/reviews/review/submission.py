"""SubmitReview: a visitor submits a review through the widget or the public API.

Checks run in a fixed order so the caller gets the most specific failure:

1. the site must exist;
2. the same IP address and author email may not review the same site twice
   within a trailing 24 hour window (skipped when either is missing);
3. the site's plan may cap reviews per calendar month (any status counts);
4. plans with moderation start reviews as PENDING, others as APPROVED.

The duplicate and quota checks read before they write and take no lock, so
concurrent submissions can both pass them.
"""

from datetime import timedelta

from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.analytics.geo import get_country_lookup
from reviews.clock import get_clock, start_of_month
from reviews.domain import reviews
from reviews.errors import DuplicateSubmission, QuotaExceeded, SiteNotFound
from reviews.plan.policy import get_plan_policy
from reviews.review.review import Review, ReviewStatus
from reviews.site.site import Site
from reviews.utils.logging import get_logger

logger = get_logger(__name__)

DUPLICATE_WINDOW = timedelta(hours=24)


@reviews.command(part_of="Review")
class SubmitReview:
    site_id = Identifier(required=True)
    author_name = String(required=True, max_length=50, sanitize=False)
    author_email = String(max_length=254, sanitize=False)
    rating = Integer(required=True)
    comment = Text(required=True, sanitize=False)
    ip_address = String(max_length=45, sanitize=False)
    user_agent = Text(sanitize=False)


@reviews.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        site = current_domain.repository_for(Site).get_by_id(command.site_id)
        if site is None:
            raise SiteNotFound({"site": ["Site not found"]})

        repo = current_domain.repository_for(Review)
        now = get_clock().now()
        site_id = str(site.id)

        if command.ip_address and command.author_email:
            recent = repo.find_first_where(
                site_id=site_id,
                ip_address=command.ip_address,
                author_email=command.author_email,
                created_at__gte=now - DUPLICATE_WINDOW,
            )
            if recent is not None:
                logger.info("Duplicate review rejected", site_id=site_id, ip_address=command.ip_address)
                raise DuplicateSubmission({"review": ["You have already left a review recently"]})

        limits = get_plan_policy().limits_for(site.tier)
        if not limits.unlimited_reviews:
            this_month = repo.count_where(site_id=site_id, created_at__gte=start_of_month(now))
            if not limits.allows_more_reviews(this_month):
                logger.info(
                    "Monthly review quota reached",
                    site_id=site_id,
                    tier=site.tier,
                    reviews_this_month=this_month,
                )
                raise QuotaExceeded({"review": ["Monthly review limit reached for this site"]})

        status = ReviewStatus.PENDING if limits.moderation_required else ReviewStatus.APPROVED
        country = get_country_lookup().country_for(command.ip_address) if command.ip_address else None

        review = Review.submit(
            site_id=site_id,
            author_name=command.author_name,
            author_email=command.author_email,
            rating=command.rating,
            comment=command.comment,
            status=status.value,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
            country=country,
        )
        repo.add(review)

        logger.info("Review submitted", review_id=str(review.id), site_id=site_id, status=status.value)
        return review
