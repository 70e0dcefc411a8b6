"""DeleteSite: an owner deletes a site together with everything recorded for it."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.analytics.widget_view import WidgetView
from reviews.domain import reviews
from reviews.review.review import Review
from reviews.site.ownership import owned_site
from reviews.site.site import Site
from reviews.utils.logging import get_logger

logger = get_logger(__name__)


@reviews.command(part_of="Site")
class DeleteSite:
    site_id = Identifier(required=True)
    owner_id = Identifier(required=True)


@reviews.command_handler(part_of=Site)
class DeleteSiteHandler:
    @handle(DeleteSite)
    def delete_site(self, command):
        site = owned_site(command.site_id, command.owner_id)

        review_repo = current_domain.repository_for(Review)
        site_reviews = review_repo.all_for_site(site.id)
        for review in site_reviews:
            review_repo.delete(review)

        view_repo = current_domain.repository_for(WidgetView)
        site_views = view_repo.all_for_site(site.id)
        for view in site_views:
            view_repo.delete(view)

        current_domain.repository_for(Site).delete(site)

        logger.info(
            "Site deleted",
            site_id=str(site.id),
            reviews_deleted=len(site_reviews),
            views_deleted=len(site_views),
        )
