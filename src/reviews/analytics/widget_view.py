"""WidgetView: one render of a site's public widget.

View tracking is a side channel: ``track_widget_view`` never lets a failure
reach the widget request that triggered it.
"""

from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.analytics.geo import get_country_lookup
from reviews.clock import get_clock
from reviews.domain import reviews
from reviews.utils.logging import get_logger

logger = get_logger(__name__)

# Page size for reads that need every matching row
SCAN_LIMIT = 10_000


@reviews.aggregate
class WidgetView:
    site_id = Identifier(required=True)
    ip_address = String(max_length=45, sanitize=False)
    user_agent = Text(sanitize=False)
    referrer = Text(sanitize=False)
    country = String(max_length=100)
    created_at = DateTime()

    @classmethod
    def record(cls, site_id, ip_address=None, user_agent=None, referrer=None, country=None):
        return cls(
            site_id=site_id,
            ip_address=ip_address,
            user_agent=user_agent,
            referrer=referrer,
            country=country,
            created_at=get_clock().now(),
        )


@reviews.repository(part_of=WidgetView)
class WidgetViewRepository:
    def count_where(self, **filters) -> int:
        return self._dao.query.filter(**filters).all().total

    def find_many_where(
        self,
        filters: dict,
        order_by: str = "-created_at",
        limit: int = 20,
        offset: int = 0,
    ) -> list[WidgetView]:
        return self._dao.query.filter(**filters).order_by(order_by).offset(offset).limit(limit).all().items

    def find_all_where(self, **filters) -> list[WidgetView]:
        found: list[WidgetView] = []
        while True:
            page = self.find_many_where(filters, order_by="id", limit=SCAN_LIMIT, offset=len(found))
            found.extend(page)
            if len(page) < SCAN_LIMIT:
                return found

    def all_for_site(self, site_id) -> list[WidgetView]:
        return self.find_all_where(site_id=str(site_id))

    def delete(self, view: WidgetView) -> None:
        self._dao.delete(view)


@reviews.command(part_of="WidgetView")
class TrackWidgetView:
    site_id = Identifier(required=True)
    ip_address = String(max_length=45, sanitize=False)
    user_agent = Text(sanitize=False)
    referrer = Text(sanitize=False)
    country = String(max_length=100)


@reviews.command_handler(part_of=WidgetView)
class TrackWidgetViewHandler:
    @handle(TrackWidgetView)
    def track_widget_view(self, command):
        country = command.country
        if not country and command.ip_address:
            country = get_country_lookup().country_for(command.ip_address)

        view = WidgetView.record(
            site_id=command.site_id,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
            referrer=command.referrer,
            country=country,
        )
        current_domain.repository_for(WidgetView).add(view)
        return str(view.id)


def track_widget_view(site_id, ip_address=None, user_agent=None, referrer=None, country=None) -> None:
    """Record a widget view, logging instead of raising on failure."""
    try:
        current_domain.process(
            TrackWidgetView(
                site_id=site_id,
                ip_address=ip_address,
                user_agent=user_agent,
                referrer=referrer,
                country=country,
            ),
            asynchronous=False,
        )
    except Exception as exc:
        logger.warning("Failed to track widget view", site_id=str(site_id), error=str(exc))
