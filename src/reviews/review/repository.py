"""Review repository: filtered counts and reads over persisted reviews.

Filters are Protean lookups, e.g. ``count_where(site_id=..., created_at__gte=...)``.
"""

from reviews.domain import reviews
from reviews.review.review import Review

# Page size for reads that need every matching row (cascades, aggregates)
SCAN_LIMIT = 10_000


@reviews.repository(part_of=Review)
class ReviewRepository:
    def count_where(self, **filters) -> int:
        return self._dao.query.filter(**filters).all().total

    def find_first_where(self, **filters) -> Review | None:
        items = self._dao.query.filter(**filters).limit(1).all().items
        return items[0] if items else None

    def find_many_where(
        self,
        filters: dict,
        order_by: str = "-created_at",
        limit: int = 20,
        offset: int = 0,
    ) -> list[Review]:
        return self._dao.query.filter(**filters).order_by(order_by).offset(offset).limit(limit).all().items

    def find_by_id(self, review_id) -> Review | None:
        return self.find_first_where(id=str(review_id))

    def find_all_where(self, **filters) -> list[Review]:
        """Every matching review, read page by page in a stable id order."""
        found: list[Review] = []
        while True:
            page = self.find_many_where(filters, order_by="id", limit=SCAN_LIMIT, offset=len(found))
            found.extend(page)
            if len(page) < SCAN_LIMIT:
                return found

    def all_for_site(self, site_id) -> list[Review]:
        return self.find_all_where(site_id=str(site_id))

    def delete(self, review: Review) -> None:
        self._dao.delete(review)
