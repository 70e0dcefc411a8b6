"""Site directory: lookups the review workflows need about sites."""

from reviews.domain import reviews
from reviews.site.site import Site


@reviews.repository(part_of=Site)
class SiteRepository:
    def get_by_id(self, site_id) -> Site | None:
        """Return the site, or None when it does not exist."""
        sites = self._dao.query.filter(id=str(site_id)).all().items
        return sites[0] if sites else None

    def get_by_id_for_owner(self, site_id, owner_id) -> Site | None:
        """Return the site only when ``owner_id`` owns it."""
        sites = self._dao.query.filter(id=str(site_id), owner_id=str(owner_id)).all().items
        return sites[0] if sites else None

    def find_for_owner(self, owner_id) -> list[Site]:
        return self._dao.query.filter(owner_id=str(owner_id)).order_by("-created_at").all().items

    def delete(self, site: Site) -> None:
        self._dao.delete(site)
