"""Reviews domain API package."""

from reviews.api.errors import register_error_handlers
from reviews.api.routes import analytics_router, review_router, site_router, widget_router

__all__ = ["review_router", "site_router", "widget_router", "analytics_router", "register_error_handlers"]
