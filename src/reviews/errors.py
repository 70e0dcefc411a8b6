"""Error kinds raised by the Reviews domain.

Each error subclasses the Protean exception whose semantics it shares, so a
failing command rolls back its unit of work exactly like a built-in error.
Messages follow the ``{"field": ["message"]}`` shape used by ``ValidationError``.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError


class SiteNotFound(ObjectNotFoundError):
    """The referenced site does not exist (or is not visible to the caller)."""


class ReviewNotFound(ObjectNotFoundError):
    """The referenced review does not exist."""


class AccessDenied(InvalidOperationError):
    """The acting user does not own the site the resource belongs to."""


class ModerationNotAvailable(InvalidOperationError):
    """The site's plan auto-approves reviews and has no moderation queue."""


class AnalyticsNotAvailable(InvalidOperationError):
    """The site's plan does not include analytics."""


class SiteLimitReached(InvalidOperationError):
    """The owner already has as many sites as their plan allows."""


class DuplicateSubmission(ValidationError):
    """Same IP address and author email reviewed this site within the duplicate window."""


class QuotaExceeded(ValidationError):
    """The site's monthly review quota is used up."""


class InvalidTier(ValidationError):
    """The tier is not part of the configured plan table."""
