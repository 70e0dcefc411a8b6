"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; no cross-user sharing.
State tracks ids returned by creation endpoints so follow-up operations can
reference them.
"""

from dataclasses import dataclass, field


@dataclass
class SiteOwnerState:
    """Tracks state for a single simulated site owner."""

    owner_id: str | None = None
    site_id: str | None = None
    tier: str = "FREE"
    review_ids: list[str] = field(default_factory=list)


@dataclass
class WidgetState:
    """Tracks the site a simulated visitor is browsing."""

    owner_id: str | None = None
    site_id: str | None = None
    submitted: int = 0
