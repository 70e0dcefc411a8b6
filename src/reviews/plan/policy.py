"""Plan policy: what each subscription tier is allowed to do.

The limits table is plain configuration handed to a ``PlanPolicy``. The
default table mirrors the product's two public plans; tests and deployments
can install a different table through ``set_plan_policy()``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from reviews.errors import InvalidTier


class Tier(Enum):
    FREE = "FREE"
    PREMIUM = "PREMIUM"


@dataclass(frozen=True)
class PlanLimits:
    """Numeric and boolean limits for one tier.

    ``max_reviews_per_month`` of ``None`` means unlimited.
    """

    max_sites_per_user: int
    max_reviews_per_month: int | None
    moderation_required: bool
    analytics_enabled: bool
    custom_branding: bool = False

    @property
    def unlimited_reviews(self) -> bool:
        return self.max_reviews_per_month is None

    def allows_more_reviews(self, reviews_this_month: int) -> bool:
        if self.unlimited_reviews:
            return True
        return reviews_this_month < self.max_reviews_per_month


DEFAULT_PLANS: Mapping[str, PlanLimits] = {
    Tier.FREE.value: PlanLimits(
        max_sites_per_user=1,
        max_reviews_per_month=50,
        moderation_required=False,
        analytics_enabled=False,
        custom_branding=False,
    ),
    Tier.PREMIUM.value: PlanLimits(
        max_sites_per_user=5,
        max_reviews_per_month=None,
        moderation_required=True,
        analytics_enabled=True,
        custom_branding=True,
    ),
}


class PlanPolicy:
    def __init__(self, plans: Mapping[str, PlanLimits] | None = None) -> None:
        self._plans = dict(DEFAULT_PLANS if plans is None else plans)

    @property
    def tiers(self) -> list[str]:
        return list(self._plans)

    def knows(self, tier) -> bool:
        return _tier_name(tier) in self._plans

    def limits_for(self, tier) -> PlanLimits:
        """Return the limits for ``tier`` (a ``Tier`` or its string value)."""
        name = _tier_name(tier)
        try:
            return self._plans[name]
        except KeyError:
            raise InvalidTier({"tier": [f"Unknown plan tier: {name}"]}) from None


def _tier_name(tier) -> str:
    return tier.value if isinstance(tier, Tier) else str(tier)


_current_policy: PlanPolicy | None = None


def get_plan_policy() -> PlanPolicy:
    """Return the active plan policy. Defaults to the built-in plan table."""
    global _current_policy
    if _current_policy is None:
        _current_policy = PlanPolicy()
    return _current_policy


def set_plan_policy(policy: PlanPolicy) -> None:
    """Override the active plan policy (useful for tests)."""
    global _current_policy
    _current_policy = policy


def reset_plan_policy() -> None:
    """Reset to the built-in plan table."""
    global _current_policy
    _current_policy = None
