from datetime import UTC, datetime

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def reviews_bed():
    from reviews.domain import reviews

    bed = DomainFixture(reviews)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviews_bed):
    from reviews.analytics.geo import reset_country_lookup
    from reviews.clock import reset_clock
    from reviews.plan.policy import reset_plan_policy

    with reviews_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_clock()
    reset_plan_policy()
    reset_country_lookup()


@pytest.fixture()
def clock():
    """Pin time to mid-March 2024; tests move it with ``clock.advance(...)``."""
    from reviews.clock import FixedClock, set_clock

    fixed = FixedClock(datetime(2024, 3, 15, 12, 0, tzinfo=UTC))
    set_clock(fixed)
    return fixed


@pytest.fixture()
def make_site():
    """Persist a site directly, bypassing the per-owner site limit."""
    from reviews.site.site import Site

    def _make(owner_id="owner-1", tier="FREE", name="Corner Coffee", domain="coffee.example.com", settings=None):
        site = Site.register(owner_id=owner_id, name=name, domain=domain, tier=tier, settings=settings)
        current_domain.repository_for(Site).add(site)
        return site

    return _make


@pytest.fixture()
def submit_review():
    from reviews.review.submission import SubmitReview

    def _submit(site_id, **overrides):
        defaults = {
            "author_name": "Maria",
            "rating": 5,
            "comment": "Lovely place, friendly staff!",
        }
        defaults.update(overrides)
        return current_domain.process(SubmitReview(site_id=str(site_id), **defaults), asynchronous=False)

    return _submit
