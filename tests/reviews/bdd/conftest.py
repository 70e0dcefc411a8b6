"""Shared BDD fixtures and step definitions for the Reviews domain."""

import pytest
from protean import current_domain
from protean.exceptions import ProteanException
from pytest_bdd import given, parsers, then, when
from reviews.review.moderation import SetReviewStatus
from reviews.review.public import public_reviews_for
from reviews.review.review import Review
from reviews.review.submission import SubmitReview
from reviews.site.site import Site


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def context():
    """Carries the site and the latest review id between steps."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a {tier} site owned by "{owner_id}"'))
def site_with_tier(tier, owner_id, context):
    site = Site.register(owner_id=owner_id, name="Corner Coffee", domain="coffee.example.com", tier=tier)
    current_domain.repository_for(Site).add(site)
    context["site_id"] = str(site.id)


@given(parsers.cfparse("the site already has {count:d} reviews this month"))
def existing_reviews(count, context):
    for i in range(count):
        current_domain.process(
            SubmitReview(
                site_id=context["site_id"],
                author_name=f"Visitor {i}",
                rating=4,
                comment="Earlier review from this month.",
            ),
            asynchronous=False,
        )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{author}" submits a {rating:d} star review "{comment}" from "{ip}" as "{email}"'))
def submit(author, rating, comment, ip, email, context, error):
    try:
        review = current_domain.process(
            SubmitReview(
                site_id=context["site_id"],
                author_name=author,
                author_email=email,
                rating=rating,
                comment=comment,
                ip_address=ip,
            ),
            asynchronous=False,
        )
        context["review_id"] = str(review.id)
    except ProteanException as exc:
        error["exc"] = exc


@when(parsers.cfparse('"{user_id}" sets the review status to "{status}"'))
def set_status(user_id, status, context, error):
    try:
        current_domain.process(
            SetReviewStatus(review_id=context["review_id"], acting_user_id=user_id, status=status),
            asynchronous=False,
        )
    except ProteanException as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the review status is "{status}"'))
def review_status(status, context):
    review = current_domain.repository_for(Review).find_by_id(context["review_id"])
    assert review.status == status


@then(parsers.cfparse('the review country is "{country}"'))
def review_country(country, context):
    review = current_domain.repository_for(Review).find_by_id(context["review_id"])
    assert review.country == country


@then("the public list of the site is empty")
def public_list_empty(context):
    assert public_reviews_for(context["site_id"])["reviews"] == []


@then(parsers.cfparse('the public list of the site contains "{author}"'))
def public_list_contains(author, context):
    names = [review["author_name"] for review in public_reviews_for(context["site_id"])["reviews"]]
    assert author in names


@then(parsers.cfparse('the submission fails with "{error_name}"'))
@then(parsers.cfparse('the moderation fails with "{error_name}"'))
def fails_with(error_name, error):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name
