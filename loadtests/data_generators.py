"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's validation rules
(name and comment lengths, rating range) and match the exact field names
expected by the Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def owner_id() -> str:
    """Generate unique owner ids like 'owner-lt-a1b2c3d4'."""
    return f"owner-lt-{uuid.uuid4().hex[:8]}"


def site_data() -> dict:
    """Generate RegisterSiteRequest payload."""
    company = fake.company()[:100]
    return {
        "name": company if len(company) >= 2 else f"{company} Shop",
        "domain": fake.domain_name(),
        "settings": {"theme": random.choice(["light", "dark"])},
    }


def widget_settings() -> dict:
    return {
        "primary_color": fake.hex_color(),
        "layout": random.choice(["cards", "list"]),
        "max_reviews": random.randint(3, 20),
    }


def review_data() -> dict:
    """Generate SubmitReviewRequest payload.

    Emails are unique per call so the 24 hour duplicate check does not
    reject repeated submissions from the same load generator address.
    """
    comment = fake.paragraph(nb_sentences=3)[:1000]
    if len(comment) < 10:
        comment = f"{comment} Really enjoyed it."
    return {
        "author_name": fake.first_name()[:50],
        "author_email": f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}",
        "rating": random.randint(1, 5),
        "comment": comment,
    }
