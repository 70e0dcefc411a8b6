"""Owner analytics over reviews and widget views.

The dashboard is available on every plan; per-site analytics need a plan
with analytics enabled. Conversion rate is reviews per hundred widget views.
"""

import calendar
from collections import Counter
from datetime import datetime, timedelta

from protean.utils.globals import current_domain

from reviews.analytics.widget_view import WidgetView
from reviews.clock import get_clock, start_of_month
from reviews.errors import AnalyticsNotAvailable, SiteNotFound
from reviews.plan.policy import get_plan_policy
from reviews.review.owner_queries import average_rating, rating_distribution
from reviews.review.review import Review, ReviewStatus
from reviews.site.site import Site

# Reviews that count towards volume figures: visible or awaiting moderation
COUNTED_STATUSES = [ReviewStatus.APPROVED.value, ReviewStatus.PENDING.value]

TREND_MONTHS = 6
TOP_COUNTRIES = 10
RECENT_ACTIVITY = 20

PERIODS = ("week", "month")


def shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` by whole calendar months, clamping the day to the target month."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def conversion_rate(reviews: int, views: int) -> float:
    return round(reviews / views * 100, 1) if views > 0 else 0


def percentage_change(old_value: float, new_value: float) -> float:
    if old_value == 0:
        return 100 if new_value > 0 else 0
    return round((new_value - old_value) / old_value * 100, 1)


def _owned_site(site_id, owner_id) -> Site:
    site = current_domain.repository_for(Site).get_by_id_for_owner(site_id, owner_id)
    if site is None:
        raise SiteNotFound({"site": ["Site not found"]})
    return site


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
def dashboard_stats(owner_id) -> dict:
    """Totals across all of the owner's sites."""
    sites = current_domain.repository_for(Site).find_for_owner(owner_id)
    if not sites:
        return {
            "total_reviews": 0,
            "this_month_reviews": 0,
            "avg_rating": 0,
            "total_views": 0,
            "conversion_rate": 0,
            "active_sites": 0,
        }

    site_ids = [str(site.id) for site in sites]
    review_repo = current_domain.repository_for(Review)
    now = get_clock().now()

    total_reviews = review_repo.count_where(site_id__in=site_ids, status__in=COUNTED_STATUSES)
    this_month = review_repo.count_where(
        site_id__in=site_ids,
        status__in=COUNTED_STATUSES,
        created_at__gte=start_of_month(now),
    )
    approved = review_repo.find_all_where(site_id__in=site_ids, status=ReviewStatus.APPROVED.value)
    total_views = current_domain.repository_for(WidgetView).count_where(site_id__in=site_ids)

    return {
        "total_reviews": total_reviews,
        "this_month_reviews": this_month,
        "avg_rating": round(sum(r.rating for r in approved) / len(approved), 1) if approved else 0,
        "total_views": total_views,
        "conversion_rate": conversion_rate(total_reviews, total_views),
        "active_sites": sum(1 for site in sites if site.is_active),
    }


# ---------------------------------------------------------------------------
# Site analytics
# ---------------------------------------------------------------------------
def site_analytics(site_id, owner_id) -> dict:
    site = _owned_site(site_id, owner_id)
    if not get_plan_policy().limits_for(site.tier).analytics_enabled:
        raise AnalyticsNotAvailable({"analytics": [f"Analytics are not available on {site.tier} plan"]})

    site_key = str(site.id)
    review_repo = current_domain.repository_for(Review)
    total_reviews = review_repo.count_where(
        site_id=site_key,
        status__in=[s.value for s in ReviewStatus if s != ReviewStatus.DELETED],
    )
    total_views = current_domain.repository_for(WidgetView).count_where(site_id=site_key)

    return {
        "site_info": {"id": site_key, "name": site.name, "domain": site.domain, "plan": site.tier},
        "stats": {
            "total_reviews": total_reviews,
            "approved_reviews": review_repo.count_where(site_id=site_key, status=ReviewStatus.APPROVED.value),
            "pending_reviews": review_repo.count_where(site_id=site_key, status=ReviewStatus.PENDING.value),
            "total_views": total_views,
            "conversion_rate": conversion_rate(total_reviews, total_views),
            "avg_rating": average_rating(site_key),
        },
        "rating_distribution": rating_distribution(site_key),
        "monthly_trend": monthly_trend(site_key),
        "top_countries": top_countries(site_key),
        "recent_activity": recent_activity(site_key),
    }


def monthly_trend(site_id) -> list[dict]:
    """Reviews and views per ``YYYY-MM`` over the last six months, oldest first."""
    since = shift_months(get_clock().now(), -TREND_MONTHS)

    reviews = current_domain.repository_for(Review).find_all_where(
        site_id=str(site_id), status__in=COUNTED_STATUSES, created_at__gte=since
    )
    views = current_domain.repository_for(WidgetView).find_all_where(site_id=str(site_id), created_at__gte=since)

    review_counts = Counter(r.created_at.strftime("%Y-%m") for r in reviews)
    view_counts = Counter(v.created_at.strftime("%Y-%m") for v in views)

    return [
        {"month": month, "reviews": review_counts.get(month, 0), "views": view_counts.get(month, 0)}
        for month in sorted(set(review_counts) | set(view_counts))
    ]


def top_countries(site_id, limit: int = TOP_COUNTRIES) -> list[dict]:
    """Countries ranked by widget views plus approved reviews."""
    reviews = current_domain.repository_for(Review).find_all_where(
        site_id=str(site_id), status=ReviewStatus.APPROVED.value
    )
    views = current_domain.repository_for(WidgetView).all_for_site(site_id)

    review_counts = Counter(r.country for r in reviews if r.country)
    view_counts = Counter(v.country for v in views if v.country)

    ranked = [
        {"country": country, "views": view_counts.get(country, 0), "reviews": review_counts.get(country, 0)}
        for country in set(review_counts) | set(view_counts)
    ]
    ranked.sort(key=lambda row: (-(row["views"] + row["reviews"]), row["country"]))
    return ranked[:limit]


def recent_activity(site_id, limit: int = RECENT_ACTIVITY) -> list[dict]:
    """Latest reviews and widget views interleaved by time, newest first."""
    half = limit // 2
    reviews = current_domain.repository_for(Review).find_many_where({"site_id": str(site_id)}, limit=half)
    views = current_domain.repository_for(WidgetView).find_many_where({"site_id": str(site_id)}, limit=half)

    activity = [
        {
            "type": "review",
            "date": review.created_at,
            "data": {
                "id": str(review.id),
                "author": review.author_name,
                "rating": review.rating,
                "status": review.status,
                "country": review.country,
            },
        }
        for review in reviews
    ] + [
        {
            "type": "view",
            "date": view.created_at,
            "data": {"id": str(view.id), "country": view.country, "referrer": view.referrer},
        }
        for view in views
    ]

    activity.sort(key=lambda item: item["date"], reverse=True)
    return activity[:limit]


# ---------------------------------------------------------------------------
# Period comparison
# ---------------------------------------------------------------------------
def period_stats(site_id, start: datetime, end: datetime) -> dict:
    window = {"created_at__gte": start, "created_at__lte": end}

    reviews = current_domain.repository_for(Review).count_where(
        site_id=str(site_id), status__in=COUNTED_STATUSES, **window
    )
    views = current_domain.repository_for(WidgetView).count_where(site_id=str(site_id), **window)

    return {
        "reviews": reviews,
        "views": views,
        "avg_rating": average_rating(site_id, **window),
        "conversion_rate": conversion_rate(reviews, views),
    }


def comparison(site_id, owner_id, period: str = "month") -> dict:
    """This period against the one before it (a week or a calendar month each)."""
    if period not in PERIODS:
        raise ValueError(f"Unknown comparison period: {period}")

    site = _owned_site(site_id, owner_id)
    now = get_clock().now()

    if period == "week":
        period_start = now - timedelta(days=7)
        previous_start = now - timedelta(days=14)
    else:
        period_start = shift_months(now, -1)
        previous_start = shift_months(now, -2)

    current = period_stats(site.id, period_start, now)
    previous = period_stats(site.id, previous_start, period_start)

    return {
        "current": current,
        "previous": previous,
        "changes": {
            "reviews_change": percentage_change(previous["reviews"], current["reviews"]),
            "views_change": percentage_change(previous["views"], current["views"]),
            "conversion_change": percentage_change(previous["conversion_rate"], current["conversion_rate"]),
            "rating_change": percentage_change(previous["avg_rating"], current["avg_rating"]),
        },
    }
