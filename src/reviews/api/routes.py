"""FastAPI routes for the Reviews bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands or read helpers (internal domain concepts). Public routes
serve the embeddable widget; owner routes require ``X-User-Id``.
"""

import json
from typing import Literal

from fastapi import APIRouter, Depends, Header, Query, Request
from protean.utils.globals import current_domain

from reviews.analytics.reports import comparison, dashboard_stats, site_analytics
from reviews.analytics.widget_view import track_widget_view
from reviews.api.dependencies import acting_user_id, client_ip
from reviews.api.schemas import (
    ChangeSitePlanRequest,
    PublicReviewsResponse,
    RegisterSiteRequest,
    ReviewResponse,
    ReviewStatusValue,
    SiteIdResponse,
    SiteResponse,
    StatusResponse,
    SubmitReviewRequest,
    SubmittedReviewResponse,
    UpdateReviewStatusRequest,
    UpdateSiteRequest,
    UpdateSiteSettingsRequest,
)
from reviews.review.moderation import SetReviewStatus
from reviews.review.owner_queries import reviews_for_owner, site_review_stats
from reviews.review.public import public_reviews_for
from reviews.review.removal import DeleteReview
from reviews.review.submission import SubmitReview
from reviews.site.management import ChangeSitePlan, UpdateSite, UpdateSiteSettings
from reviews.site.queries import site_for_owner, sites_for_owner
from reviews.site.registration import RegisterSite
from reviews.site.removal import DeleteSite
from reviews.widget.settings import widget_settings


def _submit(site_id: str, body: SubmitReviewRequest, request: Request, user_agent: str | None):
    command = SubmitReview(
        site_id=site_id,
        author_name=body.author_name,
        author_email=body.author_email,
        rating=body.rating,
        comment=body.comment,
        ip_address=client_ip(request),
        user_agent=user_agent,
    )
    review = current_domain.process(command, asynchronous=False)
    return SubmittedReviewResponse(**review.receipt())


# ---------------------------------------------------------------------------
# Review Router
# ---------------------------------------------------------------------------
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.get("/site/{site_id}", response_model=PublicReviewsResponse)
async def get_public_reviews(site_id: str) -> PublicReviewsResponse:
    """Approved reviews of a site, for unauthenticated readers."""
    return PublicReviewsResponse(**public_reviews_for(site_id))


@review_router.post("/site/{site_id}", status_code=201, response_model=SubmittedReviewResponse)
async def submit_review(
    site_id: str,
    body: SubmitReviewRequest,
    request: Request,
    user_agent: str | None = Header(default=None),
) -> SubmittedReviewResponse:
    """Submit a review for a site."""
    return _submit(site_id, body, request, user_agent)


@review_router.get("/site/{site_id}/stats")
async def get_site_review_stats(site_id: str, user_id: str = Depends(acting_user_id)) -> dict:
    """Review counts, average rating, and rating distribution for one of the owner's sites."""
    return site_review_stats(site_id, user_id)


@review_router.get("/my")
async def get_my_reviews(
    user_id: str = Depends(acting_user_id),
    site_id: str | None = None,
    status: ReviewStatusValue | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1),
) -> dict:
    """Paginated reviews across the owner's sites."""
    return reviews_for_owner(user_id, site_id=site_id, status=status, page=page, limit=limit)


@review_router.put("/{review_id}/status", response_model=ReviewResponse)
async def update_review_status(
    review_id: str,
    body: UpdateReviewStatusRequest,
    user_id: str = Depends(acting_user_id),
) -> ReviewResponse:
    """Moderate a review (plans with moderation only)."""
    command = SetReviewStatus(review_id=review_id, acting_user_id=user_id, status=body.status)
    review = current_domain.process(command, asynchronous=False)
    return ReviewResponse(
        id=str(review.id),
        site_id=str(review.site_id),
        author_name=review.author_name,
        rating=review.rating,
        comment=review.comment,
        status=review.status,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, user_id: str = Depends(acting_user_id)) -> StatusResponse:
    """Permanently delete a review."""
    current_domain.process(DeleteReview(review_id=review_id, acting_user_id=user_id), asynchronous=False)
    return StatusResponse(status="deleted")


# ---------------------------------------------------------------------------
# Site Router
# ---------------------------------------------------------------------------
site_router = APIRouter(prefix="/sites", tags=["sites"])


@site_router.post("", status_code=201, response_model=SiteIdResponse)
async def register_site(body: RegisterSiteRequest, user_id: str = Depends(acting_user_id)) -> SiteIdResponse:
    """Register a new site for the signed-in owner."""
    command = RegisterSite(
        owner_id=user_id,
        name=body.name,
        domain=body.domain,
        settings=json.dumps(body.settings) if body.settings else None,
    )
    site_id = current_domain.process(command, asynchronous=False)
    return SiteIdResponse(site_id=site_id)


@site_router.get("", response_model=list[SiteResponse])
async def list_sites(user_id: str = Depends(acting_user_id)) -> list[SiteResponse]:
    return [SiteResponse(**site) for site in sites_for_owner(user_id)]


@site_router.get("/{site_id}", response_model=SiteResponse)
async def get_site(site_id: str, user_id: str = Depends(acting_user_id)) -> SiteResponse:
    return SiteResponse(**site_for_owner(site_id, user_id))


@site_router.put("/{site_id}", response_model=SiteResponse)
async def update_site(site_id: str, body: UpdateSiteRequest, user_id: str = Depends(acting_user_id)) -> SiteResponse:
    """Rename a site, change its domain, or toggle it on and off."""
    command = UpdateSite(
        site_id=site_id,
        owner_id=user_id,
        name=body.name,
        domain=body.domain,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return SiteResponse(**site_for_owner(site_id, user_id))


@site_router.put("/{site_id}/settings", response_model=SiteResponse)
async def update_site_settings(
    site_id: str,
    body: UpdateSiteSettingsRequest,
    user_id: str = Depends(acting_user_id),
) -> SiteResponse:
    """Merge new widget design settings into the site's current ones."""
    command = UpdateSiteSettings(site_id=site_id, owner_id=user_id, settings=json.dumps(body.settings))
    current_domain.process(command, asynchronous=False)
    return SiteResponse(**site_for_owner(site_id, user_id))


@site_router.put("/{site_id}/plan", response_model=SiteResponse)
async def change_site_plan(
    site_id: str,
    body: ChangeSitePlanRequest,
    user_id: str = Depends(acting_user_id),
) -> SiteResponse:
    """Move a site to another plan tier."""
    command = ChangeSitePlan(site_id=site_id, owner_id=user_id, tier=body.tier)
    current_domain.process(command, asynchronous=False)
    return SiteResponse(**site_for_owner(site_id, user_id))


@site_router.delete("/{site_id}", response_model=StatusResponse)
async def delete_site(site_id: str, user_id: str = Depends(acting_user_id)) -> StatusResponse:
    """Delete a site and all of its reviews."""
    current_domain.process(DeleteSite(site_id=site_id, owner_id=user_id), asynchronous=False)
    return StatusResponse(status="deleted")


# ---------------------------------------------------------------------------
# Widget Router
# ---------------------------------------------------------------------------
widget_router = APIRouter(prefix="/widget", tags=["widget"])


@widget_router.get("/{site_id}/reviews", response_model=PublicReviewsResponse)
async def get_widget_reviews(
    site_id: str,
    request: Request,
    user_agent: str | None = Header(default=None),
    referer: str | None = Header(default=None),
) -> PublicReviewsResponse:
    """Reviews for the widget; each call counts as one widget view."""
    result = public_reviews_for(site_id)
    track_widget_view(site_id, ip_address=client_ip(request), user_agent=user_agent, referrer=referer)
    return PublicReviewsResponse(**result)


@widget_router.post("/{site_id}/reviews", status_code=201, response_model=SubmittedReviewResponse)
async def submit_widget_review(
    site_id: str,
    body: SubmitReviewRequest,
    request: Request,
    user_agent: str | None = Header(default=None),
) -> SubmittedReviewResponse:
    return _submit(site_id, body, request, user_agent)


@widget_router.get("/{site_id}/settings")
async def get_widget_settings(site_id: str) -> dict:
    return widget_settings(site_id)


# ---------------------------------------------------------------------------
# Analytics Router
# ---------------------------------------------------------------------------
analytics_router = APIRouter(prefix="/analytics", tags=["analytics"])


@analytics_router.get("/dashboard")
async def get_dashboard(user_id: str = Depends(acting_user_id)) -> dict:
    return dashboard_stats(user_id)


@analytics_router.get("/site/{site_id}")
async def get_site_analytics(site_id: str, user_id: str = Depends(acting_user_id)) -> dict:
    """Full analytics for one site (plans with analytics only)."""
    return site_analytics(site_id, user_id)


@analytics_router.get("/site/{site_id}/comparison")
async def get_comparison(
    site_id: str,
    period: Literal["week", "month"] = "month",
    user_id: str = Depends(acting_user_id),
) -> dict:
    return comparison(site_id, user_id, period=period)
