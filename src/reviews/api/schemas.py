"""Pydantic request/response schemas for the Reviews API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
Field constraints here are the input validation the domain relies on.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field

ReviewStatusValue = Literal["PENDING", "APPROVED", "HIDDEN", "DELETED"]


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "author_name": "Maria",
                    "author_email": "maria@example.com",
                    "rating": 5,
                    "comment": "Great service overall!",
                }
            ]
        }
    }

    author_name: str = Field(min_length=2, max_length=50)
    author_email: EmailStr | None = None
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=10, max_length=1000)


class UpdateReviewStatusRequest(BaseModel):
    status: ReviewStatusValue


class RegisterSiteRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    domain: str = Field(min_length=2, max_length=255)
    settings: dict[str, Any] | None = None


class UpdateSiteRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    domain: str | None = Field(default=None, min_length=2, max_length=255)
    is_active: bool | None = None


class UpdateSiteSettingsRequest(BaseModel):
    settings: dict[str, Any]


class ChangeSitePlanRequest(BaseModel):
    tier: str = Field(min_length=1, max_length=20)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class SubmittedReviewResponse(BaseModel):
    id: str
    author_name: str
    rating: int
    comment: str
    status: str
    created_at: datetime


class PublicReview(BaseModel):
    id: str
    author_name: str
    rating: int
    comment: str
    created_at: datetime


class PublicSite(BaseModel):
    id: str
    name: str


class PublicReviewsResponse(BaseModel):
    site: PublicSite
    reviews: list[PublicReview]
    total: int


class ReviewResponse(BaseModel):
    id: str
    site_id: str
    author_name: str
    rating: int
    comment: str
    status: str
    created_at: datetime
    updated_at: datetime | None = None


class SiteIdResponse(BaseModel):
    site_id: str


class SiteResponse(BaseModel):
    id: str
    name: str
    domain: str
    tier: str
    is_active: bool
    settings: dict[str, Any]
    review_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
