import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from reviews.api import analytics_router, register_error_handlers, review_router, site_router, widget_router

OWNER = {"X-User-Id": "owner-1"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(review_router)
    app.include_router(site_router)
    app.include_router(widget_router)
    app.include_router(analytics_router)
    register_error_handlers(app)
    return TestClient(app)

@pytest.fixture()
def site_id(client):
    response = client.post("/sites", json={"name": "Corner Coffee", "domain": "coffee.example.com"}, headers=OWNER)
    assert response.status_code == 201
    return response.json()["site_id"]


@pytest.fixture()
def premium_site_id(client, site_id):
    response = client.put(f"/sites/{site_id}/plan", json={"tier": "PREMIUM"}, headers=OWNER)
    assert response.status_code == 200
    return site_id
