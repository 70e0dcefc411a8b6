"""Site owner load test scenarios.

A stateful SequentialTaskSet journey through the owner dashboard. Steps
execute in order; each depends on the previous step succeeding.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import owner_id, review_data, site_data, widget_settings
from loadtests.helpers.response import describe_failure
from loadtests.helpers.state import SiteOwnerState


class SiteOwnerJourney(SequentialTaskSet):
    """Register Site -> Style Widget -> Upgrade -> Collect Reviews -> Moderate -> Analytics."""

    def on_start(self):
        self.state = SiteOwnerState(owner_id=owner_id())

    @property
    def headers(self):
        return {"X-User-Id": self.state.owner_id}

    @task
    def register_site(self):
        with self.client.post(
            "/sites",
            json=site_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /sites",
        ) as resp:
            if resp.status_code == 201:
                self.state.site_id = resp.json()["site_id"]
            else:
                resp.failure(f"Site registration failed: {describe_failure(resp)}")
                self.interrupt()

    @task
    def style_widget(self):
        with self.client.put(
            f"/sites/{self.state.site_id}/settings",
            json={"settings": widget_settings()},
            headers=self.headers,
            catch_response=True,
            name="PUT /sites/{id}/settings",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Settings update failed: {describe_failure(resp)}")

    @task
    def upgrade_plan(self):
        with self.client.put(
            f"/sites/{self.state.site_id}/plan",
            json={"tier": "PREMIUM"},
            headers=self.headers,
            catch_response=True,
            name="PUT /sites/{id}/plan",
        ) as resp:
            if resp.status_code == 200:
                self.state.tier = "PREMIUM"
            else:
                resp.failure(f"Upgrade failed: {describe_failure(resp)}")

    @task
    def collect_reviews(self):
        for _ in range(3):
            with self.client.post(
                f"/reviews/site/{self.state.site_id}",
                json=review_data(),
                catch_response=True,
                name="POST /reviews/site/{id}",
            ) as resp:
                if resp.status_code == 201:
                    self.state.review_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"Submission failed: {describe_failure(resp)}")

    @task
    def moderate(self):
        for review_id in self.state.review_ids:
            with self.client.put(
                f"/reviews/{review_id}/status",
                json={"status": "APPROVED"},
                headers=self.headers,
                catch_response=True,
                name="PUT /reviews/{id}/status",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Moderation failed: {describe_failure(resp)}")

    @task
    def view_inbox(self):
        self.client.get("/reviews/my", headers=self.headers, name="GET /reviews/my")

    @task
    def view_analytics(self):
        self.client.get("/analytics/dashboard", headers=self.headers, name="GET /analytics/dashboard")
        with self.client.get(
            f"/analytics/site/{self.state.site_id}",
            headers=self.headers,
            catch_response=True,
            name="GET /analytics/site/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Analytics failed: {describe_failure(resp)}")

    @task
    def done(self):
        self.interrupt()


class SiteOwnerUser(HttpUser):
    tasks = [SiteOwnerJourney]
    wait_time = between(1, 3)
