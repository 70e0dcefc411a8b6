"""Widget visitor load test scenarios.

Visitors hammer the public widget endpoints of a single site. Every read
records a widget view, so this is the write-heaviest public path.
"""

from locust import HttpUser, between, task

from loadtests.data_generators import owner_id, review_data, site_data
from loadtests.helpers.response import describe_failure
from loadtests.helpers.state import WidgetState


class WidgetVisitorUser(HttpUser):
    wait_time = between(0.5, 2)

    def on_start(self):
        self.state = WidgetState(owner_id=owner_id())
        resp = self.client.post(
            "/sites",
            json=site_data(),
            headers={"X-User-Id": self.state.owner_id},
            name="POST /sites",
        )
        if resp.status_code == 201:
            self.state.site_id = resp.json()["site_id"]

    @task(10)
    def load_widget(self):
        if not self.state.site_id:
            return
        self.client.get(f"/widget/{self.state.site_id}/settings", name="GET /widget/{id}/settings")
        self.client.get(
            f"/widget/{self.state.site_id}/reviews",
            headers={"Referer": "https://loadtest.example.com/"},
            name="GET /widget/{id}/reviews",
        )

    @task(1)
    def submit_review(self):
        if not self.state.site_id:
            return
        with self.client.post(
            f"/widget/{self.state.site_id}/reviews",
            json=review_data(),
            catch_response=True,
            name="POST /widget/{id}/reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.submitted += 1
            elif resp.status_code == 400:
                # The FREE plan's monthly quota runs out under sustained load
                resp.success()
            else:
                resp.failure(f"Widget submission failed: {describe_failure(resp)}")
