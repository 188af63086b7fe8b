"""
Storefront Gateway Load Tests

Read traffic through the gateway plus background health polling.

Usage:
    # Web UI mode
    locust -f load_tests/locustfile.py --host=http://localhost:3003

    # Headless mode (100 users, 10 users/sec spawn rate, 5 min run)
    locust -f load_tests/locustfile.py --host=http://localhost:3003 \
        --headless -u 100 -r 10 -t 5m

    # Catalogue reads only
    locust -f load_tests/locustfile.py --host=http://localhost:3003 \
        --headless -u 50 -r 5 -t 2m --tags catalogue
"""

import random

from locust import HttpUser, task, between, tag, events
from locust.runners import MasterRunner, LocalRunner


class Config:
    API_PREFIX = "/api"
    RESOURCES = ["users", "products", "orders"]
    # Gateway-origin failures when a backend is down or slow
    GATEWAY_ERRORS = (502, 503)


class GatewayReader(HttpUser):
    """
    Client browsing the storefront through the gateway.

    Counts 502/503 separately so backend outages show up as their own
    failure class in the report.
    """

    wait_time = between(0.5, 2)

    def _get_resource(self, resource: str):
        with self.client.get(
            f"{Config.API_PREFIX}/{resource}",
            name=f"GET /api/{resource}",
            catch_response=True
        ) as response:
            if response.status_code == 200:
                try:
                    payload = response.json()
                except ValueError:
                    response.failure("Response was not JSON")
                    return
                if isinstance(payload, list):
                    response.success()
                else:
                    response.failure(f"Expected a JSON array, got {type(payload).__name__}")
            elif response.status_code in Config.GATEWAY_ERRORS:
                response.failure(f"Upstream unavailable ({response.status_code})")
            else:
                response.failure(f"Status {response.status_code}: {response.text}")

    @tag("catalogue")
    @task(4)
    def list_products(self):
        self._get_resource("products")

    @tag("catalogue")
    @task(2)
    def list_users(self):
        self._get_resource("users")

    @tag("orders")
    @task(2)
    def list_orders(self):
        self._get_resource("orders")

    @tag("mixed")
    @task(1)
    def random_resource(self):
        self._get_resource(random.choice(Config.RESOURCES))

    @tag("errors")
    @task(1)
    def unknown_resource(self):
        """Unknown resources must be 404 whatever the backends are doing."""
        with self.client.get(
            f"{Config.API_PREFIX}/unknownthing",
            name="GET /api/[unknown]",
            catch_response=True
        ) as response:
            if response.status_code == 404:
                response.success()
            else:
                response.failure(f"Expected 404, got {response.status_code}")

    @tag("health")
    @task(1)
    def health(self):
        """Background health monitoring."""
        self.client.get("/health", name="Health")


# Event handlers for reporting
@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    """Called when test starts."""
    if isinstance(environment.runner, (MasterRunner, LocalRunner)):
        print("=" * 60)
        print("Storefront Gateway Load Test Starting")
        print("=" * 60)
        print(f"Target host: {environment.host}")
        print("=" * 60)


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """Called when test stops."""
    if isinstance(environment.runner, (MasterRunner, LocalRunner)):
        print("=" * 60)
        print("Load Test Complete")
        print("=" * 60)
