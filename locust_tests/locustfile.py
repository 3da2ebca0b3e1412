"""
Yardline Load Test — Locust Script
===================================
Simulates a morning arrival wave: many trucks reaching the yard at once while
operators keep the queue screen open.

Usage:
    locust -f locust_tests/locustfile.py --host=http://localhost:8000 \
           --users=500 --spawn-rate=50 --run-time=5m --headless

Seed waypoints first: python manage.py seed_waypoints
"""

import random
import uuid
from locust import HttpUser, task, between, events
from locust.exception import StopUser

DESTINATIONS = ["XSP1", "XRJ1", "XCB1"]
ORIGINS      = ["CAJAMAR", "BETIM", "ARAUCARIA"]


class ArrivingDriver(HttpUser):
    """
    One truck: enroll, queue up, get a dock, unload, leave.
    Each simulated user walks the full cycle once per loop.
    """
    wait_time = between(0.5, 2.0)
    tax_id    = None
    entry_id  = None

    def on_start(self):
        self.tax_id = str(uuid.uuid4().int)[:11]
        resp = self.client.post(
            "/api/drivers/",
            json={
                "full_name":   f"Motorista {uuid.uuid4().hex[:6]}",
                "tax_id":      self.tax_id,
                "phone":       f"+55 11 9{random.randint(1000, 9999)}-{random.randint(1000, 9999)}",
                "email":       f"{self.tax_id}@example.com",
                "origin":      random.choice(ORIGINS),
                "destination": random.choice(DESTINATIONS),
            },
            name="/api/drivers/",
        )
        if resp.status_code != 201:
            raise StopUser()

    @task(3)
    def send_location(self):
        self.client.post(
            "/api/locations/",
            json={
                "driver":    self.tax_id,
                "latitude":  -23.5 + random.uniform(-0.5, 0.5),
                "longitude": -46.6 + random.uniform(-0.5, 0.5),
            },
            name="/api/locations/",
        )

    @task
    def unloading_cycle(self):
        resp = self.client.post("/api/queue/", json={"tax_id": self.tax_id}, name="/api/queue/ [admit]")
        if resp.status_code != 201:
            return
        self.entry_id = resp.json()["id"]

        self.client.get(
            "/api/realtime/token/",
            params={"client_id": self.tax_id, "entry_id": self.entry_id},
            name="/api/realtime/token/",
        )
        self.client.put(
            f"/api/queue/{self.entry_id}/dock/",
            json={"dock": f"D{random.randint(1, 12)}"},
            name="/api/queue/[id]/dock/",
        )
        self.client.put(f"/api/queue/{self.entry_id}/start/", json={}, name="/api/queue/[id]/start/")
        self.client.put(
            f"/api/queue/{self.entry_id}/finish/",
            json={
                "cage_count":   random.randint(0, 20),
                "pallet_count": random.randint(0, 30),
                "sleeve_count": random.randint(0, 10),
            },
            name="/api/queue/[id]/finish/",
        )


class YardOperator(HttpUser):
    """
    Operator screen polling the queue (fewer users, frequent reads).
    """
    wait_time = between(2, 5)
    weight    = 1

    @task(5)
    def poll_queue(self):
        self.client.get("/api/queue/", params={"status": "waiting"}, name="/api/queue/ [list]")

    @task(2)
    def dashboard(self):
        self.client.get("/api/ops/dashboard/", name="/api/ops/dashboard/")

    @task(1)
    def health_check(self):
        self.client.get("/api/health/deep/", name="/api/health/deep/")


# ── Custom events for Locust reporting ────────────────────────────────────────
@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    print("\n=== Yardline Load Test Complete ===")
    stats = environment.stats.total
    print(f"Total requests:      {stats.num_requests}")
    print(f"Failures:            {stats.num_failures}")
    print(f"Avg response time:   {stats.avg_response_time:.0f}ms")
    print(f"95th percentile:     {stats.get_response_time_percentile(0.95):.0f}ms")
    if stats.num_failures / max(stats.num_requests, 1) > 0.01:
        print("FAILURE RATE > 1%")
    else:
        print("System stable under load")
