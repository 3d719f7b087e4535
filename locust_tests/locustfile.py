"""
FreightDesk Load Test: Locust Script
=====================================
Simulates data-entry operators keying month-end shipments, plus a few
admins reading the dashboard and previewing bills.

Usage:
    python manage.py seed_initial_data --demo
    locust -f locust_tests/locustfile.py --host=http://localhost:8000 \
           --users=200 --spawn-rate=20 --run-time=5m --headless

Set the IDs below from your dev DB (the demo seed prints the codes).
"""

import os
import random
import uuid
from datetime import date

from locust import HttpUser, task, between, events
from locust.exception import StopUser

CLIENT_ID  = os.environ.get("LOCUST_CLIENT_ID", "")
VENDOR_ID  = os.environ.get("LOCUST_VENDOR_ID", "")
ZONE_ID    = int(os.environ.get("LOCUST_ZONE_ID", "1"))
PINCODES   = ["110001", "400001", "560001", "793001"]
ADMIN_EMAIL    = os.environ.get("LOCUST_ADMIN_EMAIL", "admin@freightdesk.local")
ADMIN_PASSWORD = os.environ.get("LOCUST_ADMIN_PASSWORD", "Admin@12345")


def _box():
    return {
        "number_of_pieces":        random.randint(1, 10),
        "length_cm":               random.randint(10, 120),
        "breadth_cm":              random.randint(10, 80),
        "height_cm":               random.randint(10, 80),
        "actual_weight_per_piece": round(random.uniform(0.5, 40), 2),
    }


class DataEntryOperator(HttpUser):
    """Typical operator session: enter shipments, check the list, weigh boxes."""
    wait_time = between(0.5, 2.0)
    token     = None
    email     = None

    def on_start(self):
        self.email = f"op-{uuid.uuid4().hex[:10]}@freightdesk.local"
        self.client.post(
            "/api/auth/register/",
            json={"email": self.email, "name": "Load Operator", "password": "Entry@2024"},
            name="/api/auth/register/",
        )
        resp = self.client.post(
            "/api/auth/login/",
            json={"email": self.email, "password": "Entry@2024"},
            name="/api/auth/login/",
        )
        if resp.status_code == 200:
            self.token = resp.json().get("access")
        else:
            raise StopUser()

    def _headers(self):
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    # ── Tasks (weighted) ──────────────────────────────────────────────────────

    @task(5)
    def create_shipment(self):
        boxes = [_box() for _ in range(random.randint(1, 4))]
        resp = self.client.post(
            "/api/shipments/",
            json={
                "client":             CLIENT_ID,
                "vendor":             VENDOR_ID,
                "zone":               ZONE_ID,
                "wfl_number":         f"WFL{random.randint(100000, 999999)}",
                "vendor_awb_number":  f"AWB{random.randint(1000000, 9999999)}",
                "mode":               random.choice(["surface", "air"]),
                "invoice_value":      str(random.randint(1000, 200000)),
                "pin_code":           random.choice(PINCODES),
                "shipment_date":      date.today().isoformat(),
                "vendor_boxes":       boxes,
                "wfl_same_as_vendor": True,
            },
            headers=self._headers(),
            name="/api/shipments/",
        )
        if resp.status_code == 201:
            self._shipment_id = resp.json().get("id")

    @task(3)
    def my_entries(self):
        self.client.get("/api/shipments/?mine=true", headers=self._headers(), name="/api/shipments/?mine")

    @task(2)
    def weigh_boxes(self):
        self.client.post(
            "/api/weights/calculate/",
            json={"mode": "surface", "cft_factor": 6, "boxes": [_box(), _box()]},
            headers=self._headers(),
            name="/api/weights/calculate/",
        )

    @task(1)
    def health_check(self):
        self.client.get("/api/health/deep/", name="/api/health/deep/")


class BillingAdmin(HttpUser):
    """Admins: fewer users, heavier queries."""
    wait_time = between(2, 5)
    token     = None
    weight    = 1

    def on_start(self):
        resp = self.client.post(
            "/api/auth/login/",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )
        if resp.status_code == 200:
            self.token = resp.json().get("access")
        else:
            raise StopUser()

    def _h(self):
        return {"Authorization": f"Bearer {self.token}"}

    @task(3)
    def dashboard(self):
        self.client.get("/api/admin/dashboard/summary/", headers=self._h(), name="/api/admin/dashboard/")

    @task(2)
    def preview_bill(self):
        today = date.today()
        self.client.post(
            "/api/bills/preview/",
            json={"client": CLIENT_ID, "period_start": today.replace(day=1).isoformat(),
                  "period_end": today.isoformat()},
            headers=self._h(),
            name="/api/bills/preview/",
        )

    @task(1)
    def list_bills(self):
        self.client.get("/api/bills/", headers=self._h(), name="/api/bills/")


# ── Custom events for Locust reporting ────────────────────────────────────────
@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    print("\n=== FreightDesk Load Test Complete ===")
    stats = environment.stats.total
    print(f"Total requests:      {stats.num_requests}")
    print(f"Failures:            {stats.num_failures}")
    print(f"Avg response time:   {stats.avg_response_time:.0f}ms")
    print(f"95th percentile:     {stats.get_response_time_percentile(0.95):.0f}ms")
    print(f"Requests/sec:        {stats.current_rps:.1f}")
    if stats.num_failures / max(stats.num_requests, 1) > 0.01:
        print("Failure rate above 1%")
    else:
        print("System stable under load")
