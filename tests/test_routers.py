import unittest
from unittest.mock import patch

import jwt
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from stock_engine.config import Settings
from stock_engine.database.base import Base
from stock_engine.database.engine import build_engine
from stock_engine.dependencies import get_db
from stock_engine.models import import_all_models
from stock_engine.models.product import Product
from stock_engine.routers import (
    alerts_router,
    health_router,
    history_router,
    inventory_router,
    reports_router,
)


class InventoryApiTest(unittest.TestCase):
    def setUp(self):
        import_all_models()
        self.engine = build_engine("sqlite:///:memory:")
        Base.metadata.create_all(bind=self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

        db = self.Session()
        db.add_all(
            [
                Product(id=1, supplier_id=10, name="Tinta Acrilica 18L", price=200.0),
                Product(id=2, supplier_id=10, name="Argamassa AC-III", price=25.0),
            ]
        )
        db.commit()
        db.close()

        app = FastAPI()
        for router in (health_router, inventory_router, alerts_router, history_router, reports_router):
            app.include_router(router)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        self.engine.dispose()

    def _create(self, **payload):
        body = {"productId": 1, "supplierId": 10, "quantity": 30}
        body.update(payload)
        return self.client.post("/inventory", json=body)

    def test_create_and_fetch(self):
        response = self._create()
        self.assertEqual(response.status_code, 201)
        created = response.json()
        self.assertEqual(created["status"], "IN_STOCK")
        self.assertEqual(created["low_stock_threshold"], 10)
        self.assertEqual(created["available_quantity"], 30)

        fetched = self.client.get("/inventory/1/10")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["id"], created["id"])

        self.assertEqual(self._create().status_code, 409)
        self.assertEqual(self.client.get("/inventory/1/99").status_code, 404)

    def test_set_quantity_raises_alert(self):
        self._create()
        response = self.client.put("/inventory/1/10/quantity", json={"quantity": 0, "reason": "perda"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "OUT_OF_STOCK")

        alerts = self.client.get("/alerts", params={"supplier_id": 10}).json()
        self.assertEqual(len(alerts), 1)
        self.assertEqual(alerts[0]["alert_type"], "OUT_OF_STOCK")
        self.assertEqual(alerts[0]["priority"], 1)
        self.assertIn("Tinta Acrilica 18L", alerts[0]["message"])

        unread = self.client.get("/alerts/unread-count", params={"supplier_id": 10}).json()
        self.assertEqual(unread, {"unread": 1})

        resolved = self.client.post("/alerts/{}/resolve".format(alerts[0]["id"]))
        self.assertEqual(resolved.status_code, 200)
        self.assertTrue(resolved.json()["is_resolved"])
        self.assertTrue(resolved.json()["is_read"])

        self.assertEqual(self.client.post("/alerts/999/resolve").status_code, 404)
        self.assertEqual(self.client.put("/inventory/1/99/quantity", json={"quantity": 1}).status_code, 404)

    def test_adjust_and_patch(self):
        created = self._create().json()

        adjusted = self.client.post("/inventory/1/10/adjust", json={"delta": -25})
        self.assertEqual(adjusted.json()["quantity"], 5)
        self.assertEqual(adjusted.json()["status"], "LOW_STOCK")

        patched = self.client.patch(
            "/inventory/{}".format(created["id"]),
            json={"status": "BACKORDER", "location": "A-03"},
        )
        self.assertEqual(patched.status_code, 200)
        self.assertEqual(patched.json()["status"], "BACKORDER")
        self.assertEqual(patched.json()["location"], "A-03")

        self.assertEqual(self.client.patch("/inventory/999", json={"quantity": 1}).status_code, 404)

    def test_bulk_update_and_history(self):
        self._create()
        response = self.client.post(
            "/inventory/bulk-update",
            json={
                "data": [
                    {"productId": 1, "quantity": 12},
                    {"productId": 2, "quantity": 8},
                    {"productId": 77, "quantity": 1},
                ],
                "reason": "inventario mensal",
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["success_count"], 2)
        self.assertEqual(body["failure_count"], 1)
        self.assertEqual(
            [item["action"] for item in body["results"]],
            ["bulk_update", "bulk_create", None],
        )

        history = self.client.get("/inventory-history", params={"batch_id": body["batch_id"]}).json()
        self.assertEqual(len(history), 2)
        self.assertTrue(all(entry["reason"] == "inventario mensal" for entry in history))

        product_history = self.client.get("/inventory-history", params={"product_id": 1}).json()
        self.assertEqual([entry["action"] for entry in product_history], ["bulk_update", "initial"])
        self.assertEqual(product_history[0]["quantity"], -18)

        invalid = self.client.get("/inventory-history", params={"action": "deleted"})
        self.assertEqual(invalid.status_code, 400)

    def test_reports(self):
        self._create(quantity=4)
        self._create(productId=2, quantity=40)

        summary = self.client.get("/reports/stock-summary", params={"supplier_id": 10}).json()
        self.assertEqual(summary["total_products"], 2)
        self.assertEqual(summary["low_stock"], 1)
        self.assertEqual(summary["in_stock"], 1)
        self.assertAlmostEqual(summary["total_value"], 4 * 200.0 + 40 * 25.0)

        low = self.client.get("/reports/low-stock").json()
        self.assertEqual([record["product_id"] for record in low], [1])

    def test_alert_detail_and_filters(self):
        self._create(quantity=0)
        alerts = self.client.get("/alerts", params={"alert_type": "out_of_stock"}).json()
        self.assertEqual(len(alerts), 1)

        detail = self.client.get("/alerts/{}".format(alerts[0]["id"]))
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.json()["alert_type"], "OUT_OF_STOCK")
        self.assertEqual(self.client.get("/alerts/999").status_code, 404)
        self.assertEqual(self.client.get("/alerts", params={"alert_type": "EXPIRED"}).status_code, 400)

    def test_inventory_status_filter(self):
        self._create(quantity=3)
        self._create(productId=2, quantity=40)

        low = self.client.get("/inventory", params={"status": "low_stock"}).json()
        self.assertEqual([record["product_id"] for record in low], [1])
        self.assertEqual(self.client.get("/inventory", params={"status": "SOLD"}).status_code, 400)

    def test_credentials_are_enforced_when_configured(self):
        secret = "router-secret-with-enough-bytes-for-hs256"
        settings = Settings(API_KEYS="integration-key", JWT_SECRET=secret)
        token = jwt.encode({"sub": "12"}, secret, algorithm="HS256")

        with patch("stock_engine.core.security.get_settings", return_value=settings):
            self.assertEqual(self._create().status_code, 401)
            created = self.client.post(
                "/inventory",
                json={"productId": 1, "supplierId": 10, "quantity": 30},
                headers={"X-API-Key": "integration-key"},
            )
            self.assertEqual(created.status_code, 201)

            response = self.client.put(
                "/inventory/1/10/quantity",
                json={"quantity": 5},
                headers={"Authorization": "Bearer {}".format(token)},
            )
            self.assertEqual(response.status_code, 200)

        history = self.client.get("/inventory-history", params={"action": "quantity_change"}).json()
        self.assertEqual(history[0]["user_id"], 12)

    def test_health(self):
        self.assertEqual(self.client.get("/health").status_code, 200)


if __name__ == "__main__":
    unittest.main()
