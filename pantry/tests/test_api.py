import tempfile
import unittest
from datetime import timedelta
from pathlib import Path

from fastapi.testclient import TestClient
from jose import jwt

from pantry.api.api_run import create_app
from pantry.api.shell import PantryShell
from pantry.infra.Recipe_Repository import reading_from_prices, reading_from_recipes
from pantry.infra.Storage import JsonKeyValueStore
from pantry.infra.identity import GoogleIdentityProvider
from pantry.infra.scanner import ZXingScanner
from pantry.utilities.constants import SCAN_FAILED
from pantry_fakes import TODAY, FakeScanner, oversized_png


class TestPantryAPI(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.scanner = FakeScanner(result="4006381333931")
        # Default global bus so the alerts endpoint sees the events
        self.shell = PantryShell(
            JsonKeyValueStore(Path(self._tmp.name)),
            reading_from_recipes(),
            reading_from_prices(),
            GoogleIdentityProvider("client-123"),
            scanner_factory=lambda: self.scanner,
            today=lambda: TODAY,
        )
        self.client = TestClient(create_app(self.shell))

    def tearDown(self):
        self._tmp.cleanup()

    def _add(self, name, quantity="1", **extra):
        data = {"name": name, "quantity": quantity}
        data.update(extra)
        return self.client.post("/items", data=data)

    def test_home_page_empty(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("No items yet", resp.text)
        self.assertIn("client-123", resp.text)
        self.assertIn("Omelette", resp.text)

    def test_add_use_delete_via_forms(self):
        resp = self._add("Milk", "2", expirationDate="", regular="on")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Milk", resp.text)
        item_id = self.shell.state.items[0].id

        self.client.post(f"/items/{item_id}/use")
        self.client.post(f"/items/{item_id}/use")
        self.client.post(f"/items/{item_id}/use")
        self.assertEqual(self.shell.state.items[0].quantity, 0)

        data = self.client.get("/api/reminders").json()
        self.assertEqual([r["item"]["name"] for r in data["restock"]], ["Milk"])
        self.assertEqual(data["restock"][0]["cheapest"], {"store": "Costco", "price": 1.8})

        self.client.post(f"/items/{item_id}/delete")
        self.assertEqual(self.client.get("/api/inventory").json(), {"count": 0, "items": []})

    def test_form_quantity_is_lenient(self):
        self._add("Rice", "3kg")
        self._add("Beans", "lots")
        self._add("   ")
        items = self.client.get("/api/inventory").json()["items"]
        self.assertEqual([(i["name"], i["quantity"]) for i in items], [("Rice", 3), ("Beans", 0)])

    def test_expiring_reminder_on_page(self):
        soon = (TODAY + timedelta(days=3)).isoformat()
        resp = self._add("Bread", "1", expirationDate=soon)
        self.assertIn("Bread expires in 3 days", resp.text)
        self.assertIn("Target", resp.text)

    def test_cook_from_page(self):
        for name in ("bread", "peanut butter", "jelly"):
            self._add(name)
        suggestions = self.client.get("/api/recipes/suggestions").json()
        sandwich = next(r for r in suggestions["recipes"] if r["recipe"]["name"] == "Peanut Butter Sandwich")
        self.assertTrue(sandwich["cookable"])
        self.assertGreaterEqual(suggestions["count"], 1)

        resp = self.client.post("/recipes/Peanut Butter Sandwich/cook")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([i.quantity for i in self.shell.state.items], [0, 0, 0])

    def test_cook_unknown_recipe(self):
        self.assertEqual(self.client.post("/recipes/Lasagna/cook").status_code, 404)

    def test_recipe_detail(self):
        resp = self.client.get("/recipe/guacamole")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Mash avocado flesh.", resp.text)
        self.assertIn("(missing)", resp.text)
        self.assertEqual(self.client.get("/recipe/nothing").status_code, 404)

    def test_json_add_item(self):
        resp = self.client.post("/api/inventory", json={"name": "Eggs", "quantity": 12, "expirationDate": "2024-03-20"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["expirationDate"], "2024-03-20")
        self.assertEqual(self.client.post("/api/inventory", json={"name": " "}).status_code, 400)
        self.assertEqual(self.client.post("/api/inventory", json={"name": "X", "expirationDate": "soon"}).status_code, 422)

    def test_cheapest_price(self):
        self.assertEqual(self.client.get("/api/prices/Eggs").json()["cheapest"], {"store": "Walmart", "price": 2.3})
        self.assertIsNone(self.client.get("/api/prices/saffron").json()["cheapest"])

    def test_google_sign_in_and_out(self):
        token = jwt.encode({"name": "Ada", "email": "ada@example.com", "sub": "7"}, "k", algorithm="HS256")
        resp = self.client.post("/auth/google", data={"credential": token, "g_csrf_token": "x"})
        self.assertIn("Signed in as Ada", resp.text)
        resp = self.client.post("/auth/signout")
        self.assertIn("Sign in with your Google account", resp.text)

    def test_bad_credential_does_not_sign_in(self):
        resp = self.client.post("/auth/google", data={"credential": "garbage"})
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(self.shell.state.user)

    def test_scan_flow(self):
        resp = self.client.post("/scan/start")
        self.assertIn("Barcode Scanner", resp.text)
        resp = self.client.post("/scan/frame", files={"frame": ("frame.png", b"png-bytes", "image/png")})
        self.assertEqual(resp.json()["code"], "4006381333931")
        page = self.client.get("/").text
        self.assertIn('value="4006381333931"', page)
        self._add("4006381333931", barcode="4006381333931")
        self.assertEqual(self.shell.state.items[0].barcode, "4006381333931")
        self.assertIsNone(self.shell.state.scan.code)

    def test_scan_start_keeps_typed_fields(self):
        resp = self.client.post("/scan/start", data={"name": "Jam", "quantity": "3", "expirationDate": "2024-03-20", "regular": "on"})
        self.assertIn('value="Jam"', resp.text)
        self.assertIn('value="3"', resp.text)
        self.assertIn('value="2024-03-20"', resp.text)
        self.assertIn('id="regular" class="mr-2" checked', resp.text)

    def test_oversized_frame_ends_scan(self):
        self.shell._scanner_factory = ZXingScanner
        self.client.post("/scan/start")
        resp = self.client.post("/scan/frame", files={"frame": ("frame.png", oversized_png(), "image/png")})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"code": None, "status": SCAN_FAILED, "scanning": False})

    def test_long_scanned_text_is_added(self):
        url = "https://example.com/products/" + "x" * 120
        self._add(url, barcode=url)
        self.assertEqual(self.shell.state.items[0].name, url)
        self.assertEqual(self.shell.state.items[0].barcode, url)

    def test_scan_stop(self):
        self.client.post("/scan/start")
        resp = self.client.post("/scan/stop")
        self.assertNotIn("Barcode Scanner", resp.text)
        frame = self.client.post("/scan/frame", files={"frame": ("frame.png", b"png-bytes", "image/png")}).json()
        self.assertIsNone(frame["code"])
        self.assertEqual(self.scanner.frames, [])

    def test_alerts_feed(self):
        cursor = self.client.get("/api/pantry/alerts").json()["next_cursor"]
        self._add("Bread", "1", regular="on")
        self.client.post(f"/items/{self.shell.state.items[0].id}/use")
        events = self.client.get("/api/pantry/alerts", params={"since": cursor}).json()["events"]
        self.assertEqual([(e["type"], e["name"]) for e in events], [("pantry.restock", "Bread")])
        self.assertEqual(events[0]["store"], "Target")
