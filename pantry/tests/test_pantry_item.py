from datetime import date
import unittest
from pantry.domain.PantryItem import PantryItem


class TestPantryItem(unittest.TestCase):

    def test_with_quantity_returns_copy(self):
        item = PantryItem("a1", "Milk", 2, date(2024, 3, 12), None, True)
        used = item.with_quantity(1)
        self.assertEqual(item.quantity, 2)
        self.assertEqual(used.quantity, 1)
        self.assertEqual(used.id, "a1")
        self.assertTrue(used.regular)

    def test_dict_uses_stored_field_names(self):
        item = PantryItem("a1", "Milk", 2, date(2024, 3, 12), "4006381333931", False)
        self.assertEqual(item.to_dict(), {
            "id": "a1",
            "name": "Milk",
            "quantity": 2,
            "expirationDate": "2024-03-12",
            "barcode": "4006381333931",
            "regular": False,
        })
        self.assertEqual(PantryItem.from_dict(item.to_dict()), item)

    def test_from_dict_without_optional_fields(self):
        item = PantryItem.from_dict({"id": "x", "name": "Salt", "quantity": 3})
        self.assertIsNone(item.expiration_date)
        self.assertIsNone(item.barcode)
        self.assertFalse(item.regular)

    def test_from_dict_accepts_timestamp(self):
        item = PantryItem.from_dict({"id": "x", "name": "Eggs", "quantity": 1,
                                     "expirationDate": "2024-03-15T00:00:00.000Z"})
        self.assertEqual(item.expiration_date, date(2024, 3, 15))

    def test_from_dict_rejects_bad_date(self):
        with self.assertRaises(ValueError):
            PantryItem.from_dict({"id": "x", "name": "Eggs", "quantity": 1, "expirationDate": "soon"})

    def test_generated_ids_are_unique(self):
        ids = {PantryItem(name="Bread").id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_matches_ignores_case(self):
        self.assertTrue(PantryItem(name="Olive Oil").matches("olive oil"))
        self.assertFalse(PantryItem(name="Olive").matches("olive oil"))
