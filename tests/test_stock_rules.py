import unittest

from stock_engine.core.stock_rules import (
    available_quantity,
    base_status,
    effective_status,
    resolve_status_override,
    urgency_ratio,
)


class StockRulesTest(unittest.TestCase):
    def test_base_status_boundaries(self):
        cases = [
            (-3, 10, "OUT_OF_STOCK"),
            (0, 10, "OUT_OF_STOCK"),
            (1, 10, "LOW_STOCK"),
            (10, 10, "LOW_STOCK"),
            (11, 10, "IN_STOCK"),
            (5, 0, "IN_STOCK"),
        ]
        for quantity, threshold, expected in cases:
            with self.subTest(quantity=quantity, threshold=threshold):
                self.assertEqual(base_status(quantity, threshold), expected)

    def test_override_wins_over_quantity(self):
        self.assertEqual(effective_status(0, 10, "DISCONTINUED"), "DISCONTINUED")
        self.assertEqual(effective_status(50, 10, "BACKORDER"), "BACKORDER")
        self.assertEqual(effective_status(50, 10, None), "IN_STOCK")

    def test_resolve_status_override(self):
        self.assertEqual(resolve_status_override("discontinued"), "DISCONTINUED")
        self.assertIsNone(resolve_status_override("in_stock", "BACKORDER"))
        self.assertEqual(resolve_status_override(None, "BACKORDER"), "BACKORDER")
        self.assertEqual(resolve_status_override("bogus", "BACKORDER"), "BACKORDER")

    def test_available_quantity_is_floored(self):
        self.assertEqual(available_quantity(10, 4), 6)
        self.assertEqual(available_quantity(3, 8), 0)

    def test_urgency_ratio_handles_zero_threshold(self):
        self.assertEqual(urgency_ratio(4, 0), 4)
        self.assertAlmostEqual(urgency_ratio(2, 8), 0.25)


if __name__ == "__main__":
    unittest.main()
