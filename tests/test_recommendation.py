"""Tests for the recommendation engine."""

import sys
from pathlib import Path
import unittest

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gridmon.config import RecommendationConfig
from gridmon.exceptions import ValidationRangeError
from gridmon.metrics import AggregateMetrics, aggregate_metrics
from gridmon.recommendation import recommend, recommend_from_metrics, units_for


class TestRecommend(unittest.TestCase):
    """Test suite for recommend."""

    def test_solar_scenario(self):
        rec = recommend(peak_load=2.0, current_solar_production=1.0, current_wind_count=0)
        self.assertAlmostEqual(rec.target_day_power, 3.0)
        self.assertEqual(rec.solar_units_needed, 20)

    def test_wind_scenario(self):
        rec = recommend(peak_load=1.2, current_solar_production=0.0, current_wind_count=1)
        self.assertEqual(rec.wind_units_needed, 3)
        self.assertEqual(rec.wind_units_to_add, 2)
        self.assertAlmostEqual(rec.target_wind_power, 1.2)

    def test_zero_peak_load_needs_nothing(self):
        rec = recommend(peak_load=0.0, current_solar_production=0.0, current_wind_count=0)
        self.assertEqual(rec.solar_units_needed, 0)
        self.assertEqual(rec.wind_units_needed, 0)
        self.assertEqual(rec.wind_units_to_add, 0)
        self.assertEqual(rec.target_day_power, 0.0)

    def test_solar_surplus_clamps_to_zero(self):
        rec = recommend(peak_load=1.0, current_solar_production=5.0, current_wind_count=0)
        self.assertEqual(rec.solar_units_needed, 0)

    def test_enough_wind_clamps_to_zero(self):
        rec = recommend(peak_load=0.8, current_solar_production=0.0, current_wind_count=10)
        self.assertEqual(rec.wind_units_needed, 2)
        self.assertEqual(rec.wind_units_to_add, 0)

    def test_ceiling_never_under_provisions(self):
        rec = recommend(peak_load=0.41, current_solar_production=0.0, current_wind_count=0)
        self.assertEqual(rec.wind_units_needed, 2)
        # 0.615 MW target / 0.1 MW per panel
        self.assertEqual(rec.solar_units_needed, 7)

    def test_float_noise_does_not_add_a_unit(self):
        self.assertEqual(units_for(1.1, 0.1), 11)
        self.assertEqual(units_for(0.7, 0.1), 7)
        self.assertEqual(units_for(-3.0, 0.1), 0)

    def test_monotonic_in_peak_load(self):
        previous = -1
        for step in range(0, 60):
            rec = recommend(peak_load=step * 0.05, current_solar_production=0.5, current_wind_count=2)
            self.assertGreaterEqual(rec.solar_units_needed, 0)
            self.assertGreaterEqual(rec.solar_units_needed, previous)
            previous = rec.solar_units_needed

    def test_idempotent(self):
        first = recommend(peak_load=2.7, current_solar_production=0.9, current_wind_count=3)
        second = recommend(peak_load=2.7, current_solar_production=0.9, current_wind_count=3)
        self.assertEqual(first, second)

    def test_constants_are_overridable(self):
        config = RecommendationConfig(margin_factor=2.0, solar_unit_output=0.5, wind_unit_output=1.0)
        rec = recommend(peak_load=2.0, current_solar_production=1.0, current_wind_count=0, config=config)
        self.assertAlmostEqual(rec.target_day_power, 4.0)
        self.assertEqual(rec.solar_units_needed, 6)
        self.assertEqual(rec.wind_units_needed, 2)
        self.assertEqual(rec.margin_factor, 2.0)

    def test_invalid_inputs_rejected(self):
        with self.assertRaises(ValidationRangeError):
            recommend(peak_load=-1.0, current_solar_production=0.0, current_wind_count=0)
        with self.assertRaises(ValidationRangeError):
            recommend(peak_load=1.0, current_solar_production=0.0, current_wind_count=-1)
        with self.assertRaises(ValidationRangeError):
            recommend(
                peak_load=1.0, current_solar_production=0.0, current_wind_count=0,
                config=RecommendationConfig(solar_unit_output=0.0)
            )


class TestRecommendFromMetrics(unittest.TestCase):
    """Recommendations fed from aggregated metrics."""

    def test_no_batteries_means_no_additions(self):
        metrics = aggregate_metrics({})
        rec = recommend_from_metrics(metrics)
        self.assertEqual(rec.peak_load, 0.0)
        self.assertEqual(rec.solar_units_needed, 0)
        self.assertEqual(rec.wind_units_to_add, 0)

    def test_uses_solar_production_and_wind_count(self):
        metrics = AggregateMetrics(peak_load=2.0, solar_production=1.0, wind_count=1)
        rec = recommend_from_metrics(metrics)
        self.assertEqual(rec.solar_units_needed, 20)
        self.assertEqual(rec.current_wind_count, 1)
        self.assertEqual(rec.wind_units_to_add, 4)
        self.assertEqual(rec.current_day_power, 1.0)


if __name__ == "__main__":
    unittest.main()
