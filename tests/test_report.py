"""Tests for report assembly and rendering."""

import sys
from pathlib import Path
from datetime import datetime
import unittest

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gridmon.metrics import aggregate_metrics
from gridmon.power_mode import PowerMode
from gridmon.recommendation import recommend_from_metrics
from gridmon.report import ConnectorFlow, build_report, render_report
from gridmon.samples import ChargeState, DeviceKind, DeviceSample


class TestReport(unittest.TestCase):
    """Test suite for build_report and render_report."""

    def setUp(self):
        self.timestamp = datetime(2024, 5, 1, 14, 30, 5)
        self.samples = {
            DeviceKind.BATTERY: (
                DeviceSample(
                    kind=DeviceKind.BATTERY, output=2.0, capacity=4.0, stored=3.0,
                    charge_state=ChargeState.DISCHARGING
                ),
            ),
            DeviceKind.SOLAR: (DeviceSample(kind=DeviceKind.SOLAR, output=1.0),),
            DeviceKind.WIND: (DeviceSample(kind=DeviceKind.WIND, output=0.3),),
            DeviceKind.REACTOR: (
                DeviceSample(kind=DeviceKind.REACTOR, output=0.5),
                DeviceSample(kind=DeviceKind.REACTOR, output=0.0, functional=False),
            ),
            DeviceKind.CONNECTOR: (
                DeviceSample(kind=DeviceKind.CONNECTOR, output=-0.5, name="Dock A", status="Connected"),
                DeviceSample(kind=DeviceKind.CONNECTOR, output=0.0, name="Dock B", status="Unconnected"),
            ),
        }
        self.metrics = aggregate_metrics(self.samples)
        self.recommendation = recommend_from_metrics(self.metrics)

    def build(self, samples=None, mode=None):
        samples = samples if samples is not None else self.samples
        metrics = aggregate_metrics(samples)
        return build_report(
            grid_name="Outpost",
            timestamp=self.timestamp,
            samples=samples,
            metrics=metrics,
            recommendation=recommend_from_metrics(metrics),
            power_mode=mode
        )

    def test_summaries(self):
        report = self.build()
        self.assertEqual(report.batteries.count, 1)
        self.assertAlmostEqual(report.batteries.charge_percent, 0.75)
        self.assertAlmostEqual(report.batteries.peak_load, 2.0)
        self.assertEqual(report.batteries.discharging, 1)
        self.assertEqual(report.sources.reactor_count, 2)
        self.assertEqual(report.sources.active_reactors, 1)
        self.assertAlmostEqual(report.sources.reactor_production, 0.5)

    def test_connector_flows(self):
        report = self.build()
        self.assertEqual(len(report.connectors), 2)
        dock_a, dock_b = report.connectors
        self.assertEqual(dock_a.direction, "IMPORT")
        self.assertEqual(dock_a.magnitude, 0.5)
        self.assertEqual(dock_b.direction, "EXPORT")
        self.assertEqual(ConnectorFlow("x", "", 1.25).direction, "EXPORT")

    def test_render(self):
        text = render_report(self.build(mode=PowerMode.SURPLUS))
        self.assertIn("=== GRID POWER STATUS ===", text)
        self.assertIn("Grid: Outpost", text)
        self.assertIn("Time: 14:30:05", text)
        self.assertIn("BATTERIES (1):", text)
        self.assertIn("Charge: 75.0% (3MWh)", text)
        self.assertIn("Peak Load: 2.00MW", text)
        self.assertIn("Solar: 1.00MW (1)", text)
        self.assertIn("Reactors: 1/2", text)
        self.assertIn("POWER MODE: SURPLUS", text)
        self.assertIn("  Dock A: Connected", text)
        self.assertIn("-0.50MW -> IMPORT", text)
        self.assertIn("=== RECOMMENDATIONS (50% DAY MARGIN) ===", text)
        self.assertIn("ADD:     +20 solar panels", text)
        self.assertIn("Target:  5 turbines", text)
        self.assertIn("ADD:     +4 turbines", text)
        self.assertIn("\n\nSOLAR LAYOUT: 8blk apart, back-to-back pairs\n", text)
        self.assertTrue(text.endswith("WIND LAYOUT:  9blk high, 8blk apart horizontally\n"))

    def test_render_without_layout_hints(self):
        text = render_report(self.build(), layout_hints=False)
        self.assertNotIn("LAYOUT", text)
        self.assertTrue(text.endswith("ADD:     +4 turbines\n"))

    def test_render_without_batteries(self):
        samples = {DeviceKind.SOLAR: (DeviceSample(kind=DeviceKind.SOLAR, output=0.2),)}
        report = self.build(samples=samples)
        self.assertIsNone(report.batteries)

        text = render_report(report)
        self.assertIn("No batteries found", text)
        self.assertNotIn("RECOMMENDATIONS", text)
        self.assertNotIn("POWER MODE", text)
        self.assertNotIn("LAYOUT", text)
        self.assertIn("CONNECTOR FLOWS (0):", text)

    def test_to_dict(self):
        data = self.build(mode=PowerMode.REACTOR_ASSIST).to_dict()
        self.assertEqual(data["grid_name"], "Outpost")
        self.assertEqual(data["timestamp"], "2024-05-01T14:30:05")
        self.assertEqual(data["power_mode"], "reactor_assist")
        self.assertEqual(data["connectors"][0]["direction"], "IMPORT")
        self.assertEqual(data["recommendation"]["solar_units_needed"], 20)
        self.assertEqual(data["batteries"]["count"], 1)


if __name__ == "__main__":
    unittest.main()
