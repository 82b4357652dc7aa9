"""
Basic usage example of the grid power monitor.
This example demonstrates:
- Building a device inventory
- Running evaluation cycles on a tick schedule
- Reading the recommendation and the selected power mode
"""

from gridmon import (
    Actuator, ChargeState, DeviceKind, MemorySink, MonitorConfig,
    PowerIntent, PowerMonitor, StaticDevice, StaticInventory
)
from gridmon.config import ReportConfig


class PrintingActuator(Actuator):
    """Actuator that prints the intent instead of switching blocks."""

    def apply(self, intent: PowerIntent) -> None:
        print(f"Batteries enabled: {intent.batteries_enabled}, "
              f"reactors enabled: {intent.reactors_enabled}")


def main():
    config = MonitorConfig(report=ReportConfig(grid_name="Mining Outpost", update_interval=1))

    inventory = StaticInventory({
        DeviceKind.BATTERY: [
            StaticDevice("Large Battery 1", output=1.2e6, capacity=3.0, stored=1.1,
                         charge_state=ChargeState.DISCHARGING),
            StaticDevice("Large Battery 2", output=-0.3e6, capacity=3.0, stored=2.0,
                         charge_state=ChargeState.CHARGING),
        ],
        DeviceKind.SOLAR: [StaticDevice(f"Solar Panel {i}", output=0.08e6) for i in range(6)],
        DeviceKind.WIND: [StaticDevice("Wind Turbine 1", output=0.25e6)],
        DeviceKind.REACTOR: [
            StaticDevice("Small Reactor", output=0.0, functional=False),
        ],
        DeviceKind.CONNECTOR: [
            StaticDevice("Ship Dock", output=-0.15e6, status="Connected"),
        ],
    })

    sink = MemorySink()
    monitor = PowerMonitor(config, inventory, sink=sink, actuator=PrintingActuator())

    result = monitor.tick()
    print(sink.displays[config.report.display_name])

    if result is not None and result.ok:
        rec = result.recommendation
        print(f"Add {rec.solar_units_needed} solar panels and "
              f"{rec.wind_units_to_add} wind turbines")
        print(f"Power mode: {result.decision.mode.value}")


if __name__ == "__main__":
    main()
