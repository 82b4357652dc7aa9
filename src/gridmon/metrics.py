"""Grid-wide metrics aggregated from one cycle of device samples."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Sequence

import numpy as np

from .exceptions import ValidationError
from .samples import ChargeState, DeviceKind, DeviceSample


@dataclass(frozen=True)
class AggregateMetrics:
    """Totals derived from a single snapshot of the grid.

    Power values are in MW and energy values in MWh. ``charge_percent`` is a
    fraction in [0, 1].
    """
    total_capacity: float = 0.0
    total_stored: float = 0.0
    charge_percent: float = 0.0
    peak_load: float = 0.0
    production_total: float = 0.0
    consumption_total: float = 0.0
    charging_count: int = 0
    discharging_count: int = 0

    # Per-source breakdown for reporting
    solar_production: float = 0.0
    wind_production: float = 0.0
    reactor_production: float = 0.0
    battery_count: int = 0
    solar_count: int = 0
    wind_count: int = 0
    reactor_count: int = 0
    active_reactor_count: int = 0
    connector_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to a plain dictionary."""
        return asdict(self)


def _total(values) -> float:
    return float(np.sum(np.fromiter(values, dtype=float))) if values else 0.0


def aggregate_metrics(samples_by_kind: Mapping[DeviceKind, Sequence[DeviceSample]]) -> AggregateMetrics:
    """Reduce per-kind samples into grid totals.

    Non-functional devices never contribute to a sum. Production is the raw
    signed output of generation devices; consumption is the draw of
    every other kind (batteries and connectors). The two are never netted
    against each other.
    """
    for kind, samples in samples_by_kind.items():
        for sample in samples:
            if sample.kind != kind:
                raise ValidationError(
                    f"Sample '{sample.name}' of kind {sample.kind.value} listed under {kind.value}"
                )

    def working(kind: DeviceKind):
        return [s for s in samples_by_kind.get(kind, ()) if s.functional]

    batteries = working(DeviceKind.BATTERY)
    solars = working(DeviceKind.SOLAR)
    winds = working(DeviceKind.WIND)
    reactors = working(DeviceKind.REACTOR)

    total_capacity = _total([b.capacity for b in batteries if b.capacity is not None])
    total_stored = _total([b.stored for b in batteries if b.stored is not None])
    charge_percent = total_stored / total_capacity if total_capacity > 0 else 0.0

    discharging = [b for b in batteries if b.charge_state == ChargeState.DISCHARGING]
    charging = [b for b in batteries if b.charge_state == ChargeState.CHARGING]
    peak_load = _total([abs(b.output) for b in discharging])

    solar_production = _total([s.output for s in solars])
    wind_production = _total([w.output for w in winds])
    reactor_production = _total([r.output for r in reactors])

    generation = [s for kind in DeviceKind if kind.is_generation for s in working(kind)]
    loads = [s for kind in DeviceKind if not kind.is_generation for s in working(kind)]
    production_total = _total([s.output for s in generation])
    consumption_total = _total([s.draw for s in loads])

    return AggregateMetrics(
        total_capacity=total_capacity,
        total_stored=total_stored,
        charge_percent=charge_percent,
        peak_load=peak_load,
        production_total=production_total,
        consumption_total=consumption_total,
        charging_count=len(charging),
        discharging_count=len(discharging),
        solar_production=solar_production,
        wind_production=wind_production,
        reactor_production=reactor_production,
        battery_count=len(samples_by_kind.get(DeviceKind.BATTERY, ())),
        solar_count=len(samples_by_kind.get(DeviceKind.SOLAR, ())),
        wind_count=len(samples_by_kind.get(DeviceKind.WIND, ())),
        reactor_count=len(samples_by_kind.get(DeviceKind.REACTOR, ())),
        active_reactor_count=len(reactors),
        connector_count=len(samples_by_kind.get(DeviceKind.CONNECTOR, ()))
    )
