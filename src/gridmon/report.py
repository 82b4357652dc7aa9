"""Structured grid status report and its plain-text rendering."""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .metrics import AggregateMetrics
from .power_mode import PowerMode
from .recommendation import Recommendation
from .samples import DeviceKind, DeviceSample


SOLAR_LAYOUT_HINT = "SOLAR LAYOUT: 8blk apart, back-to-back pairs"
WIND_LAYOUT_HINT = "WIND LAYOUT:  9blk high, 8blk apart horizontally"


@dataclass(frozen=True)
class BatterySummary:
    count: int
    charge_percent: float  # 0-1
    stored: float          # MWh
    charging: int
    discharging: int
    peak_load: float       # MW


@dataclass(frozen=True)
class SourceSummary:
    solar_production: float
    solar_count: int
    wind_production: float
    wind_count: int
    reactor_production: float
    reactor_count: int
    active_reactors: int


@dataclass(frozen=True)
class ConnectorFlow:
    name: str
    status: str
    flow: float  # MW, positive = export

    @property
    def direction(self) -> str:
        return "EXPORT" if self.flow >= 0 else "IMPORT"

    @property
    def magnitude(self) -> float:
        return abs(self.flow)


@dataclass(frozen=True)
class GridReport:
    """Everything the display collaborator needs for one cycle."""
    grid_name: str
    timestamp: datetime
    batteries: Optional[BatterySummary]
    sources: SourceSummary
    connectors: List[ConnectorFlow]
    recommendation: Recommendation
    power_mode: Optional[PowerMode] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to a JSON-friendly dictionary."""
        return {
            "grid_name": self.grid_name,
            "timestamp": self.timestamp.isoformat(),
            "batteries": asdict(self.batteries) if self.batteries else None,
            "sources": asdict(self.sources),
            "connectors": [
                {
                    "name": c.name,
                    "status": c.status,
                    "flow": c.flow,
                    "direction": c.direction,
                    "magnitude": c.magnitude
                }
                for c in self.connectors
            ],
            "recommendation": self.recommendation.to_dict(),
            "power_mode": self.power_mode.value if self.power_mode else None
        }


def build_report(
    grid_name: str,
    timestamp: datetime,
    samples: Mapping[DeviceKind, Sequence[DeviceSample]],
    metrics: AggregateMetrics,
    recommendation: Recommendation,
    power_mode: Optional[PowerMode] = None
) -> GridReport:
    """Assemble a report from one cycle's samples and derived values."""
    batteries = None
    if metrics.battery_count:
        batteries = BatterySummary(
            count=metrics.battery_count,
            charge_percent=metrics.charge_percent,
            stored=metrics.total_stored,
            charging=metrics.charging_count,
            discharging=metrics.discharging_count,
            peak_load=metrics.peak_load
        )

    sources = SourceSummary(
        solar_production=metrics.solar_production,
        solar_count=metrics.solar_count,
        wind_production=metrics.wind_production,
        wind_count=metrics.wind_count,
        reactor_production=metrics.reactor_production,
        reactor_count=metrics.reactor_count,
        active_reactors=metrics.active_reactor_count
    )

    connectors = [
        ConnectorFlow(name=s.name, status=s.status, flow=s.output)
        for s in samples.get(DeviceKind.CONNECTOR, ())
    ]

    return GridReport(
        grid_name=grid_name,
        timestamp=timestamp,
        batteries=batteries,
        sources=sources,
        connectors=connectors,
        recommendation=recommendation,
        power_mode=power_mode
    )


def render_report(report: GridReport, layout_hints: bool = True) -> str:
    """Render a report as display text.

    With ``layout_hints`` the recommendation block ends with block spacing
    advice for new solar panels and wind turbines.
    """
    lines = [
        "=== GRID POWER STATUS ===",
        f"Grid: {report.grid_name}",
        f"Time: {report.timestamp:%H:%M:%S}",
        ""
    ]

    b = report.batteries
    if b is None:
        lines.append("No batteries found")
    else:
        lines += [
            f"BATTERIES ({b.count}):",
            f"  Charge: {b.charge_percent * 100:.1f}% ({b.stored:.0f}MWh)",
            f"  Charging: {b.charging} | Discharging: {b.discharging}",
            f"  Peak Load: {b.peak_load:.2f}MW",
            ""
        ]

    s = report.sources
    lines += [
        "SOURCES:",
        f"  Solar: {s.solar_production:.2f}MW ({s.solar_count})",
        f"  Wind:  {s.wind_production:.2f}MW ({s.wind_count})",
        f"  Reactors: {s.active_reactors}/{s.reactor_count} ({s.reactor_production:.2f}MW)",
        ""
    ]

    if report.power_mode is not None:
        lines += [f"POWER MODE: {report.power_mode.name}", ""]

    lines.append(f"CONNECTOR FLOWS ({len(report.connectors)}):")
    for c in report.connectors:
        lines += [
            f"  {c.name}: {c.status}",
            f"    {c.flow:.2f}MW -> {c.direction}",
            ""
        ]

    # Nothing to size against without batteries
    if b is not None:
        r = report.recommendation
        margin = (r.margin_factor - 1) * 100
        lines += [
            f"=== RECOMMENDATIONS ({margin:.0f}% DAY MARGIN) ===",
            f"Peak Load: {r.peak_load:.1f}MW",
            "",
            "DAYTIME (Solar):",
            f"  Current: {r.current_day_power:.1f}MW ({s.solar_count} panels)",
            f"  Target:  {r.target_day_power:.1f}MW",
            f"  ADD:     +{r.solar_units_needed} solar panels",
            "",
            "NIGHTTIME (Wind):",
            f"  Current: {r.current_wind_count} turbines (~{r.target_wind_power:.1f}MW peak)",
            f"  Target:  {r.wind_units_needed} turbines",
            f"  ADD:     +{r.wind_units_to_add} turbines"
        ]
        if layout_hints:
            lines += ["", SOLAR_LAYOUT_HINT, WIND_LAYOUT_HINT]

    return "\n".join(lines) + "\n"
