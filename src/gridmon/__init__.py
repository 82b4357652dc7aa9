"""Grid power monitor library initialization."""

from .core import (
    PowerMonitor, DeviceInventory, StaticInventory, ReportSink, MemorySink,
    Actuator, CycleStatus, CycleResult, TickGate
)
from .config import MonitorConfig
from .exceptions import GridMonitorError
from .samples import DeviceKind, ChargeState, DeviceSample, DeviceHandle, StaticDevice
from .metrics import AggregateMetrics, aggregate_metrics
from .recommendation import Recommendation, recommend, recommend_from_metrics
from .power_mode import (
    PowerMode, PowerIntent, PowerDecision, PowerModeController, classify_power_mode
)

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "PowerMonitor",
    "DeviceInventory",
    "StaticInventory",
    "ReportSink",
    "MemorySink",
    "Actuator",
    "CycleStatus",
    "CycleResult",
    "TickGate",
    "MonitorConfig",
    "GridMonitorError",
    "DeviceKind",
    "ChargeState",
    "DeviceSample",
    "DeviceHandle",
    "StaticDevice",
    "AggregateMetrics",
    "aggregate_metrics",
    "Recommendation",
    "recommend",
    "recommend_from_metrics",
    "PowerMode",
    "PowerIntent",
    "PowerDecision",
    "PowerModeController",
    "classify_power_mode"
]
