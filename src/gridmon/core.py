"""Core power monitor: one snapshot-then-decide cycle per invocation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Mapping, Optional, Sequence, Tuple
import logging
import threading

from .config import MonitorConfig
from .exceptions import (
    ActuationError, CollaboratorError, ComputationError, DisplayWriteError,
    GridMonitorError, InventoryUnavailableError
)
from .metrics import AggregateMetrics, aggregate_metrics
from .power_mode import PowerDecision, PowerIntent, PowerModeController
from .recommendation import Recommendation, recommend_from_metrics
from .report import GridReport, build_report, render_report
from .samples import DeviceHandle, DeviceKind, collect_samples


class DeviceInventory(ABC):
    """Discovers the devices belonging to the monitored grid."""

    @abstractmethod
    def discover(self) -> Mapping[DeviceKind, Sequence[Optional[DeviceHandle]]]:
        """Return handles grouped by kind, already filtered to this grid."""
        pass

    @property
    def grid_name(self) -> Optional[str]:
        """Display name of the grid, if the inventory knows it."""
        return None


class StaticInventory(DeviceInventory):
    """Inventory backed by a fixed mapping of handles."""

    def __init__(
        self,
        devices: Mapping[DeviceKind, Sequence[Optional[DeviceHandle]]],
        grid_name: Optional[str] = None
    ):
        self._devices = {kind: list(handles) for kind, handles in devices.items()}
        self._grid_name = grid_name

    def discover(self) -> Mapping[DeviceKind, Sequence[Optional[DeviceHandle]]]:
        return {kind: tuple(handles) for kind, handles in self._devices.items()}

    @property
    def grid_name(self) -> Optional[str]:
        return self._grid_name

    def add(self, kind: DeviceKind, handle: DeviceHandle) -> None:
        """Add a device to the inventory."""
        self._devices.setdefault(kind, []).append(handle)

    def remove(self, kind: DeviceKind, handle: DeviceHandle) -> None:
        """Remove a device from the inventory."""
        handles = self._devices.get(kind, [])
        if handle in handles:
            handles.remove(handle)


class ReportSink(ABC):
    """Writes rendered report text to a display surface."""

    @abstractmethod
    def write(self, display_name: str, text: str) -> None:
        pass


class MemorySink(ReportSink):
    """Keeps the last text written to each display."""

    def __init__(self):
        self.displays: Dict[str, str] = {}

    def write(self, display_name: str, text: str) -> None:
        self.displays[display_name] = text


class Actuator(ABC):
    """Applies a power intent to the grid's batteries and reactors."""

    @abstractmethod
    def apply(self, intent: PowerIntent) -> None:
        pass


class CycleStatus(str, Enum):
    """Outcome of one evaluation cycle."""
    OK = "ok"
    SKIPPED = "skipped"
    COLLABORATOR_UNAVAILABLE = "collaborator_unavailable"
    COMPUTATION_ERROR = "computation_error"


@dataclass(frozen=True)
class CycleResult:
    """Everything produced by one cycle."""
    status: CycleStatus
    timestamp: datetime
    metrics: Optional[AggregateMetrics] = None
    recommendation: Optional[Recommendation] = None
    report: Optional[GridReport] = None
    decision: Optional[PowerDecision] = None
    status_line: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CycleStatus.OK


class TickGate:
    """Opens once every ``interval`` host ticks."""

    def __init__(self, interval: int = 60):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.interval = interval
        self._count = 0

    def tick(self) -> bool:
        """Count a tick; True when a cycle is due."""
        self._count += 1
        if self._count < self.interval:
            return False
        self._count = 0
        return True


class PowerMonitor:
    """Aggregates grid telemetry and drives recommendations and power modes.

    Without an actuator the monitor is advisory only: it reports but never
    selects a power mode.
    """

    def __init__(
        self,
        config: MonitorConfig,
        inventory: DeviceInventory,
        sink: Optional[ReportSink] = None,
        actuator: Optional[Actuator] = None
    ):
        """Initialize monitor with configuration and collaborators."""
        self.config = config
        self.inventory = inventory
        self.sink = sink
        self.actuator = actuator
        self.controller = PowerModeController(config.power_mode)
        self.gate = TickGate(config.report.update_interval)
        self.logger = logging.getLogger("gridmon.monitor")

        self.last_result: Optional[CycleResult] = None
        self._cycle_lock = threading.Lock()
        self._last_failure: Optional[Tuple[str, str]] = None

    @property
    def advisory_only(self) -> bool:
        return self.actuator is None

    def tick(self, now: Optional[datetime] = None) -> Optional[CycleResult]:
        """Advance the tick gate and run a cycle when it opens."""
        if not self.gate.tick():
            return None
        return self.run_cycle(now)

    def run_cycle(self, now: Optional[datetime] = None) -> CycleResult:
        """Run one evaluation cycle.

        Never raises for collaborator or computation failures; the returned
        CycleResult carries the status instead. A call made while another
        cycle is in flight is skipped.
        """
        timestamp = now or datetime.now()

        if not self._cycle_lock.acquire(blocking=False):
            self.logger.debug("Cycle already in progress, skipping")
            return CycleResult(status=CycleStatus.SKIPPED, timestamp=timestamp)

        try:
            result = self._run_cycle(timestamp)
        finally:
            self._cycle_lock.release()

        self.last_result = result
        return result

    def _run_cycle(self, timestamp: datetime) -> CycleResult:
        # Snapshot
        try:
            inventory = self.inventory.discover()
            samples = collect_samples(inventory, self.config.report.output_scale)
        except GridMonitorError as e:
            if isinstance(e, CollaboratorError):
                return self._collaborator_failure(timestamp, e)
            return self._computation_failure(timestamp, e)
        except Exception as e:
            return self._collaborator_failure(timestamp, InventoryUnavailableError(str(e)))

        # Decide
        try:
            metrics = aggregate_metrics(samples)
            recommendation = recommend_from_metrics(metrics, self.config.recommendation)
            decision = None if self.advisory_only else self.controller.decide(metrics)
            report = build_report(
                grid_name=self.inventory.grid_name or self.config.report.grid_name,
                timestamp=timestamp,
                samples=samples,
                metrics=metrics,
                recommendation=recommendation,
                power_mode=decision.mode if decision else None
            )
            text = render_report(report, layout_hints=self.config.report.layout_hints)
        except GridMonitorError as e:
            return self._computation_failure(timestamp, e)
        except (ArithmeticError, ValueError) as e:
            error = ComputationError(f"{type(e).__name__}: {e}")
            return self._computation_failure(timestamp, error)

        # Act
        if decision is not None:
            try:
                self.actuator.apply(decision.intent)
            except Exception as e:
                return self._collaborator_failure(timestamp, ActuationError(str(e)))
            self.controller.commit(decision)

        if self.sink is not None:
            try:
                self.sink.write(self.config.report.display_name, text)
            except Exception as e:
                return self._collaborator_failure(
                    timestamp, DisplayWriteError(str(e)), write_status=False
                )

        if self._last_failure is not None:
            self.logger.info(f"Power monitor recovered after {self._last_failure[0]}")
            self._last_failure = None

        return CycleResult(
            status=CycleStatus.OK,
            timestamp=timestamp,
            metrics=metrics,
            recommendation=recommendation,
            report=report,
            decision=decision
        )

    def _collaborator_failure(
        self,
        timestamp: datetime,
        error: Exception,
        write_status: bool = True
    ) -> CycleResult:
        status_line = f"POWER MONITOR DEGRADED ({timestamp:%H:%M:%S}): {type(error).__name__}: {error}"
        self._log_failure(error, status_line, logging.WARNING)

        if write_status and self.sink is not None:
            try:
                self.sink.write(self.config.report.display_name, status_line + "\n")
            except Exception as e:
                self.logger.debug(f"Could not write degraded status: {e}")

        return CycleResult(
            status=CycleStatus.COLLABORATOR_UNAVAILABLE,
            timestamp=timestamp,
            status_line=status_line,
            error=str(error)
        )

    def _computation_failure(self, timestamp: datetime, error: Exception) -> CycleResult:
        message = f"Power monitor computation failed: {type(error).__name__}: {error}"
        self._log_failure(error, message, logging.ERROR)
        return CycleResult(
            status=CycleStatus.COMPUTATION_ERROR,
            timestamp=timestamp,
            status_line=message,
            error=str(error)
        )

    def _log_failure(self, error: Exception, message: str, level: int) -> None:
        """Log a failure once; repeats on consecutive cycles go to debug."""
        key = (type(error).__name__, str(error))
        if key == self._last_failure:
            self.logger.debug(message)
        else:
            self.logger.log(level, message)
        self._last_failure = key
