"""Device handles and normalized telemetry samples."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Sequence, Tuple
import logging

from .exceptions import ValidationError
from .validation import ReadingValidator

logger = logging.getLogger("gridmon.samples")


class DeviceKind(str, Enum):
    """Kinds of power devices on a grid."""
    BATTERY = "battery"
    SOLAR = "solar"
    WIND = "wind"
    REACTOR = "reactor"
    CONNECTOR = "connector"

    @property
    def is_generation(self) -> bool:
        """Whether this kind produces power."""
        return self in GENERATION_KINDS


GENERATION_KINDS = frozenset({DeviceKind.SOLAR, DeviceKind.WIND, DeviceKind.REACTOR})


class ChargeState(str, Enum):
    """Battery charge direction."""
    CHARGING = "charging"
    DISCHARGING = "discharging"
    IDLE = "idle"


@dataclass(frozen=True)
class DeviceSample:
    """One device reading, normalized to MW (flow) and MWh (energy)."""
    kind: DeviceKind
    output: float  # MW, positive = export/production
    functional: bool = True
    capacity: Optional[float] = None  # MWh, batteries only
    stored: Optional[float] = None    # MWh, batteries only
    charge_state: Optional[ChargeState] = None
    name: str = ""
    status: str = ""

    def __post_init__(self):
        ReadingValidator.validate_flow(self.output)

        if self.kind != DeviceKind.BATTERY:
            if self.capacity is not None or self.stored is not None or self.charge_state is not None:
                raise ValidationError(
                    f"Storage fields are only valid for batteries, not {self.kind.value}"
                )
            return

        if self.capacity is not None:
            ReadingValidator.validate_energy(self.capacity)
        if self.stored is not None:
            ReadingValidator.validate_energy(self.stored)
        if self.capacity is not None and self.stored is not None:
            ReadingValidator.validate_storage(self.stored, self.capacity)
        if self.charge_state is None:
            object.__setattr__(self, "charge_state", ChargeState.IDLE)

    @property
    def draw(self) -> float:
        """Power drawn from the grid in MW (0 when exporting)."""
        return -self.output if self.output < 0 else 0.0


class DeviceHandle(ABC):
    """Read-only view of a physical device.

    Implementations report ``output`` in raw units (watts by default);
    ``capacity`` and ``stored`` are reported in MWh.
    """

    @property
    @abstractmethod
    def output(self) -> float:
        """Current signed power flow."""
        pass

    @property
    @abstractmethod
    def functional(self) -> bool:
        """Whether the device is working and enabled."""
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def status(self) -> str:
        return ""

    @property
    def capacity(self) -> Optional[float]:
        return None

    @property
    def stored(self) -> Optional[float]:
        return None

    @property
    def charge_state(self) -> Optional[ChargeState]:
        return None


class StaticDevice(DeviceHandle):
    """Device handle backed by fixed values."""

    def __init__(
        self,
        name: str,
        output: float,
        functional: bool = True,
        capacity: Optional[float] = None,
        stored: Optional[float] = None,
        charge_state: Optional[ChargeState] = None,
        status: str = ""
    ):
        self._name = name
        self._output = output
        self._functional = functional
        self._capacity = capacity
        self._stored = stored
        self._charge_state = charge_state
        self._status = status

    @property
    def output(self) -> float:
        return self._output

    @property
    def functional(self) -> bool:
        return self._functional

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> str:
        return self._status

    @property
    def capacity(self) -> Optional[float]:
        return self._capacity

    @property
    def stored(self) -> Optional[float]:
        return self._stored

    @property
    def charge_state(self) -> Optional[ChargeState]:
        return self._charge_state

    def __repr__(self) -> str:
        return f"StaticDevice(name={self._name!r}, output={self._output!r})"


def sample_from_handle(
    kind: DeviceKind,
    handle: DeviceHandle,
    output_scale: float = 1e-6
) -> DeviceSample:
    """Read a handle once and normalize it into a DeviceSample."""
    battery = kind == DeviceKind.BATTERY
    return DeviceSample(
        kind=kind,
        output=handle.output * output_scale,
        functional=bool(handle.functional),
        capacity=handle.capacity if battery else None,
        stored=handle.stored if battery else None,
        charge_state=handle.charge_state if battery else None,
        name=handle.name,
        status=handle.status
    )


def collect_samples(
    inventory: Mapping[DeviceKind, Sequence[Optional[DeviceHandle]]],
    output_scale: float = 1e-6
) -> Dict[DeviceKind, Tuple[DeviceSample, ...]]:
    """Snapshot every handle in the inventory.

    Missing handles (``None``) and handles that raise while being read are
    skipped. Readings that fail validation propagate as ValidationError.
    Every DeviceKind is present in the result.
    """
    samples: Dict[DeviceKind, Tuple[DeviceSample, ...]] = {}

    for kind in DeviceKind:
        collected = []
        for index, handle in enumerate(inventory.get(kind, ())):
            if handle is None:
                logger.debug(f"Skipping missing {kind.value} handle at position {index}")
                continue
            try:
                collected.append(sample_from_handle(kind, handle, output_scale))
            except ValidationError:
                raise
            except Exception as e:
                logger.debug(f"Skipping unreadable {kind.value} device: {type(e).__name__}: {e}")
        samples[kind] = tuple(collected)

    return samples
