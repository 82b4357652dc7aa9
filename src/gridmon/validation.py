"""Validation utilities for the grid power monitor."""

import math
from typing import Any, Optional, Union, Type, Tuple

from .exceptions import ValidationTypeError, ValidationRangeError

class Validator:
    """Base validator class."""
    
    @staticmethod
    def validate_type(value: Any, expected_type: Union[Type, Tuple[Type, ...]]) -> None:
        """Validate value type."""
        if isinstance(value, bool) and bool not in _as_tuple(expected_type):
            raise ValidationTypeError(
                f"Expected type {_type_names(expected_type)}, got bool"
            )
        if not isinstance(value, expected_type):
            raise ValidationTypeError(
                f"Expected type {_type_names(expected_type)}, got {type(value).__name__}"
            )

    @staticmethod
    def validate_range(
        value: Union[int, float],
        min_value: Optional[Union[int, float]] = None,
        max_value: Optional[Union[int, float]] = None
    ) -> None:
        """Validate numeric range."""
        if min_value is not None and value < min_value:
            raise ValidationRangeError(f"Value {value} is below minimum {min_value}")
        
        if max_value is not None and value > max_value:
            raise ValidationRangeError(f"Value {value} exceeds maximum {max_value}")

    @staticmethod
    def validate_finite(value: float) -> None:
        """Reject NaN and infinite readings."""
        if not math.isfinite(value):
            raise ValidationRangeError(f"Value {value} is not finite")

class ReadingValidator(Validator):
    """Validator for device readings."""
    
    @staticmethod
    def validate_flow(output: float) -> None:
        """Validate a signed power flow in MW."""
        Validator.validate_type(output, (int, float))
        Validator.validate_finite(output)
    
    @staticmethod
    def validate_energy(energy: float) -> None:
        """Validate a stored or capacity energy value in MWh."""
        Validator.validate_type(energy, (int, float))
        Validator.validate_finite(energy)
        Validator.validate_range(energy, min_value=0)
    
    @staticmethod
    def validate_storage(stored: float, capacity: float) -> None:
        """Validate that stored energy fits within capacity."""
        if stored > capacity:
            raise ValidationRangeError(
                f"Stored energy {stored} exceeds capacity {capacity}"
            )

class PlanningValidator(Validator):
    """Validator for recommendation inputs."""
    
    @staticmethod
    def validate_power(power: float) -> None:
        """Validate a non-negative power value."""
        Validator.validate_type(power, (int, float))
        Validator.validate_finite(power)
        Validator.validate_range(power, min_value=0)
    
    @staticmethod
    def validate_unit_output(per_unit: float) -> None:
        """Validate a per-unit nameplate output."""
        Validator.validate_type(per_unit, (int, float))
        Validator.validate_finite(per_unit)
        if per_unit <= 0:
            raise ValidationRangeError(f"Per-unit output must be positive, got {per_unit}")
    
    @staticmethod
    def validate_count(count: int) -> None:
        """Validate a device count."""
        Validator.validate_type(count, int)
        Validator.validate_range(count, min_value=0)

def _as_tuple(expected_type: Union[Type, Tuple[Type, ...]]) -> Tuple[Type, ...]:
    return expected_type if isinstance(expected_type, tuple) else (expected_type,)

def _type_names(expected_type: Union[Type, Tuple[Type, ...]]) -> str:
    return " or ".join(t.__name__ for t in _as_tuple(expected_type))
