"""Capacity planning recommendations for solar and wind additions."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import numpy as np

from .config import RecommendationConfig
from .metrics import AggregateMetrics
from .validation import PlanningValidator

# Quotients are rounded to this many decimals before taking the ceiling so
# that float noise such as 1.1 / 0.1 == 11.000000000000002 does not add a unit.
_UNIT_PRECISION = 9


@dataclass(frozen=True)
class Recommendation:
    """Suggested generation additions for one cycle."""
    peak_load: float           # MW
    margin_factor: float
    target_day_power: float    # MW
    current_day_power: float   # MW of solar production
    solar_units_needed: int
    current_wind_count: int
    wind_units_needed: int
    wind_units_to_add: int
    target_wind_power: float   # MW from the recommended turbine count

    def to_dict(self) -> Dict[str, Any]:
        """Convert recommendation to a plain dictionary."""
        return asdict(self)


def units_for(power: float, per_unit: float) -> int:
    """Smallest whole number of units covering ``power`` (0 if none needed)."""
    if power <= 0:
        return 0
    quotient = round(power / per_unit, _UNIT_PRECISION)
    return int(np.ceil(quotient))


def recommend(
    peak_load: float,
    current_solar_production: float,
    current_wind_count: int,
    config: Optional[RecommendationConfig] = None
) -> Recommendation:
    """Compute how many solar and wind units to add.

    Solar is sized for daytime: peak load times the margin factor, less what
    solar already produces. Wind is sized for night: enough turbines to
    match peak load on their own.

    Args:
        peak_load: Observed peak load in MW
        current_solar_production: Current solar output in MW
        current_wind_count: Number of wind turbines already installed
        config: Planning constants (defaults to the reference values)

    Returns:
        Recommendation with non-negative unit counts
    """
    config = config or RecommendationConfig()

    PlanningValidator.validate_power(peak_load)
    PlanningValidator.validate_type(current_solar_production, (int, float))
    PlanningValidator.validate_finite(current_solar_production)
    PlanningValidator.validate_count(current_wind_count)
    PlanningValidator.validate_unit_output(config.solar_unit_output)
    PlanningValidator.validate_unit_output(config.wind_unit_output)

    target_day_power = peak_load * config.margin_factor
    solar_units_needed = units_for(
        target_day_power - current_solar_production, config.solar_unit_output
    )

    wind_units_needed = units_for(peak_load, config.wind_unit_output)
    wind_units_to_add = max(0, wind_units_needed - current_wind_count)

    return Recommendation(
        peak_load=peak_load,
        margin_factor=config.margin_factor,
        target_day_power=target_day_power,
        current_day_power=current_solar_production,
        solar_units_needed=solar_units_needed,
        current_wind_count=current_wind_count,
        wind_units_needed=wind_units_needed,
        wind_units_to_add=wind_units_to_add,
        target_wind_power=wind_units_needed * config.wind_unit_output
    )


def recommend_from_metrics(
    metrics: AggregateMetrics,
    config: Optional[RecommendationConfig] = None
) -> Recommendation:
    """Build a recommendation from aggregated metrics."""
    return recommend(
        peak_load=metrics.peak_load,
        current_solar_production=metrics.solar_production,
        current_wind_count=metrics.wind_count,
        config=config
    )
