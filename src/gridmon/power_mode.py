"""
Power mode selection for generation sources.

The decision is re-evaluated from scratch every cycle. Conditions are checked
in priority order and the first match wins:

1. SURPLUS: production exceeds consumption by the surplus factor
2. BATTERY_ASSIST: batteries hold more than the target recharge fraction
3. REACTOR_ASSIST: everything else

Without a dead-band this is a pure classification and may flip between modes
on consecutive cycles when a metric sits on a threshold.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional
import logging

from .config import PowerModeConfig
from .metrics import AggregateMetrics


class PowerMode(str, Enum):
    """Which generation sources the grid should run on."""
    SURPLUS = "surplus"
    BATTERY_ASSIST = "battery_assist"
    REACTOR_ASSIST = "reactor_assist"


@dataclass(frozen=True)
class PowerIntent:
    """Actuation intent handed to the device controller."""
    batteries_enabled: bool
    reactors_enabled: bool


MODE_INTENTS: Dict[PowerMode, PowerIntent] = {
    PowerMode.SURPLUS: PowerIntent(batteries_enabled=True, reactors_enabled=False),
    PowerMode.BATTERY_ASSIST: PowerIntent(batteries_enabled=True, reactors_enabled=False),
    PowerMode.REACTOR_ASSIST: PowerIntent(batteries_enabled=True, reactors_enabled=True),
}


def intent_for(mode: PowerMode) -> PowerIntent:
    """Get the actuation intent for a mode."""
    return MODE_INTENTS[mode]


def classify_power_mode(
    metrics: AggregateMetrics,
    config: Optional[PowerModeConfig] = None,
    previous: Optional[PowerMode] = None
) -> PowerMode:
    """Classify the grid into exactly one power mode.

    ``previous`` only matters when ``config.deadband`` is positive: the mode
    held last cycle then stays selected while its condition holds against a
    threshold relaxed by the dead-band.
    """
    config = config or PowerModeConfig()

    surplus_factor = config.surplus_factor
    target_recharge = config.target_recharge
    if config.deadband > 0:
        if previous == PowerMode.SURPLUS:
            surplus_factor -= config.deadband
        elif previous == PowerMode.BATTERY_ASSIST:
            # Empty batteries always fall back to reactors
            target_recharge = max(target_recharge - config.deadband, 0.0)

    if metrics.production_total > metrics.consumption_total * surplus_factor:
        return PowerMode.SURPLUS
    if metrics.charge_percent > target_recharge:
        return PowerMode.BATTERY_ASSIST
    return PowerMode.REACTOR_ASSIST


@dataclass(frozen=True)
class PowerDecision:
    """Outcome of one controller evaluation."""
    mode: PowerMode
    intent: PowerIntent
    previous_mode: PowerMode
    changed: bool


class PowerModeController:
    """Tracks the selected power mode across cycles.

    Before the first evaluation the controller reports REACTOR_ASSIST, the
    conservative choice. It never touches devices itself.
    """

    INITIAL_MODE = PowerMode.REACTOR_ASSIST

    def __init__(self, config: Optional[PowerModeConfig] = None):
        self.config = config or PowerModeConfig()
        self.logger = logging.getLogger("gridmon.power_mode")
        self._current_mode = self.INITIAL_MODE
        self._evaluations = 0

    @property
    def current_mode(self) -> PowerMode:
        """Mode selected by the last evaluation."""
        return self._current_mode

    @property
    def current_intent(self) -> PowerIntent:
        return intent_for(self._current_mode)

    @property
    def evaluation_count(self) -> int:
        return self._evaluations

    def decide(self, metrics: AggregateMetrics) -> PowerDecision:
        """Classify metrics without recording the result."""
        mode = classify_power_mode(metrics, self.config, previous=self._current_mode)
        return PowerDecision(
            mode=mode,
            intent=intent_for(mode),
            previous_mode=self._current_mode,
            changed=mode != self._current_mode
        )

    def commit(self, decision: PowerDecision) -> None:
        """Record a decision as the current mode."""
        if decision.changed:
            self.logger.info(
                f"Power mode changed: {decision.previous_mode.value} -> {decision.mode.value}"
            )
        self._current_mode = decision.mode
        self._evaluations += 1

    def evaluate(self, metrics: AggregateMetrics) -> PowerDecision:
        """Classify metrics and record the selected mode."""
        decision = self.decide(metrics)
        self.commit(decision)
        return decision

    def reset(self) -> None:
        """Return to the initial mode."""
        self._current_mode = self.INITIAL_MODE
        self._evaluations = 0
