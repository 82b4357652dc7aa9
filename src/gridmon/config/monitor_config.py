"""
Main monitor configuration class that integrates all configuration sections.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import logging

from .base import BaseConfig, ConfigValidationResult, ValidationLevel


@dataclass(frozen=True)
class RecommendationConfig(BaseConfig):
    """Capacity planning constants."""
    margin_factor: float = 1.5      # 1.5x peak load = 50% buffer
    solar_unit_output: float = 0.1  # MW per panel
    wind_unit_output: float = 0.4   # MW per turbine

    def validate(self) -> ConfigValidationResult:
        """Validate recommendation configuration."""
        result = ConfigValidationResult(is_valid=True)

        if self.margin_factor <= 0:
            result.add_error(f"Margin factor must be > 0, got {self.margin_factor}")
        elif self.margin_factor < 1:
            result.add_warning(
                f"Margin factor {self.margin_factor} sizes generation below peak load"
            )

        if self.solar_unit_output <= 0:
            result.add_error(f"Solar unit output must be > 0, got {self.solar_unit_output}")

        if self.wind_unit_output <= 0:
            result.add_error(f"Wind unit output must be > 0, got {self.wind_unit_output}")

        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "margin_factor": self.margin_factor,
            "solar_unit_output": self.solar_unit_output,
            "wind_unit_output": self.wind_unit_output
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RecommendationConfig':
        """Create from dictionary."""
        return cls(
            margin_factor=data.get("margin_factor", 1.5),
            solar_unit_output=data.get("solar_unit_output", 0.1),
            wind_unit_output=data.get("wind_unit_output", 0.4)
        )


@dataclass(frozen=True)
class PowerModeConfig(BaseConfig):
    """Thresholds for the power mode decision."""
    surplus_factor: float = 1.2
    target_recharge: float = 0.5  # fraction of total capacity
    deadband: float = 0.0         # 0 disables hysteresis

    def validate(self) -> ConfigValidationResult:
        """Validate power mode configuration."""
        result = ConfigValidationResult(is_valid=True)

        if self.surplus_factor <= 0:
            result.add_error(f"Surplus factor must be > 0, got {self.surplus_factor}")

        if not 0 <= self.target_recharge <= 1:
            result.add_error(
                f"Target recharge must be between 0 and 1, got {self.target_recharge}"
            )

        if self.deadband < 0:
            result.add_error(f"Dead-band must be >= 0, got {self.deadband}")
        elif self.deadband > 0:
            if self.deadband >= self.surplus_factor:
                result.add_error(
                    f"Dead-band {self.deadband} must be smaller than surplus factor "
                    f"{self.surplus_factor}"
                )
            if self.deadband >= self.target_recharge:
                result.add_error(
                    f"Dead-band {self.deadband} must be smaller than target recharge "
                    f"{self.target_recharge}"
                )
            result.add_warning(
                "Dead-band enabled: power mode now depends on the previous cycle"
            )

        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "surplus_factor": self.surplus_factor,
            "target_recharge": self.target_recharge,
            "deadband": self.deadband
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PowerModeConfig':
        """Create from dictionary."""
        return cls(
            surplus_factor=data.get("surplus_factor", 1.2),
            target_recharge=data.get("target_recharge", 0.5),
            deadband=data.get("deadband", 0.0)
        )


@dataclass(frozen=True)
class ReportConfig(BaseConfig):
    """Report, display and scheduling settings."""
    grid_name: str = "Grid"
    display_name: str = "[Power Status]"
    update_interval: int = 60      # host ticks between cycles
    output_scale: float = 1e-6     # raw device output (W) -> MW
    layout_hints: bool = True      # block spacing advice under recommendations

    def validate(self) -> ConfigValidationResult:
        """Validate report configuration."""
        result = ConfigValidationResult(is_valid=True)

        if not self.grid_name:
            result.add_error("Grid name cannot be empty")

        if not self.display_name:
            result.add_warning("Display name is empty; every text panel will match")

        if self.update_interval <= 0:
            result.add_error(f"Update interval must be > 0, got {self.update_interval}")

        if self.output_scale <= 0:
            result.add_error(f"Output scale must be > 0, got {self.output_scale}")

        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "grid_name": self.grid_name,
            "display_name": self.display_name,
            "update_interval": self.update_interval,
            "output_scale": self.output_scale,
            "layout_hints": self.layout_hints
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReportConfig':
        """Create from dictionary."""
        return cls(
            grid_name=data.get("grid_name", "Grid"),
            display_name=data.get("display_name", "[Power Status]"),
            update_interval=data.get("update_interval", 60),
            output_scale=data.get("output_scale", 1e-6),
            layout_hints=data.get("layout_hints", True)
        )


@dataclass(frozen=True)
class MonitoringConfig:
    """Configuration for logging."""
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> ConfigValidationResult:
        """Validate monitoring configuration."""
        result = ConfigValidationResult(is_valid=True)

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level not in valid_log_levels:
            result.add_error(f"Invalid log level: {self.log_level}")

        return result


@dataclass(frozen=True)
class MonitorConfig(BaseConfig):
    """Main monitor configuration class."""

    recommendation: RecommendationConfig = field(default_factory=RecommendationConfig)
    power_mode: PowerModeConfig = field(default_factory=PowerModeConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    validation_level: ValidationLevel = ValidationLevel.STRICT
    config_version: str = "1.0"

    def __post_init__(self):
        """Validate and set up logging after dataclass creation."""
        self.validate_or_raise(self.validation_level)
        self._setup_logging()

    def _setup_logging(self):
        """Setup logging based on monitoring configuration."""
        logger = logging.getLogger("gridmon")
        level = getattr(logging, self.monitoring.log_level, logging.INFO)
        logger.setLevel(level)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # Console handler
        if not any(type(h) is logging.StreamHandler for h in logger.handlers):
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        # File handler if specified
        if self.monitoring.log_file:
            known = {
                getattr(h, "baseFilename", None)
                for h in logger.handlers
                if isinstance(h, logging.FileHandler)
            }
            file_handler = logging.FileHandler(self.monitoring.log_file)
            if file_handler.baseFilename in known:
                file_handler.close()
            else:
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)

    def validate(self) -> ConfigValidationResult:
        """Validate the entire monitor configuration."""
        result = ConfigValidationResult(is_valid=True)

        if not self.config_version:
            result.add_error("Config version cannot be empty")

        components = [
            ("recommendation", self.recommendation),
            ("power_mode", self.power_mode),
            ("report", self.report),
            ("monitoring", self.monitoring)
        ]

        # Prefix errors and warnings with component name
        for component_name, component in components:
            result.extend(component.validate(), prefix=f"{component_name}: ")

        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "recommendation": self.recommendation.to_dict(),
            "power_mode": self.power_mode.to_dict(),
            "report": self.report.to_dict(),
            "monitoring": {
                "log_level": self.monitoring.log_level,
                "log_file": self.monitoring.log_file
            },
            "validation_level": self.validation_level.value,
            "config_version": self.config_version
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MonitorConfig':
        """Create configuration from dictionary."""
        monitoring_data = data.get("monitoring", {})
        monitoring = MonitoringConfig(
            log_level=monitoring_data.get("log_level", "INFO"),
            log_file=monitoring_data.get("log_file")
        )

        return cls(
            recommendation=RecommendationConfig.from_dict(data.get("recommendation", {})),
            power_mode=PowerModeConfig.from_dict(data.get("power_mode", {})),
            report=ReportConfig.from_dict(data.get("report", {})),
            monitoring=monitoring,
            validation_level=ValidationLevel(data.get("validation_level", "strict")),
            config_version=data.get("config_version", "1.0")
        )
