"""
Configuration package for the grid power monitor.
Provides immutable, validatable configuration with YAML/JSON persistence.
"""

from .base import (
    BaseConfig,
    ConfigFormat,
    ValidationLevel,
    ConfigValidationResult
)

from .monitor_config import (
    RecommendationConfig,
    PowerModeConfig,
    ReportConfig,
    MonitoringConfig,
    MonitorConfig
)

__all__ = [
    # Base configuration classes
    "BaseConfig",
    "ConfigFormat",
    "ValidationLevel",
    "ConfigValidationResult",
    
    # Configuration sections
    "RecommendationConfig",
    "PowerModeConfig",
    "ReportConfig",
    "MonitoringConfig",
    
    # Main configuration class
    "MonitorConfig"
]
