"""Custom exceptions for the grid power monitor."""

class GridMonitorError(Exception):
    """Base exception for grid monitor errors."""
    pass

class ConfigurationError(GridMonitorError):
    """Exception raised for configuration errors."""
    pass

class ValidationError(GridMonitorError):
    """Base exception for validation errors."""
    pass

class ValidationTypeError(ValidationError):
    """Exception raised for type validation errors."""
    pass

class ValidationRangeError(ValidationError):
    """Exception raised for range validation errors."""
    pass

class ComputationError(GridMonitorError):
    """Exception raised when metrics or decisions cannot be computed."""
    pass

class CollaboratorError(GridMonitorError):
    """Exception raised when an external collaborator fails."""
    pass

class InventoryUnavailableError(CollaboratorError):
    """Exception raised when the device inventory cannot be read."""
    pass

class DisplayWriteError(CollaboratorError):
    """Exception raised when the report cannot be written to its display."""
    pass

class ActuationError(CollaboratorError):
    """Exception raised when a power intent cannot be applied."""
    pass

class DeviceUnavailableError(CollaboratorError):
    """Exception raised by a device handle that cannot be read this cycle."""
    pass
