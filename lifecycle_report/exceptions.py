"""Custom exceptions for lifecycle-report."""


class LifecycleReportError(Exception):
    """Base exception for all lifecycle-report operations."""


class ConfigurationError(LifecycleReportError):
    """Raised when configuration validation fails."""


class AuthenticationError(LifecycleReportError):
    """Raised when an access token cannot be acquired."""


class APIError(LifecycleReportError):
    """Raised when API operations fail."""


class FileProcessingError(LifecycleReportError):
    """Raised when file operations fail."""
