"""Custom exceptions for the kube bridge."""


class KubeBridgeError(Exception):
    """Base exception for all kube bridge errors."""

    def __init__(self, message: str, details: str = None):
        """Initialize the exception.

        Args:
            message: Main error message
            details: Additional details or suggestions
        """
        self.message = message
        self.details = details
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the complete error message.

        Returns:
            Formatted error message with details
        """
        if self.details:
            return f"{self.message}\n\nDetails: {self.details}"
        return self.message


class ConfigurationError(KubeBridgeError):
    """Exception raised for configuration errors."""

    pass


class SnapshotError(KubeBridgeError):
    """Exception raised when a node or pod snapshot cannot be read."""

    pass


class KubernetesError(KubeBridgeError):
    """Exception raised for Kubernetes API errors."""

    pass
