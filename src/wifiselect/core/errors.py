"""Custom exception hierarchy for wifi-select.

Provides structured error handling with severity levels and context.
"""

from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels for logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class WifiSelectError(Exception):
    """Base exception for all wifi-select errors.

    Attributes:
        message: Human-readable error message
        details: Additional context as key-value pairs
        severity: Error severity level
    """

    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
        }


class MissingDependencyError(WifiSelectError):
    """A required external tool is not installed.

    Always fatal: nothing can be scanned or connected without it.
    """

    severity = ErrorSeverity.CRITICAL

    def __init__(self, tool: str) -> None:
        super().__init__(f"{tool} is not installed.", details={"tool": tool})
        self.tool = tool


class ConfigurationError(WifiSelectError):
    """Configuration validation or loading error.

    Raised when:
    - Config file is malformed
    - Values fail validation
    """

    pass


class BackendError(WifiSelectError):
    """The network backend reported a failure.

    Attributes:
        reason: Failure text reported by the underlying tool
    """

    def __init__(
        self,
        message: str,
        reason: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.reason = reason


class ScanError(WifiSelectError):
    """No usable networks were found by a scan."""

    pass


class InvalidSelectionError(WifiSelectError):
    """Interactive choice is non-numeric or outside the listed range."""

    severity = ErrorSeverity.WARNING


class NetworkNotFoundError(WifiSelectError):
    """A named network is not among the currently visible networks.

    Attributes:
        ssid: The requested SSID
        visible: Sorted, unique SSIDs that are visible right now
    """

    severity = ErrorSeverity.WARNING

    def __init__(self, ssid: str, visible: list[str]) -> None:
        super().__init__(f"Network '{ssid}' not found.")
        self.ssid = ssid
        self.visible = visible


class ConnectError(WifiSelectError):
    """Bringing up a connection failed.

    Raised when:
    - The password was rejected
    - The access point went away mid-connect
    - NetworkManager refused the request
    """

    def __init__(self, ssid: str, message: str, reason: str = "") -> None:
        details = {"reason": reason} if reason else None
        super().__init__(message, details)
        self.ssid = ssid
        self.reason = reason


class SavedProfileError(ConnectError):
    """A previously saved connection profile failed to come up."""

    pass
