"""Custom exception hierarchy for playwright-computed-role."""

from typing import Optional, Any, Dict


class ComputedRoleError(Exception):
    """Base exception for all playwright-computed-role errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotInitializedError(ComputedRoleError):
    """Raised when ComputedRole methods are called before initialization."""

    def __init__(self):
        super().__init__(
            "ComputedRole not initialized. Call init() before using other methods.",
            {"error_code": "NOT_INITIALIZED"}
        )


class BrowserNotAvailableError(ComputedRoleError):
    """Raised when browser connection fails."""

    def __init__(self, reason: str):
        super().__init__(
            f"Browser not available: {reason}",
            {"reason": reason, "error_code": "BROWSER_NOT_AVAILABLE"}
        )


class ConfigurationError(ComputedRoleError):
    """Raised when configuration is invalid."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid configuration: {reason}",
            {"reason": reason, "error_code": "CONFIGURATION_ERROR"}
        )


class SelectorParseError(ComputedRoleError):
    """Raised when a query payload cannot be parsed."""

    def __init__(self, selector: str, reason: str):
        super().__init__(
            f"Cannot parse selector {selector!r}: {reason}",
            {"selector": selector, "reason": reason, "error_code": "SELECTOR_PARSE_ERROR"}
        )


class UnknownSelectorEngineError(ComputedRoleError):
    """Raised when a selector names an engine that was never registered."""

    def __init__(self, engine: str):
        super().__init__(
            f"Unknown selector engine: {engine}",
            {"engine": engine, "error_code": "UNKNOWN_SELECTOR_ENGINE"}
        )


class InitializationError(ComputedRoleError):
    """Raised when installing interception or registering an engine fails."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Initialization step '{operation}' failed: {reason}",
            {"operation": operation, "reason": reason, "error_code": "INITIALIZATION_ERROR"}
        )


class InvalidStateError(ComputedRoleError):
    """Raised when a document operation is not allowed in the node's current state."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Cannot {operation}: {reason}",
            {"operation": operation, "reason": reason, "error_code": "INVALID_STATE"}
        )


class SnapshotError(ComputedRoleError):
    """Raised when a page snapshot cannot be captured or rebuilt."""

    def __init__(self, reason: str):
        super().__init__(
            f"Snapshot failed: {reason}",
            {"reason": reason, "error_code": "SNAPSHOT_ERROR"}
        )
