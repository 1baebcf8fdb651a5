"""Custom exception classes for staybot."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class StayBotError(Exception):
    """Base exception for staybot."""

    def __init__(
        self, message: str, recoverable: bool = True, details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize staybot error.

        Args:
            message: Error message
            recoverable: Whether the error is recoverable with retry
            details: Additional error details
        """
        self.message = message
        self.recoverable = recoverable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
            "timestamp": self.timestamp,
        }


class WaitTimeoutError(StayBotError):
    """A synchronization condition was not met within its budget."""

    def __init__(
        self,
        condition: str,
        elapsed: float,
        timeout: float,
        last_error: Optional[str] = None,
    ):
        """
        Initialize wait timeout error.

        Args:
            condition: Human readable description of the awaited condition
            elapsed: Seconds spent polling
            timeout: Configured budget in seconds
            last_error: Last driver error seen while evaluating, if any
        """
        self.condition = condition
        self.elapsed = elapsed
        self.timeout = timeout
        self.last_error = last_error
        message = f"Timed out after {elapsed:.2f}s waiting for {condition}"
        if last_error:
            message += f" (last error: {last_error})"
        super().__init__(
            message,
            recoverable=True,
            details={
                "condition": condition,
                "elapsed": round(elapsed, 3),
                "timeout": timeout,
                "last_error": last_error,
            },
        )


class ElementNotFoundError(StayBotError):
    """Locator resolved to nothing usable - site structure may have changed."""

    def __init__(
        self,
        locator: str,
        reason: str = "not found",
        tried_locators: Optional[List[str]] = None,
    ):
        """
        Initialize element not found error.

        Args:
            locator: Locator that failed to resolve
            reason: Structural reason ("not found", "ambiguous", ...)
            tried_locators: Every locator that was attempted
        """
        self.locator = locator
        self.reason = reason
        self.tried_locators = tried_locators or [locator]
        message = f"Element '{locator}' {reason}."
        if len(self.tried_locators) > 1:
            message += f" Tried: {', '.join(self.tried_locators)}"
        super().__init__(
            message,
            recoverable=False,
            details={"locator": locator, "reason": reason, "tried": self.tried_locators},
        )


class StaleReferenceError(StayBotError):
    """An element or page reference was invalidated mid-operation."""

    def __init__(self, locator: str, message: str = "reference is stale", attempts: int = 1):
        self.locator = locator
        self.attempts = attempts
        super().__init__(
            f"Stale reference for '{locator}': {message}",
            recoverable=True,
            details={"locator": locator, "attempts": attempts},
        )


class ValidationError(StayBotError):
    """Malformed URL, date or booking parameter."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, recoverable=False, details=details)


class NavigationExhaustedError(StayBotError):
    """Forward-only calendar search ran out of pages without finding the month."""

    def __init__(self, target_label: str, clicks: int):
        self.target_label = target_label
        self.clicks = clicks
        super().__init__(
            f"Calendar month '{target_label}' not reached after {clicks} forward clicks",
            recoverable=False,
            details={"target": target_label, "clicks": clicks},
        )


class UnsupportedOperationError(StayBotError):
    """Operation invoked for a category the page does not support."""

    def __init__(self, operation: str, category: str, page: Optional[str] = None):
        self.operation = operation
        self.category = category
        message = f"'{operation}' is not supported for {category}"
        if page:
            message += f" on {page}"
        super().__init__(
            message,
            recoverable=False,
            details={"operation": operation, "category": category, "page": page},
        )


class ExtractionError(StayBotError):
    """One result card could not be turned into a listing summary."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(
            f"Could not extract {field}: {reason}",
            recoverable=True,
            details={"field": field, "reason": reason},
        )


class ConfigurationError(StayBotError):
    """Configuration error occurred."""

    def __init__(
        self,
        message: str = "Configuration error",
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


class WorkflowError(StayBotError):
    """A workflow step could not produce the state the next step needs."""

    def __init__(self, step: str, message: str):
        self.step = step
        super().__init__(f"[{step}] {message}", recoverable=False, details={"step": step})
