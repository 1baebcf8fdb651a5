"""Core modules: errors, results, logging and configuration."""

from .exceptions import (
    ConfigurationError,
    ElementNotFoundError,
    ExtractionError,
    NavigationExhaustedError,
    StaleReferenceError,
    StayBotError,
    UnsupportedOperationError,
    ValidationError,
    WaitTimeoutError,
    WorkflowError,
)
from .result import Failure, Result, Success, err, ok

__all__ = [
    "StayBotError",
    "WaitTimeoutError",
    "ElementNotFoundError",
    "StaleReferenceError",
    "ValidationError",
    "NavigationExhaustedError",
    "UnsupportedOperationError",
    "ExtractionError",
    "ConfigurationError",
    "WorkflowError",
    "Result",
    "Success",
    "Failure",
    "ok",
    "err",
]
