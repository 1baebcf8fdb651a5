"""Synchronization and resilient UI actions.

- SynchronizationEngine: polls a Condition within a WaitSpec budget
- ResilientActionExecutor: click, fallback click, retried typing, stepper clicks
- Conditions: ElementVisible, ElementClickable, CountAtLeast, CustomPredicate, PageReady
"""

from staybot.resilience.actions import ResilientActionExecutor, classify_driver_error
from staybot.resilience.conditions import (
    Condition,
    CountAtLeast,
    CustomPredicate,
    ElementClickable,
    ElementVisible,
    PageReady,
)
from staybot.resilience.synchronization import SynchronizationEngine

__all__ = [
    "SynchronizationEngine",
    "ResilientActionExecutor",
    "classify_driver_error",
    "Condition",
    "ElementVisible",
    "ElementClickable",
    "CountAtLeast",
    "CustomPredicate",
    "PageReady",
]
