"""staybot - browser workflow for searching, editing and reserving stays."""

import importlib as _importlib
from typing import TYPE_CHECKING, Any

__version__ = "1.0.0"

if TYPE_CHECKING:
    from .core.config.settings import StayBotSettings as StayBotSettings
    from .core.config.settings import get_settings as get_settings
    from .core.logger import setup_logging as setup_logging
    from .models import BookingParameters as BookingParameters
    from .models import ListingSummary as ListingSummary
    from .resilience import ResilientActionExecutor as ResilientActionExecutor
    from .resilience import SynchronizationEngine as SynchronizationEngine
    from .services.booking.booking_workflow import SearchReserveWorkflow as SearchReserveWorkflow
    from .services.browser_manager import BrowserManager as BrowserManager
    from .services.service_context import InteractionServiceFactory as InteractionServiceFactory
    from .utils.url_codec import UrlStateCodec as UrlStateCodec

# Explicit lazy-loading map: name -> (module_path, attribute_name)
_LAZY_MODULE_MAP = {
    # Core
    "StayBotSettings": ("staybot.core.config.settings", "StayBotSettings"),
    "get_settings": ("staybot.core.config.settings", "get_settings"),
    "setup_logging": ("staybot.core.logger", "setup_logging"),
    # Models
    "BookingParameters": ("staybot.models", "BookingParameters"),
    "ListingSummary": ("staybot.models", "ListingSummary"),
    # Resilience
    "SynchronizationEngine": ("staybot.resilience", "SynchronizationEngine"),
    "ResilientActionExecutor": ("staybot.resilience", "ResilientActionExecutor"),
    # Services
    "BrowserManager": ("staybot.services.browser_manager", "BrowserManager"),
    "InteractionServiceFactory": ("staybot.services.service_context", "InteractionServiceFactory"),
    "SearchReserveWorkflow": ("staybot.services.booking.booking_workflow", "SearchReserveWorkflow"),
    # Utils
    "UrlStateCodec": ("staybot.utils.url_codec", "UrlStateCodec"),
}

__all__ = list(_LAZY_MODULE_MAP.keys())


def __getattr__(name: str) -> Any:
    """Lazy import with explicit mapping - importlib based."""
    if name in _LAZY_MODULE_MAP:
        module_path, attr_name = _LAZY_MODULE_MAP[name]
        module = _importlib.import_module(module_path)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
