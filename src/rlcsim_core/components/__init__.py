# src/rlcsim_core/components/__init__.py
import logging
logger = logging.getLogger(__name__)

# Import base first to define registry and decorator
from .base import ComponentBase, COMPONENT_REGISTRY, register_component
from .capabilities import ComponentCapability, IVoltageContributor, IStateCommitter, provides
from .exceptions import ComponentError
# Import concrete elements to trigger registration
from .elements import Resistor, Capacitor, Inductor

logger.debug(f"Available component types: {list(COMPONENT_REGISTRY.keys())}")

__all__ = [
    "ComponentBase",
    "COMPONENT_REGISTRY",
    "register_component",
    "ComponentCapability",
    "IVoltageContributor",
    "IStateCommitter",
    "provides",
    "Resistor",
    "Capacitor",
    "Inductor",
    "ComponentError",
]
