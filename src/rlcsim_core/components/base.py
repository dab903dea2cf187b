# src/rlcsim_core/components/base.py

import logging
import inspect
import math
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional, Type

import numpy as np
import pint

from ..units import ureg, Quantity
from .capabilities import (
    ComponentCapability, TCapability, IVoltageContributor, IStateCommitter
)
from .exceptions import ComponentError


logger = logging.getLogger(__name__)


def _validate_and_get_positive_magnitude(
    value: Any,
    component_name: str,
    param_name: str,
    expected_unit: str
) -> float:
    """
    A centralized, stateless utility to enforce all physical constraints on a
    component parameter. Accepts a plain number (already in `expected_unit`), a unit
    string or a `pint.Quantity`, and returns a real, finite, strictly positive float
    in `expected_unit`. Any violation raises a canonical `ComponentError`.
    """
    try:
        if isinstance(value, bool):
            raise TypeError("a boolean is not a physical quantity")
        if isinstance(value, (int, float, np.floating, np.integer)):
            qty = Quantity(float(value), expected_unit)
        elif isinstance(value, str):
            qty = Quantity(value)
            if qty.dimensionless:
                qty = Quantity(qty.magnitude, expected_unit)
        elif isinstance(value, Quantity):
            qty = value
        else:
            raise TypeError(f"unsupported value type '{type(value).__name__}'")

        if not qty.is_compatible_with(expected_unit):
            raise pint.DimensionalityError(qty.units, ureg.Unit(expected_unit))

        raw_mag = qty.to(expected_unit).magnitude
        if np.iscomplexobj(raw_mag):
            raise ComponentError(
                component_name=component_name,
                details=f"Parameter '{param_name}' must be real, but received a complex value.",
                parameter_name=param_name,
                user_input=value,
            )
        magnitude = float(raw_mag)
    except ComponentError:
        raise
    except (pint.DimensionalityError, pint.UndefinedUnitError, TypeError, ValueError) as e:
        raise ComponentError(
            component_name=component_name,
            details=f"Validation failed for parameter '{param_name}': {e}",
            parameter_name=param_name,
            user_input=value,
        ) from e

    if not math.isfinite(magnitude) or magnitude <= 0.0:
        raise ComponentError(
            component_name=component_name,
            details=f"Parameter '{param_name}' must be finite and strictly positive, got {magnitude} {expected_unit}.",
            parameter_name=param_name,
            user_input=value,
        )
    return magnitude


class ComponentBase(ABC):
    """
    The abstract base class for the passive elements of the series loop.

    It owns identity (a stable display name), validated parameter values and the
    queryable capability system. Every element can report a voltage and can be asked
    to commit; elements without memory simply do not provide `IStateCommitter`, and
    their `commit` is a no-op.
    """
    component_type_str: ClassVar[str] = "BaseComponent"

    def __init__(self, instance_id: str, parameters: Dict[str, Any]):
        """
        Args:
            instance_id: The display name of this instance (e.g., 'R1').
            parameters: Raw values for every parameter named by `declare_parameters()`.
                        Values may be floats in SI units, unit strings or Quantities.
        """
        self.instance_id: str = instance_id
        self.component_type: str = type(self).component_type_str

        declared = type(self).declare_parameters()
        missing = [name for name in declared if name not in parameters]
        if missing:
            raise ComponentError(
                component_name=instance_id,
                details=f"Missing required parameter(s): {missing}.",
                parameter_name=missing[0],
            )
        unknown = [name for name in parameters if name not in declared]
        if unknown:
            raise ComponentError(
                component_name=instance_id,
                details=f"Unknown parameter(s) {unknown}. Declared parameters are {list(declared)}.",
                parameter_name=unknown[0],
            )

        self.parameters: Dict[str, float] = {
            name: _validate_and_get_positive_magnitude(parameters[name], instance_id, name, unit)
            for name, unit in declared.items()
        }

        self._capabilities: Dict[Type[ComponentCapability], ComponentCapability] = {}
        logger.debug(f"Initialized {type(self).__name__} '{self.name}' with {self.parameters}")

    @property
    def name(self) -> str:
        """The stable display name used for output columns."""
        return self.instance_id

    @classmethod
    def declare_capabilities(cls) -> Dict[Type[ComponentCapability], Type]:
        """
        Maps each capability Protocol to the nested `@provides` class implementing it.

        The class hierarchy is walked from the most derived class upwards, so an
        implementation in a subclass shadows the one it inherits.
        """
        found: Dict[Type[ComponentCapability], Type] = {}
        for klass in cls.__mro__:
            for _, attr in inspect.getmembers(klass, inspect.isclass):
                protocol = getattr(attr, "_implements_capability", None)
                if protocol is not None:
                    found.setdefault(protocol, attr)
        return found

    def get_capability(self, capability_type: Type[TCapability]) -> Optional[TCapability]:
        """
        Returns this element's implementation of `capability_type` (e.g.
        `IStateCommitter`), or `None` if the element does not provide it. The
        implementation object is created on first request and reused afterwards.
        """
        impl = self._capabilities.get(capability_type)
        if impl is None:
            impl_class = type(self).declare_capabilities().get(capability_type)
            if impl_class is None:
                return None
            impl = self._capabilities[capability_type] = impl_class()
        return impl

    # --- Uniform interface used by the branch solver and the engine ---

    def voltage(self, trial_current: float, timestep: float) -> float:
        """Voltage across the element for `trial_current`, from the last committed state."""
        return self.get_capability(IVoltageContributor).get_voltage(self, trial_current, timestep)

    def commit(self, accepted_current: float, timestep: float) -> None:
        """Makes the accepted current permanent in the element's memory, if it has any."""
        committer = self.get_capability(IStateCommitter)
        if committer is not None:
            committer.commit_state(self, accepted_current, timestep)

    def reset(self) -> None:
        """Restores the element's initial condition, if it has any state."""
        committer = self.get_capability(IStateCommitter)
        if committer is not None:
            committer.reset_state(self)

    @classmethod
    @abstractmethod
    def declare_parameters(cls) -> Dict[str, str]:
        """Declare parameter names and the units their values are expressed in."""
        pass

    def __str__(self) -> str:
        return f"{type(self).__name__}('{self.name}')"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}', parameters={self.parameters})"


# --- Element type registry ---

COMPONENT_REGISTRY: Dict[str, Type[ComponentBase]] = {}


def _check_parameter_declaration(cls: Type[ComponentBase]) -> None:
    try:
        declared = cls.declare_parameters()
    except Exception as e:
        raise TypeError(f"'{cls.__name__}.declare_parameters()' raised while being checked: {e}") from e
    if not isinstance(declared, dict) or not all(
        isinstance(name, str) and isinstance(unit, str) for name, unit in declared.items()
    ):
        raise TypeError(
            f"Element class '{cls.__name__}' violates API contract: declare_parameters() must "
            f"map parameter names to unit strings, got {declared!r}."
        )
    for name, unit in declared.items():
        try:
            ureg.Unit(unit)
        except (pint.UndefinedUnitError, ValueError) as e:
            raise TypeError(
                f"Element class '{cls.__name__}' violates API contract: parameter '{name}' "
                f"declares unknown unit '{unit}'."
            ) from e


def register_component(type_str: str):
    """
    Class decorator adding an element class to `COMPONENT_REGISTRY` under `type_str`.

    The class is checked when it is defined: it must derive from `ComponentBase`,
    declare its parameters with valid units, and provide `IVoltageContributor`.
    """
    def decorator(cls: Type[ComponentBase]) -> Type[ComponentBase]:
        if not (isinstance(cls, type) and issubclass(cls, ComponentBase)):
            raise TypeError(f"'{getattr(cls, '__name__', cls)}' must derive from ComponentBase to be registered.")
        _check_parameter_declaration(cls)
        if IVoltageContributor not in cls.declare_capabilities():
            raise TypeError(
                f"Element class '{cls.__name__}' violates API contract: it does not provide "
                f"the IVoltageContributor capability."
            )
        if type_str in COMPONENT_REGISTRY:
            logger.warning(f"Element type '{type_str}' re-registered; {COMPONENT_REGISTRY[type_str].__name__} is replaced by {cls.__name__}.")
        cls.component_type_str = type_str
        COMPONENT_REGISTRY[type_str] = cls
        logger.debug(f"Registered element type '{type_str}' -> {cls.__name__}")
        return cls
    return decorator
