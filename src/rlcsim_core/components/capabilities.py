# src/rlcsim_core/components/capabilities.py
"""
Defines the capability architecture for RLCSim Core components.

Capabilities are `typing.Protocol` classes. The time-stepping engine and the branch
solver never inspect a component's concrete type; they ask a component whether it
provides a capability (e.g. `IStateCommitter`) and work with whatever object is
returned.

Key elements:
- ComponentCapability: A marker protocol for all capabilities.
- IVoltageContributor: Reports the voltage across a component for a trial current.
- IStateCommitter: Commits (and resets) the internal memory of a stateful component.
- @provides: A class decorator for declaratively registering a nested class as the
  implementation of a capability.
- TCapability: A TypeVar for precise type-hinting of capability queries.
"""

import logging
from typing import Protocol, Type, TypeVar, TYPE_CHECKING, runtime_checkable

# Use TYPE_CHECKING to import ComponentBase only for type analysis,
# preventing a circular import at runtime.
if TYPE_CHECKING:
    from .base import ComponentBase

logger = logging.getLogger(__name__)


@runtime_checkable
class ComponentCapability(Protocol):
    """
    A marker protocol for all component capabilities.
    """

    pass


TCapability = TypeVar("TCapability", bound=ComponentCapability)


@runtime_checkable
class IVoltageContributor(ComponentCapability, Protocol):
    """
    Defines the capability of a component to contribute its voltage to the
    Kirchhoff voltage sum of the series loop.

    CONTRACT:
    1.  **Read-only:** Evaluating a voltage MUST NOT change the component's state.
        The branch solver calls this many times per step with different trial
        currents, and the engine calls it once more at the accepted current.
    2.  **Total:** It MUST NOT raise for finite inputs with `timestep > 0`.
    """

    def get_voltage(
        self,
        component: "ComponentBase",
        trial_current: float,
        timestep: float,
    ) -> float:
        """
        Args:
            component: The parent component instance, holding parameters and state.
            trial_current: The branch current (A) being evaluated.
            timestep: The fixed simulation timestep (s).

        Returns:
            The voltage (V) across the component.
        """
        ...


@runtime_checkable
class IStateCommitter(ComponentCapability, Protocol):
    """
    Defines the capability of a component that carries memory between time steps.

    `commit_state` is called exactly once per accepted step, after every voltage of
    that step has been read. `reset_state` restores the initial condition and is
    called when a simulation is (re)started.
    """

    def commit_state(
        self,
        component: "ComponentBase",
        accepted_current: float,
        timestep: float,
    ) -> None:
        ...

    def reset_state(self, component: "ComponentBase") -> None:
        ...


def provides(capability_protocol: Type[ComponentCapability]):
    """
    A class decorator to register a class as an implementation for a capability.

    This decorator attaches a private attribute, `_implements_capability`, to the
    decorated class. `ComponentBase.declare_capabilities` uses this attribute for
    automatic discovery.

    Args:
        capability_protocol: The capability Protocol (e.g., IStateCommitter)
                             that this class implements.
    """

    def decorator(cls: Type) -> Type:
        if not issubclass(capability_protocol, ComponentCapability):
            raise TypeError(
                f"Decorator argument for @provides must be a ComponentCapability "
                f"Protocol, but got {capability_protocol}."
            )
        cls._implements_capability = capability_protocol
        logger.debug(
            f"Class '{cls.__name__}' registered as providing capability '{capability_protocol.__name__}'."
        )
        return cls

    return decorator
