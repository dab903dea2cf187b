# src/rlcsim_core/components/elements.py
"""
This module provides the concrete implementations of the three passive elements of
the series loop: Resistor, Capacitor, and Inductor.

Voltage evaluation is always a pure read of the state left by the previous commit.
The capacitor and inductor advance their memory only through `IStateCommitter`.
"""

import logging
from typing import Any, Dict

from .base import ComponentBase, register_component
from .capabilities import IVoltageContributor, IStateCommitter, provides


logger = logging.getLogger(__name__)


@register_component("Resistor")
class Resistor(ComponentBase):
    """Represents an ideal, memoryless Resistor (V = I * R)."""

    @provides(IVoltageContributor)
    class VoltageContributor:
        def get_voltage(self, component: 'Resistor', trial_current: float, timestep: float) -> float:
            return trial_current * component.resistance

    @property
    def resistance(self) -> float:
        return self.parameters["resistance"]

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]: return {"resistance": "ohm"}


@register_component("Capacitor")
class Capacitor(ComponentBase):
    """
    Represents an ideal Capacitor. Its state is the accumulated voltage, i.e. the
    stored charge divided by the capacitance.
    """

    def __init__(self, instance_id: str, parameters: Dict[str, Any], initial_voltage: float = 0.0):
        super().__init__(instance_id, parameters)
        self.initial_voltage: float = float(initial_voltage)
        self.stored_voltage: float = self.initial_voltage

    @provides(IVoltageContributor)
    class VoltageContributor:
        def get_voltage(self, component: 'Capacitor', trial_current: float, timestep: float) -> float:
            # Independent of the trial current within a step.
            return component.stored_voltage

    @provides(IStateCommitter)
    class StateCommitter:
        def commit_state(self, component: 'Capacitor', accepted_current: float, timestep: float) -> None:
            component.stored_voltage += accepted_current * timestep / component.capacitance

        def reset_state(self, component: 'Capacitor') -> None:
            component.stored_voltage = component.initial_voltage

    @property
    def capacitance(self) -> float:
        return self.parameters["capacitance"]

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]: return {"capacitance": "farad"}


@register_component("Inductor")
class Inductor(ComponentBase):
    """
    Represents an ideal Inductor. Its state is the last committed current, and its
    voltage is the backward-difference derivative L * (I - I_last) / T.
    """

    def __init__(self, instance_id: str, parameters: Dict[str, Any], initial_current: float = 0.0):
        super().__init__(instance_id, parameters)
        self.initial_current: float = float(initial_current)
        self.last_current: float = self.initial_current

    @provides(IVoltageContributor)
    class VoltageContributor:
        def get_voltage(self, component: 'Inductor', trial_current: float, timestep: float) -> float:
            return component.inductance * (trial_current - component.last_current) / timestep

    @provides(IStateCommitter)
    class StateCommitter:
        def commit_state(self, component: 'Inductor', accepted_current: float, timestep: float) -> None:
            component.last_current = accepted_current

        def reset_state(self, component: 'Inductor') -> None:
            component.last_current = component.initial_current

    @property
    def inductance(self) -> float:
        return self.parameters["inductance"]

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]: return {"inductance": "henry"}
