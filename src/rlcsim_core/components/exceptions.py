"""
Defines the custom, diagnosable exceptions for the components subsystem.
"""
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import DiagnosableError, format_diagnostic_report

@dataclass()
class ComponentError(DiagnosableError):
    """
    The canonical, diagnosable exception for all component-related errors.

    Raised when a component is constructed with a parameter value that is not a
    valid physical quantity for it (wrong dimension, complex, non-positive or
    non-finite).
    """
    component_name: str
    details: str
    parameter_name: Optional[str] = None
    user_input: Optional[Any] = None

    def __str__(self):
        return f"Component '{self.component_name}': {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a component parameter error."""
        return format_diagnostic_report(
            error_type="Invalid Component Parameter",
            details=self.details,
            suggestion="Resistance, inductance and capacitance must be finite, real and strictly positive values with matching units (e.g. '20 ohm', '50 mH', '70 uF').",
            context={
                'component': self.component_name,
                'parameter': self.parameter_name,
                'user_input': self.user_input,
            }
        )
