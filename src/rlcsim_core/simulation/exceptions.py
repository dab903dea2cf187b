# src/rlcsim_core/simulation/exceptions.py
"""
Defines custom, diagnosable exceptions specific to building and running a transient
simulation.

Non-convergence of the branch solver is deliberately NOT an exception: it is a
recoverable condition reported through `NonConvergenceEvent` records and a WARNING
log entry, so that a long-running simulation is never aborted by it.
"""
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ConfigurationError(DiagnosableError):
    """
    Raised when a simulation setting (timestep, tolerance, end time, source or solver
    option) is invalid. Rejected at construction time.
    """
    parameter_name: str
    details: str
    user_input: Optional[Any] = None

    def __str__(self):
        return f"Invalid simulation setting '{self.parameter_name}': {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for an invalid simulation setting."""
        return format_diagnostic_report(
            error_type="Invalid Simulation Configuration",
            details=self.details,
            suggestion="Timestep, tolerance and simulation time must be finite and strictly positive. The decay fraction must lie in (0, 1], and solver limits must be positive.",
            context={
                'parameter': self.parameter_name,
                'user_input': self.user_input,
            }
        )
