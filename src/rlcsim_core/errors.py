# src/rlcsim_core/errors.py
"""
The exception hierarchy of RLCSim Core.

Two layers are kept apart:

- Internal, diagnosable errors (`DiagnosableError` subclasses such as
  `ComponentError` or `ConfigurationError`) are raised close to the offending value
  and know how to describe themselves in a report.
- User-facing errors (`RLCSimError` subclasses) are raised by the public Facade in
  `simulation.execution`. Their message is the already-rendered report of the
  internal error that caused them.
"""
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class RLCSimError(Exception):
    """Base class for all user-facing errors of RLCSim Core."""
    pass


class CircuitBuildError(RLCSimError):
    """
    A circuit could not be built: an element value or a simulation setting was
    rejected. The message is the diagnostic report of the rejected value.
    """
    pass


class SimulationRunError(RLCSimError):
    """
    A batch run failed after the circuit was built, e.g. because a custom source
    waveform raised. The message is a diagnostic report naming the failing step.
    """
    pass


@runtime_checkable
class Diagnosable(Protocol):
    """Anything that can render a multi-line, actionable report of itself."""

    def get_diagnostic_report(self) -> str:
        ...


class DiagnosableError(Exception, Diagnosable):
    """
    Concrete base for the internal errors that the Facade turns into
    `CircuitBuildError` / `SimulationRunError`. Catch this type (the `Diagnosable`
    protocol itself cannot appear in an `except` clause).
    """

    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# Context keys understood by `format_diagnostic_report`, in display order.
_CONTEXT_LABELS = (
    ("component", "Component"),
    ("parameter", "Parameter"),
    ("user_input", "Given Value"),
    ("source_file", "Config File"),
    ("time", "Sim. Time"),
)


def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Renders the uniform report block shared by every diagnosable error.

    Args:
        error_type: Short title of the problem (e.g. "Invalid Component Parameter").
        details: What exactly was wrong; may span several lines.
        suggestion: How to fix it; may be empty.
        context: Optional values keyed by 'component', 'parameter', 'user_input',
                 'source_file' and 'time'. Missing or empty entries are skipped.

    Returns:
        The report, starting with a blank line so it reads well after a traceback
        header.
    """
    rule = "=" * 72
    lines = ["", rule, " RLCSim Core: Actionable Diagnostic Report", rule, f"Problem:        {error_type}"]
    for key, label in _CONTEXT_LABELS:
        value = context.get(key)
        if value is None or (isinstance(value, str) and not value):
            continue
        shown = f"'{value}'" if key == "user_input" else value
        lines.append(f"{label + ':':<16}{shown}")

    lines.append("")
    lines.append("Details:")
    lines.extend(f"  {line}" for line in details.splitlines())
    if suggestion:
        lines.append("")
        lines.append("Suggestion:")
        lines.extend(f"  {line}" for line in suggestion.splitlines())
    lines.append(rule)
    return "\n".join(lines)
