# src/rlcsim_core/simulation/results.py
"""
Defines the immutable data contracts produced by a transient simulation.

`StepRecord` is produced once per accepted step and is never mutated afterwards.
`TransientResult` packages a finished history into NumPy arrays for analysis and
plotting. The fixed-width table helpers reproduce the classic `RLC.dat` layout:
a header `Time, Current, <R>, <C>, <L>` followed by one row per step.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepRecord:
    """
    The output of one accepted time step.

    Attributes:
        time: Simulation time (s) at which the step was evaluated.
        current: Accepted branch current (A).
        resistor_voltage: Voltage across the resistor at the accepted current (V).
        capacitor_voltage: Voltage across the capacitor at the accepted current (V).
        inductor_voltage: Voltage across the inductor at the accepted current (V).
        source_voltage: Source voltage applied during the step (V).
    """
    time: float
    current: float
    resistor_voltage: float
    capacitor_voltage: float
    inductor_voltage: float
    source_voltage: float

    @property
    def component_voltage_sum(self) -> float:
        return self.resistor_voltage + self.capacitor_voltage + self.inductor_voltage


@dataclass(frozen=True)
class NonConvergenceEvent:
    """
    Diagnostic record of a step whose branch solver hit its iteration cap.
    The simulation continued with the solver's best estimate.
    """
    step_index: int
    time: float
    residual: float
    iterations: int


@dataclass(frozen=True)
class TransientResult:
    """
    The user-facing result of a complete transient run.

    Attributes:
        time: 1D array of step times (s).
        current: 1D array of accepted branch currents (A).
        resistor_voltage, capacitor_voltage, inductor_voltage: 1D arrays (V),
            in solver evaluation order.
        source_voltage: 1D array of applied source voltages (V).
        component_names: Display names (resistor, capacitor, inductor).
        convergence_failures: Steps at which the solver hit its iteration cap.
    """
    time: np.ndarray
    current: np.ndarray
    resistor_voltage: np.ndarray
    capacitor_voltage: np.ndarray
    inductor_voltage: np.ndarray
    source_voltage: np.ndarray
    component_names: Tuple[str, str, str]
    convergence_failures: Tuple[NonConvergenceEvent, ...] = ()

    @property
    def step_count(self) -> int:
        return len(self.time)

    @classmethod
    def from_history(
        cls,
        records: Sequence[StepRecord],
        component_names: Sequence[str],
        convergence_failures: Iterable[NonConvergenceEvent] = (),
    ) -> TransientResult:
        columns = np.array(
            [
                (r.time, r.current, r.resistor_voltage, r.capacitor_voltage, r.inductor_voltage, r.source_voltage)
                for r in records
            ],
            dtype=float,
        ).reshape(len(records), 6)
        return cls(
            time=columns[:, 0],
            current=columns[:, 1],
            resistor_voltage=columns[:, 2],
            capacitor_voltage=columns[:, 3],
            inductor_voltage=columns[:, 4],
            source_voltage=columns[:, 5],
            component_names=tuple(component_names),
            convergence_failures=tuple(convergence_failures),
        )


def format_history_table(
    records: Iterable[StepRecord],
    component_names: Sequence[str],
    width: int = 12,
) -> str:
    """
    Renders step records as a fixed-width text table.

    The header is `Time`, `Current` and then the component names in solver order;
    each row holds the step time, the accepted current and the component voltages.
    """
    header = f"{'Time':>{width}}{'Current':>{width}}" + "".join(f"{name:>{width}}" for name in component_names)
    lines = [header]
    for r in records:
        values = (r.time, r.current, r.resistor_voltage, r.capacitor_voltage, r.inductor_voltage)
        lines.append("".join(f"{v:>{width}.6g}" for v in values))
    return "\n".join(lines) + "\n"


def write_history_table(
    path: Union[str, Path],
    records: Iterable[StepRecord],
    component_names: Sequence[str],
    width: int = 12,
) -> Path:
    """Writes `format_history_table(...)` to `path` and returns the resolved path."""
    out_path = Path(path)
    out_path.write_text(format_history_table(records, component_names, width), encoding="utf-8")
    logger.info(f"History table written to {out_path.resolve()}")
    return out_path
