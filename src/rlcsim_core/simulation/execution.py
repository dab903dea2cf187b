# src/rlcsim_core/simulation/execution.py
"""
Provides the primary public API functions for building and running simulations.

This module is a thin Facade over `SeriesRLCCircuit`:

1.  **Construction:** `construct` builds a circuit and translates any diagnosable
    configuration error into a single, user-facing `CircuitBuildError`.
2.  **Caller-driven stepping:** `start`, `step`, `history`, `is_running` and
    `is_complete` operate on a circuit owned by the caller, so a GUI idle loop and a
    batch script drive the same engine the same way.
3.  **Batch runs:** `run_transient` runs a `SimulationConfig` to completion and
    returns a `TransientResult`; `run_transient_from_file` does the same for a YAML
    configuration file.
"""
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from ..constants import DEFAULT_TIMESTEP_S, DEFAULT_TOLERANCE_V
from ..errors import CircuitBuildError, SimulationRunError, DiagnosableError, format_diagnostic_report
from .config import SimulationConfig
from .engine import SeriesRLCCircuit
from .results import StepRecord, TransientResult
from .sources import VoltageWaveform

logger = logging.getLogger(__name__)


def construct(
    resistance,
    inductance,
    capacitance,
    frequency: float,
    peak_voltage: float,
    sim_time: float,
    timestep: float = DEFAULT_TIMESTEP_S,
    tolerance: float = DEFAULT_TOLERANCE_V,
    **options,
) -> SeriesRLCCircuit:
    """
    Builds a series RLC circuit in the IDLE state.

    Args:
        resistance, inductance, capacitance: Element values (SI floats, unit strings
            or Quantities).
        frequency: Source frequency (Hz).
        peak_voltage: Source amplitude (V).
        sim_time: Simulation end time (s).
        timestep: Fixed timestep (s).
        tolerance: Solver KVL tolerance (V).
        **options: Keyword options of `SeriesRLCCircuit` (solver limits, decay
            fraction, custom source, initial conditions, names).

    Raises:
        CircuitBuildError: With an actionable diagnostic report if any value is invalid.
    """
    try:
        return SeriesRLCCircuit(
            resistance, inductance, capacitance, frequency, peak_voltage,
            sim_time, timestep, tolerance, **options,
        )
    except DiagnosableError as e:
        logger.error(f"Circuit construction rejected: {e}")
        raise CircuitBuildError(e.get_diagnostic_report()) from e


def build_from_config(config: SimulationConfig, source: Optional[VoltageWaveform] = None) -> SeriesRLCCircuit:
    """`construct` for a parsed `SimulationConfig`."""
    try:
        return SeriesRLCCircuit.from_config(config, source=source)
    except DiagnosableError as e:
        logger.error(f"Circuit construction rejected: {e}")
        raise CircuitBuildError(e.get_diagnostic_report()) from e


def start(circuit: SeriesRLCCircuit) -> None:
    circuit.start()


def step(circuit: SeriesRLCCircuit) -> bool:
    return circuit.step()


def history(circuit: SeriesRLCCircuit) -> Tuple[StepRecord, ...]:
    return circuit.history


def is_running(circuit: SeriesRLCCircuit) -> bool:
    return circuit.is_running


def is_complete(circuit: SeriesRLCCircuit) -> bool:
    return circuit.is_complete


def run_transient(config: SimulationConfig, source: Optional[VoltageWaveform] = None) -> TransientResult:
    """
    Builds, starts and runs a simulation to completion.

    Raises:
        CircuitBuildError: If the configuration is invalid.
        SimulationRunError: If the run fails unexpectedly after a successful build,
            e.g. because a custom source waveform raised.
    """
    circuit = build_from_config(config, source=source)
    try:
        circuit.run()
    except Exception as e:
        logger.critical(f"An unexpected error occurred while running '{circuit.name}': {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Simulation Error Occurred ({type(e).__name__})",
            details=f"The simulation stopped at step {circuit.step_count}: {e}",
            suggestion="Check any custom source waveform for errors. Otherwise this may be a bug; review the traceback.",
            context={'time': f"{circuit.current_time:.6g} s"}
        )
        raise SimulationRunError(report) from e

    result = circuit.to_result()
    if result.convergence_failures:
        logger.warning(
            f"Simulation '{circuit.name}' finished with {len(result.convergence_failures)} "
            f"non-converged step(s); results at those steps are best-effort."
        )
    return result


def run_transient_from_file(config_path: Union[str, Path]) -> TransientResult:
    """Parses a YAML configuration file and runs it with `run_transient`."""
    from ..parser import ConfigParser

    config = ConfigParser().parse(config_path)
    return run_transient(config)
