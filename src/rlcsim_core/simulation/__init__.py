# src/rlcsim_core/simulation/__init__.py
from .exceptions import ConfigurationError
from .config import SimulationConfig, ConfigParsingError, parse_simulation_config
from .results import (
    StepRecord,
    NonConvergenceEvent,
    TransientResult,
    format_history_table,
    write_history_table,
)
from .sources import VoltageWaveform, sine_waveform, step_waveform, driven_decay_waveform
from .solver import BranchSolution, solve_branch_current, kvl_mismatch
from .engine import SeriesRLCCircuit, SimulationState
from .execution import (
    construct,
    build_from_config,
    start,
    step,
    history,
    is_running,
    is_complete,
    run_transient,
    run_transient_from_file,
)

__all__ = [
    # Exceptions
    "ConfigurationError",
    "ConfigParsingError",
    # Configuration
    "SimulationConfig",
    "parse_simulation_config",
    # Results
    "StepRecord",
    "NonConvergenceEvent",
    "TransientResult",
    "format_history_table",
    "write_history_table",
    # Sources
    "VoltageWaveform",
    "sine_waveform",
    "step_waveform",
    "driven_decay_waveform",
    # Core
    "BranchSolution",
    "solve_branch_current",
    "kvl_mismatch",
    "SeriesRLCCircuit",
    "SimulationState",
    # Facade
    "construct",
    "build_from_config",
    "start",
    "step",
    "history",
    "is_running",
    "is_complete",
    "run_transient",
    "run_transient_from_file",
]
