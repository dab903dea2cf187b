# src/rlcsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.debug("RLCSim Core package initialized.")

from .units import ureg, pint, Quantity
from .components import (
    ComponentBase, COMPONENT_REGISTRY, register_component,
    Resistor, Capacitor, Inductor, ComponentError,
)
from .simulation import (
    SeriesRLCCircuit, SimulationState, SimulationConfig, parse_simulation_config,
    StepRecord, NonConvergenceEvent, TransientResult, BranchSolution, solve_branch_current,
    construct, build_from_config, start, step, history, is_running, is_complete,
    run_transient, run_transient_from_file, format_history_table, write_history_table,
    ConfigurationError, ConfigParsingError,
)
from .parser import ConfigParser, ParsingError, SchemaValidationError
from .errors import RLCSimError, CircuitBuildError, SimulationRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Components
    "ComponentBase", "COMPONENT_REGISTRY", "register_component",
    "Resistor", "Capacitor", "Inductor",
    # Engine and solver
    "SeriesRLCCircuit", "SimulationState", "BranchSolution", "solve_branch_current",
    # Facade
    "construct", "build_from_config", "start", "step", "history", "is_running", "is_complete",
    "run_transient", "run_transient_from_file",
    # Configuration
    "SimulationConfig", "parse_simulation_config", "ConfigParser",
    # Results
    "StepRecord", "NonConvergenceEvent", "TransientResult",
    "format_history_table", "write_history_table",
    # Errors
    "RLCSimError", "CircuitBuildError", "SimulationRunError",
    "ComponentError", "ConfigurationError", "ConfigParsingError",
    "ParsingError", "SchemaValidationError",
]
