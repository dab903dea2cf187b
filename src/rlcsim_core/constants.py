# src/rlcsim_core/constants.py
import logging

logger = logging.getLogger(__name__)

# --- Branch Solver Constants ---

#: Initial (and reset) step size of the branch-current search, in amperes.
DEFAULT_INITIAL_STEP_SIZE_A: float = 0.01

#: Maximum number of mismatch evaluations per time step before the solver gives up
#: and returns its best estimate.
DEFAULT_MAX_ITERATIONS: int = 1000

#: The step size is reset once it falls below `tolerance * STEP_SIZE_FLOOR_RATIO`.
STEP_SIZE_FLOOR_RATIO: float = 1.0e-6

# --- Default Scenario (series RLC, sine drive followed by free decay) ---

DEFAULT_RESISTANCE_OHM: float = 20.0
DEFAULT_INDUCTANCE_H: float = 0.05
DEFAULT_CAPACITANCE_F: float = 0.00007
DEFAULT_FREQUENCY_HZ: float = 50.0
DEFAULT_PEAK_VOLTAGE_V: float = 10.0
DEFAULT_SIM_TIME_S: float = 0.1
DEFAULT_TIMESTEP_S: float = 0.0001
DEFAULT_TOLERANCE_V: float = 0.001

#: Fraction of the simulation end time after which the source is forced to 0 V.
DEFAULT_DECAY_FRACTION: float = 0.6

#: Relative guard (in units of the timestep) applied to the completion test so that
#: a rounding sliver in `step_count * timestep` never produces an extra step.
END_TIME_GUARD_RATIO: float = 1.0e-9

#: Default display names, in solver evaluation order.
DEFAULT_RESISTOR_NAME: str = "R1"
DEFAULT_CAPACITOR_NAME: str = "C1"
DEFAULT_INDUCTOR_NAME: str = "L1"

#: Progress is logged every this many accepted steps.
PROGRESS_LOG_INTERVAL: int = 100

logger.debug("Defined core solver and scenario constants.")
