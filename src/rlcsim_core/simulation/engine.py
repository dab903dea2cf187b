# src/rlcsim_core/simulation/engine.py

"""
Defines `SeriesRLCCircuit`, the fixed-timestep transient engine for a series RLC
loop driven by a time-varying voltage source.

The engine is a small state machine (IDLE -> RUNNING -> COMPLETE). Each call to
`step()` performs one atomic time step:

1. evaluate the source at the current time,
2. solve for the branch current, seeded with the previous accepted current,
3. read every component voltage at the accepted current and append a `StepRecord`,
4. commit the stateful components (capacitor integrates, inductor latches),
5. advance the clock,
6. become COMPLETE once the end time is reached.

Steps 2 and 3 both read the state left by the previous step's commit. No component
commits before the record of its step has been taken.

`step()` may be driven by a tight batch loop (`run()`) or one call per external tick
(e.g. a GUI idle callback); the engine makes no assumption about the scheduler.
"""
import logging
import math
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from ..components.base import ComponentBase
from ..components.capabilities import IStateCommitter
from ..components.elements import Resistor, Capacitor, Inductor
from ..constants import (
    DEFAULT_INITIAL_STEP_SIZE_A, DEFAULT_MAX_ITERATIONS, DEFAULT_DECAY_FRACTION,
    DEFAULT_RESISTOR_NAME, DEFAULT_CAPACITOR_NAME, DEFAULT_INDUCTOR_NAME,
    END_TIME_GUARD_RATIO, PROGRESS_LOG_INTERVAL,
)
from .config import SimulationConfig
from .exceptions import ConfigurationError
from .results import StepRecord, NonConvergenceEvent, TransientResult
from .solver import solve_branch_current
from .sources import VoltageWaveform, driven_decay_waveform


logger = logging.getLogger(__name__)


class SimulationState(Enum):
    IDLE = auto()
    RUNNING = auto()
    COMPLETE = auto()


def _require_finite(name: str, value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(parameter_name=name, details=f"'{name}' must be a number.", user_input=value) from e
    if not math.isfinite(number):
        raise ConfigurationError(parameter_name=name, details=f"'{name}' must be finite, got {number}.", user_input=value)
    return number


def _require_positive(name: str, value) -> float:
    number = _require_finite(name, value)
    if number <= 0.0:
        raise ConfigurationError(parameter_name=name, details=f"'{name}' must be strictly positive, got {number}.", user_input=value)
    return number


class SeriesRLCCircuit:
    """
    A series R-C-L loop with its simulation clock and output history.

    The component evaluation order (resistor, capacitor, inductor) is fixed at
    construction; it is both the order of the solver's voltage sum and the order of
    the voltage columns in every `StepRecord`.
    """

    def __init__(
        self,
        resistance,
        inductance,
        capacitance,
        frequency: float,
        peak_voltage: float,
        sim_time: float,
        timestep: float,
        tolerance: float,
        *,
        initial_step_size: float = DEFAULT_INITIAL_STEP_SIZE_A,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        decay_fraction: float = DEFAULT_DECAY_FRACTION,
        source: Optional[VoltageWaveform] = None,
        initial_capacitor_voltage: float = 0.0,
        initial_inductor_current: float = 0.0,
        resistor_name: str = DEFAULT_RESISTOR_NAME,
        capacitor_name: str = DEFAULT_CAPACITOR_NAME,
        inductor_name: str = DEFAULT_INDUCTOR_NAME,
        name: str = "series_rlc",
    ):
        """
        Args:
            resistance, inductance, capacitance: Element values, as SI floats, unit
                strings (e.g. '70 uF') or pint Quantities.
            frequency: Source frequency (Hz), >= 0.
            peak_voltage: Source amplitude (V).
            sim_time: Simulation end time (s), > 0.
            timestep: Fixed timestep (s), > 0.
            tolerance: KVL mismatch tolerance (V), > 0.
            initial_step_size: Solver starting/reset step size (A), > 0.
            max_iterations: Solver iteration cap per step, > 0.
            decay_fraction: Fraction of `sim_time` after which the default source
                is forced to 0 V; in (0, 1]. Ignored when `source` is given.
            source: Optional custom waveform `v(t)`. Defaults to a sine drive at
                `frequency`/`peak_voltage` followed by a zero-volt decay phase.
            initial_capacitor_voltage: Capacitor voltage at t = 0 (V).
            initial_inductor_current: Inductor current at t = 0 (A); also the
                solver's first current guess.

        Raises:
            ConfigurationError: For an invalid simulation setting.
            ComponentError: For an invalid R, L or C value.
        """
        self.name = name
        self.timestep: float = _require_positive("timestep", timestep)
        self.tolerance: float = _require_positive("tolerance", tolerance)
        self.sim_time: float = _require_positive("sim_time", sim_time)
        self.frequency: float = _require_finite("frequency", frequency)
        if self.frequency < 0.0:
            raise ConfigurationError(parameter_name="frequency", details=f"'frequency' must be >= 0, got {self.frequency}.", user_input=frequency)
        self.peak_voltage: float = _require_finite("peak_voltage", peak_voltage)
        self.initial_step_size: float = _require_positive("initial_step_size", initial_step_size)
        if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations <= 0:
            raise ConfigurationError(parameter_name="max_iterations", details="'max_iterations' must be a positive integer.", user_input=max_iterations)
        self.max_iterations: int = max_iterations
        self.decay_fraction: float = _require_positive("decay_fraction", decay_fraction)
        if self.decay_fraction > 1.0:
            raise ConfigurationError(parameter_name="decay_fraction", details=f"'decay_fraction' must lie in (0, 1], got {self.decay_fraction}.", user_input=decay_fraction)
        initial_capacitor_voltage = _require_finite("initial_capacitor_voltage", initial_capacitor_voltage)
        self.initial_current: float = _require_finite("initial_inductor_current", initial_inductor_current)

        if source is None:
            source = driven_decay_waveform(self.peak_voltage, self.frequency, self.decay_fraction * self.sim_time)
        elif not callable(source):
            raise ConfigurationError(parameter_name="source", details="'source' must be a callable v(t) -> volts.", user_input=source)
        self.source: VoltageWaveform = source

        self.resistor = Resistor(resistor_name, {"resistance": resistance})
        self.capacitor = Capacitor(capacitor_name, {"capacitance": capacitance}, initial_voltage=initial_capacitor_voltage)
        self.inductor = Inductor(inductor_name, {"inductance": inductance}, initial_current=self.initial_current)
        self.components: Tuple[ComponentBase, ...] = (self.resistor, self.capacitor, self.inductor)
        # Handles to the elements with memory, resolved once so that stepping never
        # needs to inspect component types.
        self._stateful: Tuple[ComponentBase, ...] = tuple(
            c for c in self.components if c.get_capability(IStateCommitter) is not None
        )

        self.state: SimulationState = SimulationState.IDLE
        self.current_time: float = 0.0
        self.step_count: int = 0
        self.current: float = self.initial_current
        self._history: List[StepRecord] = []
        self.convergence_failures: List[NonConvergenceEvent] = []
        logger.debug(f"SeriesRLCCircuit '{self.name}' initialized: {self.components}, T={self.timestep}, end={self.sim_time}.")

    @classmethod
    def from_config(cls, config: SimulationConfig, source: Optional[VoltageWaveform] = None) -> "SeriesRLCCircuit":
        return cls(
            config.resistance,
            config.inductance,
            config.capacitance,
            config.frequency,
            config.peak_voltage,
            config.sim_time,
            config.timestep,
            config.tolerance,
            initial_step_size=config.initial_step_size,
            max_iterations=config.max_iterations,
            decay_fraction=config.decay_fraction,
            source=source,
            initial_capacitor_voltage=config.initial_capacitor_voltage,
            initial_inductor_current=config.initial_inductor_current,
            resistor_name=config.resistor_name,
            capacitor_name=config.capacitor_name,
            inductor_name=config.inductor_name,
            name=config.name,
        )

    # --- Queries ---

    @property
    def history(self) -> Tuple[StepRecord, ...]:
        """Read-only view of the accepted steps, ordered by time."""
        return tuple(self._history)

    @property
    def component_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.components)

    @property
    def is_running(self) -> bool:
        return self.state is SimulationState.RUNNING

    @property
    def is_complete(self) -> bool:
        return self.state is SimulationState.COMPLETE

    @property
    def decay_start(self) -> float:
        """Time from which the default source is forced to zero."""
        return self.decay_fraction * self.sim_time

    # --- Lifecycle ---

    def start(self) -> None:
        """Resets clock, history, component state and diagnostics, and enters RUNNING."""
        self.current_time = 0.0
        self.step_count = 0
        self.current = self.initial_current
        self._history.clear()
        self.convergence_failures.clear()
        for component in self.components:
            component.reset()
        self.state = SimulationState.RUNNING
        logger.info(f"--- Starting transient simulation '{self.name}' (T={self.timestep:g} s, end={self.sim_time:g} s) ---")

    def step(self) -> bool:
        """
        Performs one time step if RUNNING.

        Returns:
            True if the simulation is still running after this step, False if it has
            just completed or was not running (the latter is a no-op).
        """
        if self.state is not SimulationState.RUNNING:
            logger.debug(f"step() ignored for '{self.name}' in state {self.state.name}.")
            return False

        t = self.current_time
        v_input = float(self.source(t))

        solution = solve_branch_current(
            self.components,
            v_input,
            self.timestep,
            self.current,
            self.tolerance,
            initial_step_size=self.initial_step_size,
            max_iterations=self.max_iterations,
        )
        if not solution.converged:
            self.convergence_failures.append(
                NonConvergenceEvent(
                    step_index=self.step_count,
                    time=t,
                    residual=solution.residual,
                    iterations=solution.iterations,
                )
            )
            logger.debug(f"[{self.name}] Step {self.step_count} at t={t:.6g} s accepted with best-effort current {solution.current:.6g} A.")

        i_accepted = solution.current
        record = StepRecord(
            time=t,
            current=i_accepted,
            resistor_voltage=self.resistor.voltage(i_accepted, self.timestep),
            capacitor_voltage=self.capacitor.voltage(i_accepted, self.timestep),
            inductor_voltage=self.inductor.voltage(i_accepted, self.timestep),
            source_voltage=v_input,
        )
        self._history.append(record)

        for component in self._stateful:
            component.commit(i_accepted, self.timestep)

        self.current = i_accepted
        self.step_count += 1
        self.current_time = self.step_count * self.timestep

        if self.step_count % PROGRESS_LOG_INTERVAL == 0:
            logger.debug(
                f"Step {self.step_count}: vR={record.resistor_voltage:.6g}, "
                f"vC={record.capacitor_voltage:.6g}, vL={record.inductor_voltage:.6g}"
            )

        if self.current_time >= self.sim_time - END_TIME_GUARD_RATIO * self.timestep:
            self.state = SimulationState.COMPLETE
            logger.info(
                f"Simulation '{self.name}' completed. {self.step_count} time steps executed, "
                f"{len(self.convergence_failures)} without convergence."
            )
            return False
        return True

    def run(self, on_step: Optional[Callable[[StepRecord], None]] = None) -> Tuple[StepRecord, ...]:
        """
        Runs to completion, starting the simulation first if it is IDLE.

        Args:
            on_step: Optional callback invoked with each new record after its step
                     returns (e.g. to stream rows to a file or display).
        """
        if self.state is SimulationState.IDLE:
            self.start()
        while self.is_running:
            self.step()
            if on_step is not None:
                on_step(self._history[-1])
        return self.history

    def to_result(self) -> TransientResult:
        return TransientResult.from_history(self._history, self.component_names, self.convergence_failures)

    def __repr__(self) -> str:
        return (
            f"SeriesRLCCircuit(name='{self.name}', state={self.state.name}, "
            f"step={self.step_count}, t={self.current_time:g})"
        )
