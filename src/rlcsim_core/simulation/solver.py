# src/rlcsim_core/simulation/solver.py
"""
The per-step branch solver.

For a series loop every element carries the same current, so Kirchhoff's voltage law
reduces to a single scalar equation in that current:

    sum_k V_k(I, T) - V_source = 0

The solver finds `I` with a discrete step search rather than Newton's method: it
walks the current up or down by a step size `alpha` depending on the sign of the
mismatch, and halves `alpha` whenever the mismatch stops moving in the expected
direction. Component voltages are evaluated against the state left by the previous
commit; the solver itself never commits anything.
"""
import logging
import math
from dataclasses import dataclass
from typing import Sequence

from ..components.base import ComponentBase
from ..constants import DEFAULT_INITIAL_STEP_SIZE_A, DEFAULT_MAX_ITERATIONS, STEP_SIZE_FLOOR_RATIO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BranchSolution:
    """
    Attributes:
        current: The accepted branch current (A). When `converged` is False this is
                 the solver's best estimate after the last iteration.
        residual: |sum of component voltages - target| (V) at the last evaluation.
        iterations: Number of mismatch evaluations performed.
        converged: Whether `residual <= tolerance` was reached within the cap.
    """
    current: float
    residual: float
    iterations: int
    converged: bool


def kvl_mismatch(
    components: Sequence[ComponentBase],
    trial_current: float,
    target_voltage: float,
    timestep: float,
) -> float:
    """Signed KVL mismatch: sum of component voltages at `trial_current` minus the target."""
    sum_v = 0.0
    for component in components:
        sum_v += component.voltage(trial_current, timestep)
    return sum_v - target_voltage


def solve_branch_current(
    components: Sequence[ComponentBase],
    target_voltage: float,
    timestep: float,
    initial_current: float,
    tolerance: float,
    *,
    initial_step_size: float = DEFAULT_INITIAL_STEP_SIZE_A,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> BranchSolution:
    """
    Finds the branch current whose component-voltage sum matches `target_voltage`
    to within `tolerance`.

    Args:
        components: The series elements, in their fixed evaluation order.
        target_voltage: Instantaneous source voltage (V).
        timestep: Simulation timestep (s); must be > 0.
        initial_current: Starting guess, normally the previous step's current (A).
        tolerance: Convergence tolerance on the KVL mismatch (V).
        initial_step_size: Starting step size of the search (A). The step size is
            reset to this value whenever it underflows `tolerance * 1e-6`.
        max_iterations: Upper bound on mismatch evaluations.

    Returns:
        A `BranchSolution`. Reaching `max_iterations` is not an error: the best
        available current is returned with `converged=False` and a WARNING is logged.
    """
    step_floor = tolerance * STEP_SIZE_FLOOR_RATIO

    i1 = initial_current
    alpha = initial_step_size
    j0 = 0.0
    j1 = 0.0
    iterations = 0

    while iterations < max_iterations:
        iterations += 1
        j1 = kvl_mismatch(components, i1, target_voltage, timestep)

        # Halve the step when the mismatch did not decrease (repeat or reversal).
        delta = j0 - j1
        if j0 == j1 or math.fabs(delta) != delta:
            alpha /= 2.0

        if math.fabs(j1) <= tolerance:
            break

        if j1 < 0:
            i1 += alpha  # sum of voltages too low
        else:
            i1 -= alpha  # sum of voltages too high
        j0 = j1

        if alpha < step_floor:
            alpha = initial_step_size
    else:
        logger.warning(
            f"Branch solver reached the iteration cap ({max_iterations}) without converging: "
            f"residual mismatch {math.fabs(j1):.6g} V exceeds tolerance {tolerance:.6g} V "
            f"(target {target_voltage:.6g} V, best current {i1:.6g} A)."
        )
        return BranchSolution(current=i1, residual=math.fabs(j1), iterations=iterations, converged=False)

    return BranchSolution(current=i1, residual=math.fabs(j1), iterations=iterations, converged=True)
