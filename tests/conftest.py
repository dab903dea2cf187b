# tests/conftest.py
import pytest

from rlcsim_core import construct, Resistor, Capacitor, Inductor
from rlcsim_core.constants import (
    DEFAULT_RESISTANCE_OHM, DEFAULT_INDUCTANCE_H, DEFAULT_CAPACITANCE_F,
    DEFAULT_FREQUENCY_HZ, DEFAULT_PEAK_VOLTAGE_V, DEFAULT_SIM_TIME_S,
    DEFAULT_TIMESTEP_S, DEFAULT_TOLERANCE_V,
)

# Positional arguments of `construct` for the reference scenario:
# R=20 ohm, L=50 mH, C=70 uF, 10 V peak at 50 Hz, 100 ms in 0.1 ms steps, 1 mV tolerance.
REFERENCE_ARGS = dict(
    resistance=DEFAULT_RESISTANCE_OHM,
    inductance=DEFAULT_INDUCTANCE_H,
    capacitance=DEFAULT_CAPACITANCE_F,
    frequency=DEFAULT_FREQUENCY_HZ,
    peak_voltage=DEFAULT_PEAK_VOLTAGE_V,
    sim_time=DEFAULT_SIM_TIME_S,
    timestep=DEFAULT_TIMESTEP_S,
    tolerance=DEFAULT_TOLERANCE_V,
)


@pytest.fixture
def make_circuit():
    """Factory building a circuit from the reference scenario with selected overrides."""
    def _make(**overrides):
        args = dict(REFERENCE_ARGS)
        options = {k: v for k, v in overrides.items() if k not in args}
        args.update({k: v for k, v in overrides.items() if k in args})
        return construct(
            args["resistance"], args["inductance"], args["capacitance"],
            args["frequency"], args["peak_voltage"], args["sim_time"],
            args["timestep"], args["tolerance"], **options,
        )
    return _make


@pytest.fixture
def reference_circuit(make_circuit):
    return make_circuit()


@pytest.fixture
def resistor():
    return Resistor("R1", {"resistance": 10.0})


@pytest.fixture
def capacitor():
    return Capacitor("C1", {"capacitance": 1e-4})


@pytest.fixture
def inductor():
    return Inductor("L1", {"inductance": 0.05})
