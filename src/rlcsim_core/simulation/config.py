# src/rlcsim_core/simulation/config.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pint

from ..units import to_si_magnitude
from ..constants import (
    DEFAULT_RESISTANCE_OHM, DEFAULT_INDUCTANCE_H, DEFAULT_CAPACITANCE_F,
    DEFAULT_FREQUENCY_HZ, DEFAULT_PEAK_VOLTAGE_V, DEFAULT_SIM_TIME_S,
    DEFAULT_TIMESTEP_S, DEFAULT_TOLERANCE_V, DEFAULT_INITIAL_STEP_SIZE_A,
    DEFAULT_MAX_ITERATIONS, DEFAULT_DECAY_FRACTION,
    DEFAULT_RESISTOR_NAME, DEFAULT_CAPACITOR_NAME, DEFAULT_INDUCTOR_NAME,
)

logger = logging.getLogger(__name__)


class ConfigParsingError(ValueError):
    """Custom exception for errors during simulation configuration parsing."""
    pass


@dataclass(frozen=True)
class SimulationConfig:
    """
    The complete, unit-resolved description of one transient run. All values are
    floats in SI units. Range checks are performed when the circuit is constructed.
    """
    resistance: float = DEFAULT_RESISTANCE_OHM
    inductance: float = DEFAULT_INDUCTANCE_H
    capacitance: float = DEFAULT_CAPACITANCE_F
    frequency: float = DEFAULT_FREQUENCY_HZ
    peak_voltage: float = DEFAULT_PEAK_VOLTAGE_V
    sim_time: float = DEFAULT_SIM_TIME_S
    timestep: float = DEFAULT_TIMESTEP_S
    tolerance: float = DEFAULT_TOLERANCE_V
    initial_step_size: float = DEFAULT_INITIAL_STEP_SIZE_A
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    decay_fraction: float = DEFAULT_DECAY_FRACTION
    initial_capacitor_voltage: float = 0.0
    initial_inductor_current: float = 0.0
    resistor_name: str = DEFAULT_RESISTOR_NAME
    capacitor_name: str = DEFAULT_CAPACITOR_NAME
    inductor_name: str = DEFAULT_INDUCTOR_NAME
    name: str = "series_rlc"


# (section, key) -> (SimulationConfig field, unit)
_QUANTITY_FIELDS = {
    ("circuit", "resistance"): ("resistance", "ohm"),
    ("circuit", "inductance"): ("inductance", "henry"),
    ("circuit", "capacitance"): ("capacitance", "farad"),
    ("circuit", "initial_capacitor_voltage"): ("initial_capacitor_voltage", "volt"),
    ("circuit", "initial_inductor_current"): ("initial_inductor_current", "ampere"),
    ("source", "peak_voltage"): ("peak_voltage", "volt"),
    ("source", "frequency"): ("frequency", "hertz"),
    ("simulation", "sim_time"): ("sim_time", "second"),
    ("simulation", "timestep"): ("timestep", "second"),
    ("solver", "tolerance"): ("tolerance", "volt"),
    ("solver", "initial_step_size"): ("initial_step_size", "ampere"),
}

_PLAIN_FIELDS = {
    ("source", "decay_fraction"): ("decay_fraction", float),
    ("solver", "max_iterations"): ("max_iterations", int),
    ("circuit", "resistor_name"): ("resistor_name", str),
    ("circuit", "capacitor_name"): ("capacitor_name", str),
    ("circuit", "inductor_name"): ("inductor_name", str),
}


def parse_simulation_config(raw_config: Optional[Dict[str, Any]]) -> SimulationConfig:
    """
    Parses a raw, sectioned configuration dictionary into a `SimulationConfig`.

    Quantities may be plain numbers (taken as SI) or strings with units, e.g.
    `{'circuit': {'capacitance': '70 uF'}, 'simulation': {'timestep': '0.1 ms'}}`.
    Missing entries fall back to the defaults of `SimulationConfig`.
    """
    raw_config = raw_config or {}
    values: Dict[str, Any] = {}
    try:
        for (section, key), (field_name, unit) in _QUANTITY_FIELDS.items():
            section_data = raw_config.get(section) or {}
            if key in section_data:
                values[field_name] = to_si_magnitude(section_data[key], unit)

        for (section, key), (field_name, cast) in _PLAIN_FIELDS.items():
            section_data = raw_config.get(section) or {}
            if key in section_data:
                values[field_name] = cast(section_data[key])

        if "name" in raw_config:
            values["name"] = str(raw_config["name"])

        config = SimulationConfig(**values)
        logger.debug(f"Parsed simulation configuration: {config}")
        return config
    except (KeyError, ValueError, TypeError, AttributeError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse simulation configuration: {e}") from e
