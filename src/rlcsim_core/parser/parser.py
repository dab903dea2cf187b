# src/rlcsim_core/parser/parser.py
import logging
import re
from pathlib import Path
from typing import Any, Dict, Union

import cerberus
import yaml

from ..simulation.config import SimulationConfig, ConfigParsingError, parse_simulation_config
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

# Display names end up as column headers of the history table.
NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ConfigValidator(cerberus.Validator):
    """Cerberus validator with an extra `identifier` rule for display names."""

    def _validate_identifier(self, constraint, field, value):
        """
        Checks that a name is usable as a column header.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, str):
            return
        if NAME_PATTERN.match(value) is None:
            bad = sorted({ch for ch in value if not (ch.isascii() and (ch.isalnum() or ch == "_"))})
            self._error(
                field,
                f"'{value}' is not a valid name: use letters, digits and underscores, "
                f"not starting with a digit (offending characters: {bad}).",
            )


class ConfigParser:
    """
    Loads and validates a YAML simulation configuration file and turns it into a
    `SimulationConfig`. Example:

        name: ringing_demo
        circuit:  {resistance: 20 ohm, inductance: 50 mH, capacitance: 70 uF}
        source:   {peak_voltage: 10 V, frequency: 50 Hz, decay_fraction: 0.6}
        simulation: {sim_time: 100 ms, timestep: 0.1 ms}
        solver:   {tolerance: 1 mV, max_iterations: 1000}
    """
    _quantity_rule = {"type": ["string", "number"], "required": False, "nullable": False}
    _name_rule = {"type": "string", "required": False, "empty": False, "identifier": True}

    _schema = {
        "name": _name_rule,
        "circuit": {
            "type": "dict", "required": False, "schema": {
                "resistance": _quantity_rule,
                "inductance": _quantity_rule,
                "capacitance": _quantity_rule,
                "initial_capacitor_voltage": _quantity_rule,
                "initial_inductor_current": _quantity_rule,
                "resistor_name": _name_rule,
                "capacitor_name": _name_rule,
                "inductor_name": _name_rule,
            },
        },
        "source": {
            "type": "dict", "required": False, "schema": {
                "peak_voltage": _quantity_rule,
                "frequency": _quantity_rule,
                "decay_fraction": {"type": "number", "required": False, "min": 0.0, "max": 1.0},
            },
        },
        "simulation": {
            "type": "dict", "required": False, "schema": {
                "sim_time": _quantity_rule,
                "timestep": _quantity_rule,
            },
        },
        "solver": {
            "type": "dict", "required": False, "schema": {
                "tolerance": _quantity_rule,
                "initial_step_size": _quantity_rule,
                "max_iterations": {"type": "integer", "required": False, "min": 1},
            },
        },
    }

    def __init__(self):
        self._validator = ConfigValidator(self._schema, allow_unknown=False)
        logger.debug("ConfigParser initialized with strict structural validation rules.")

    def parse(self, yaml_path: Union[str, Path]) -> SimulationConfig:
        """Parses a YAML configuration file."""
        path = Path(yaml_path).resolve()
        logger.info(f"Parsing simulation configuration: {path}")
        if not path.is_file():
            raise ParsingError(details=f"Configuration file not found at path: {path}", file_path=path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ParsingError(details=f"Could not read configuration file: {e}", file_path=path) from e
        return self.parse_string(text, source_name=path)

    def parse_string(self, yaml_text: str, source_name: Union[Path, str] = "<string>") -> SimulationConfig:
        """Parses YAML configuration text held in memory."""
        content = self._load_mapping(yaml_text, source_name)
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, source_name)
        try:
            return parse_simulation_config(self._validator.document)
        except ConfigParsingError as e:
            raise ParsingError(details=str(e), file_path=source_name) from e

    @staticmethod
    def _load_mapping(yaml_text: str, source: Union[Path, str]) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(yaml_text)
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if content is None:
            raise ParsingError(details="The YAML document is empty.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(
                details=f"The top level of the document must be a mapping of sections, got {type(content).__name__}.",
                file_path=source,
            )
        return content
