# src/rlcsim_core/parser/exceptions.py
"""
Defines custom, diagnosable exceptions for loading and validating simulation
configuration files.

`ParsingError` covers file-level, syntax and unit problems; `SchemaValidationError`
covers structural problems found by the Cerberus schema. Both derive from
`DiagnosableError`, so callers can catch either one concrete type or the whole family.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Union

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all configuration parsing and schema errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the configuration file.",
            context={}
        )


@dataclass()
class ParsingError(BaseParsingError):
    """
    Raised for file-system issues, invalid YAML syntax, or values whose units
    cannot be resolved.
    """
    details: str
    file_path: Union[Path, str]

    def __str__(self):
        return f"Parsing error in '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Configuration Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists and is readable, contains valid YAML, and that every quantity uses a unit of the right dimension (e.g. '70 uF', '50 Hz', '0.1 ms').",
            context={'source_file': self.file_path}
        )


@dataclass()
class SchemaValidationError(BaseParsingError):
    """
    Raised when the YAML is syntactically valid but does not have the structure of
    a simulation configuration (unknown sections or keys, wrong value types, ...).
    """
    errors: Dict[str, Any]
    file_path: Union[Path, str]

    def _error_lines(self) -> str:
        return "\n".join(
            f"  - Field '{field}': {messages}"
            for field, messages in sorted(self.errors.items())
        )

    def __str__(self):
        return f"Schema validation failed for '{self.file_path}':\n" + self._error_lines()

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the configuration does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n{self._error_lines()}"
        )
        return format_diagnostic_report(
            error_type="Configuration Schema Validation Error",
            details=details,
            suggestion="Use only the sections 'name', 'circuit', 'source', 'simulation' and 'solver', with the keys documented for each.",
            context={'source_file': self.file_path}
        )
