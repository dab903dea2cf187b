# src/rlcsim_core/units.py
import pint
import logging

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")


def to_si_magnitude(value, expected_unit: str) -> float:
    """
    Converts a number, a unit string (e.g. '70 uF') or a Quantity into a float
    expressed in `expected_unit`. Plain numbers are taken to already be in that unit.

    Raises:
        pint.DimensionalityError: If the value has the wrong physical dimension.
        pint.UndefinedUnitError: If a unit in the string is unknown.
        ValueError, TypeError: If the value cannot be interpreted as a quantity.
    """
    if isinstance(value, bool):
        raise TypeError(f"Expected a number or quantity, got a boolean ({value}).")
    if isinstance(value, (int, float)):
        return float(value)
    qty = Quantity(value) if isinstance(value, str) else value
    if not isinstance(qty, Quantity):
        raise TypeError(f"Cannot interpret value of type '{type(value).__name__}' as a quantity.")
    if qty.dimensionless and not ureg.Unit(expected_unit).dimensionless:
        # A bare number inside a string, e.g. '20', is taken as SI.
        return float(qty.magnitude)
    return float(qty.to(expected_unit).magnitude)
