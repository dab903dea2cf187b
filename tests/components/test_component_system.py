# tests/components/test_component_system.py

"""
Tests for the component framework itself: parameter validation, the capability
system, the registry and the diagnostic reports produced for invalid values.
"""

import math
from typing import Dict

import pytest

from rlcsim_core.units import Quantity
from rlcsim_core.components.base import ComponentBase, COMPONENT_REGISTRY, register_component
from rlcsim_core.components.capabilities import IVoltageContributor, IStateCommitter, provides
from rlcsim_core.components.elements import Resistor, Capacitor, Inductor
from rlcsim_core.components.exceptions import ComponentError
from rlcsim_core.errors import DiagnosableError


class TestParameterValidation:
    """
    Every element parameter must be a real, finite, strictly positive value with a
    compatible unit. Anything else is rejected with a `ComponentError`.
    """

    @pytest.mark.parametrize("bad_value", [0.0, -5.0, "0 ohm", "-20 ohm", math.inf, math.nan])
    def test_rejects_non_positive_or_non_finite(self, bad_value):
        with pytest.raises(ComponentError, match="finite and strictly positive"):
            Resistor("R1", {"resistance": bad_value})

    def test_rejects_wrong_dimension(self):
        with pytest.raises(ComponentError) as excinfo:
            Capacitor("C1", {"capacitance": "5 H"})
        assert excinfo.value.parameter_name == "capacitance"
        assert excinfo.value.user_input == "5 H"

    def test_rejects_unknown_unit(self):
        with pytest.raises(ComponentError, match="Validation failed"):
            Inductor("L1", {"inductance": "3 florps"})

    @pytest.mark.parametrize("bad_value", [True, None, [1.0]])
    def test_rejects_non_quantities(self, bad_value):
        with pytest.raises(ComponentError):
            Resistor("R1", {"resistance": bad_value})

    def test_rejects_complex_values(self):
        with pytest.raises(ComponentError, match="must be real"):
            Resistor("R1", {"resistance": Quantity(complex(10, 1), "ohm")})

    def test_rejects_missing_and_unknown_parameters(self):
        with pytest.raises(ComponentError, match="Missing required parameter"):
            Resistor("R1", {})
        with pytest.raises(ComponentError, match="Unknown parameter"):
            Resistor("R1", {"resistance": 10.0, "tolerance": 0.05})

    def test_error_is_diagnosable(self):
        with pytest.raises(ComponentError) as excinfo:
            Capacitor("C7", {"capacitance": -1e-6})
        err = excinfo.value
        assert isinstance(err, DiagnosableError)
        report = err.get_diagnostic_report()
        assert "Invalid Component Parameter" in report
        assert "C7" in report
        assert "capacitance" in report


class TestCapabilities:

    def test_every_element_contributes_a_voltage(self):
        for cls in (Resistor, Capacitor, Inductor):
            assert IVoltageContributor in cls.declare_capabilities()

    def test_only_reactive_elements_commit_state(self):
        r = Resistor("R1", {"resistance": 1.0})
        c = Capacitor("C1", {"capacitance": 1.0})
        l = Inductor("L1", {"inductance": 1.0})
        assert r.get_capability(IStateCommitter) is None
        assert c.get_capability(IStateCommitter) is not None
        assert l.get_capability(IStateCommitter) is not None

    def test_capability_instances_are_cached(self):
        c = Capacitor("C1", {"capacitance": 1.0})
        assert c.get_capability(IStateCommitter) is c.get_capability(IStateCommitter)

    def test_commit_and_reset_are_noops_without_state(self):
        r = Resistor("R1", {"resistance": 2.0})
        r.commit(1.0, 1e-3)
        r.reset()
        assert r.voltage(1.0, 1e-3) == pytest.approx(2.0)

    def test_subclass_inherits_capabilities(self):
        class TrimmedResistor(Resistor):
            pass

        t = TrimmedResistor("RT", {"resistance": 3.0})
        assert t.voltage(2.0, 1e-3) == pytest.approx(6.0)
        assert t.get_capability(IStateCommitter) is None


class TestComponentRegistration:

    def test_builtin_elements_are_registered(self):
        assert COMPONENT_REGISTRY["Resistor"] is Resistor
        assert COMPONENT_REGISTRY["Capacitor"] is Capacitor
        assert COMPONENT_REGISTRY["Inductor"] is Inductor
        assert Capacitor("C1", {"capacitance": 1.0}).component_type == "Capacitor"

    def test_rejects_component_without_voltage_capability(self):
        with pytest.raises(TypeError, match="IVoltageContributor"):
            @register_component("TestSilentElement")
            class SilentElement(ComponentBase):
                @classmethod
                def declare_parameters(cls) -> Dict[str, str]: return {}
        assert "TestSilentElement" not in COMPONENT_REGISTRY

    def test_rejects_malformed_parameter_declaration(self):
        with pytest.raises(TypeError, match="violates API contract"):
            @register_component("TestBadParams")
            class BadParams(ComponentBase):
                @classmethod
                def declare_parameters(cls): return {"resistance": 100}

                @provides(IVoltageContributor)
                class VoltageContributor:
                    def get_voltage(self, component, trial_current, timestep): return 0.0
        assert "TestBadParams" not in COMPONENT_REGISTRY

    def test_custom_component_registers_and_evaluates(self):
        try:
            @register_component("TestDiodeDrop")
            class DiodeDrop(ComponentBase):
                """A constant forward drop, used to exercise the plugin path."""

                @provides(IVoltageContributor)
                class VoltageContributor:
                    def get_voltage(self, component, trial_current, timestep):
                        return math.copysign(component.parameters["drop"], trial_current)

                @classmethod
                def declare_parameters(cls) -> Dict[str, str]: return {"drop": "volt"}

            d = DiodeDrop("D1", {"drop": "0.7 V"})
            assert COMPONENT_REGISTRY["TestDiodeDrop"] is DiodeDrop
            assert d.voltage(0.1, 1e-4) == pytest.approx(0.7)
            assert d.voltage(-0.1, 1e-4) == pytest.approx(-0.7)
        finally:
            COMPONENT_REGISTRY.pop("TestDiodeDrop", None)
