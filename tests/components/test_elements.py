# tests/components/test_elements.py

"""
Behavioral tests for the three passive elements. Each element is checked against its
constitutive law, and the stateful elements are checked for the read/commit split:
voltage evaluation never changes state, and only `commit` advances it.
"""

import pytest

from rlcsim_core.components.elements import Resistor, Capacitor, Inductor
from rlcsim_core.units import Quantity

T = 1e-4


class TestResistor:

    def test_voltage_is_current_times_resistance(self, resistor):
        assert resistor.voltage(0.5, T) == pytest.approx(5.0)
        assert resistor.voltage(-0.2, T) == pytest.approx(-2.0)
        assert resistor.voltage(0.0, T) == 0.0

    def test_voltage_is_independent_of_history(self, resistor):
        first = resistor.voltage(0.3, T)
        resistor.commit(1.0, T)
        resistor.commit(-4.0, T)
        assert resistor.voltage(0.3, T) == first

    def test_accepts_unit_strings_and_quantities(self):
        assert Resistor("R2", {"resistance": "1 kohm"}).resistance == pytest.approx(1000.0)
        assert Resistor("R3", {"resistance": Quantity(47, "ohm")}).resistance == pytest.approx(47.0)
        # A bare number in a string is taken as ohms.
        assert Resistor("R4", {"resistance": "20"}).resistance == pytest.approx(20.0)


class TestCapacitor:

    def test_starts_at_initial_voltage(self, capacitor):
        assert capacitor.voltage(1.0, T) == 0.0
        charged = Capacitor("C2", {"capacitance": 1e-4}, initial_voltage=3.0)
        assert charged.voltage(0.0, T) == 3.0

    def test_voltage_does_not_depend_on_trial_current(self, capacitor):
        capacitor.commit(0.5, T)
        assert capacitor.voltage(-10.0, T) == capacitor.voltage(10.0, T)

    def test_repeated_reads_do_not_mutate_state(self, capacitor):
        for trial in (0.1, 5.0, -3.0, 100.0):
            capacitor.voltage(trial, T)
        assert capacitor.stored_voltage == 0.0

    def test_commit_integrates_current(self, capacitor):
        capacitor.commit(0.5, T)
        assert capacitor.stored_voltage == pytest.approx(0.5 * T / 1e-4)

    def test_constant_current_charges_linearly(self, capacitor):
        n = 25
        for _ in range(n):
            capacitor.commit(0.2, T)
        assert capacitor.voltage(0.0, T) == pytest.approx(0.2 * n * T / 1e-4)

    def test_reset_restores_initial_voltage(self):
        cap = Capacitor("C3", {"capacitance": "70 uF"}, initial_voltage=-1.5)
        cap.commit(2.0, T)
        assert cap.stored_voltage != -1.5
        cap.reset()
        assert cap.stored_voltage == -1.5

    def test_unit_string_capacitance(self):
        assert Capacitor("C4", {"capacitance": "70 uF"}).capacitance == pytest.approx(7e-5)


class TestInductor:

    def test_voltage_is_backward_difference(self, inductor):
        assert inductor.voltage(0.1, T) == pytest.approx(0.05 * 0.1 / T)

    def test_zero_voltage_at_steady_current(self, inductor):
        inductor.commit(0.25, T)
        assert inductor.voltage(0.25, T) == 0.0

    def test_commit_latches_current(self, inductor):
        inductor.commit(0.25, T)
        assert inductor.last_current == 0.25
        assert inductor.voltage(0.35, T) == pytest.approx(0.05 * 0.1 / T)

    def test_repeated_reads_do_not_mutate_state(self, inductor):
        for trial in (0.1, -0.4, 7.0):
            inductor.voltage(trial, T)
        assert inductor.last_current == 0.0

    def test_initial_current_and_reset(self):
        ind = Inductor("L2", {"inductance": "50 mH"}, initial_current=0.1)
        assert ind.voltage(0.1, T) == 0.0
        ind.commit(0.3, T)
        ind.reset()
        assert ind.last_current == 0.1
