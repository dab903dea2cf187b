# tests/test_execution.py

"""
Tests for the public Facade: construction with user-facing diagnostics, caller-driven
stepping and batch transient runs.
"""

import logging
import textwrap

import numpy as np
import pytest

import rlcsim_core
from rlcsim_core import (
    construct, start, step, history, is_running, is_complete,
    run_transient, run_transient_from_file, SimulationConfig, TransientResult,
    CircuitBuildError, SimulationRunError, ParsingError,
)
from rlcsim_core.errors import RLCSimError


class TestConstruct:

    def test_valid_arguments_give_idle_circuit(self):
        circuit = construct(20.0, 0.05, 0.00007, 50.0, 10.0, 0.1, 0.0001, 0.001)
        assert not is_running(circuit)
        assert not is_complete(circuit)
        assert history(circuit) == ()

    def test_invalid_setting_raises_build_error_with_report(self):
        with pytest.raises(CircuitBuildError) as excinfo:
            construct(20.0, 0.05, 0.00007, 50.0, 10.0, 0.1, 0.0, 0.001)
        message = str(excinfo.value)
        assert "Actionable Diagnostic Report" in message
        assert "Invalid Simulation Configuration" in message
        assert "timestep" in message

    def test_invalid_element_raises_build_error_with_report(self):
        with pytest.raises(CircuitBuildError) as excinfo:
            construct(20.0, 0.05, "-70 uF", 50.0, 10.0, 0.1, 0.0001, 0.001)
        message = str(excinfo.value)
        assert "Invalid Component Parameter" in message
        assert "C1" in message

    def test_build_error_is_an_rlcsim_error(self):
        with pytest.raises(RLCSimError):
            construct(20.0, 0.05, 0.00007, 50.0, 10.0, -0.1, 0.0001, 0.001)

    def test_default_timestep_and_tolerance(self):
        circuit = construct(20.0, 0.05, 0.00007, 50.0, 10.0, 0.1)
        assert circuit.timestep == 0.0001
        assert circuit.tolerance == 0.001

    def test_options_are_forwarded(self):
        circuit = construct(20.0, 0.05, 0.00007, 50.0, 10.0, 0.1, 0.0001, 0.001, decay_fraction=0.25, name="quarter")
        assert circuit.decay_start == pytest.approx(0.025)
        assert circuit.name == "quarter"


class TestCallerDrivenStepping:
    """One `step` per external tick, as a GUI idle callback would drive it."""

    def test_tick_loop(self, make_circuit):
        circuit = make_circuit(sim_time=0.001)
        assert step(circuit) is False
        start(circuit)
        assert is_running(circuit)
        ticks = 0
        while is_running(circuit):
            step(circuit)
            ticks += 1
        assert ticks == 10
        assert is_complete(circuit)
        assert len(history(circuit)) == 10

    def test_history_is_a_snapshot(self, make_circuit):
        circuit = make_circuit(sim_time=0.001)
        start(circuit)
        step(circuit)
        snapshot = history(circuit)
        step(circuit)
        assert len(snapshot) == 1
        assert len(history(circuit)) == 2


class TestRunTransient:

    def test_returns_transient_result(self):
        result = run_transient(SimulationConfig(sim_time=0.001))
        assert isinstance(result, TransientResult)
        assert result.step_count == 10
        np.testing.assert_allclose(result.time, np.arange(10) * 0.0001)

    def test_invalid_config_raises_build_error(self):
        with pytest.raises(CircuitBuildError):
            run_transient(SimulationConfig(tolerance=0.0))

    def test_failing_source_raises_run_error(self):
        def broken(t):
            raise RuntimeError("waveform table exhausted")

        with pytest.raises(SimulationRunError) as excinfo:
            run_transient(SimulationConfig(sim_time=0.001), source=broken)
        assert "RuntimeError" in str(excinfo.value)
        assert "waveform table exhausted" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_non_convergence_is_reported_not_raised(self, caplog):
        config = SimulationConfig(sim_time=0.001, max_iterations=1)
        with caplog.at_level(logging.WARNING):
            result = run_transient(config)
        assert result.step_count == 10
        assert len(result.convergence_failures) > 0
        first = result.convergence_failures[0]
        assert first.step_index == 1
        assert first.iterations == 1
        messages = [rec.getMessage() for rec in caplog.records if rec.levelno == logging.WARNING]
        assert any("iteration cap" in m for m in messages)
        assert any("non-converged" in m for m in messages)

    def test_run_from_file(self, tmp_path):
        config_file = tmp_path / "short_run.yaml"
        config_file.write_text(textwrap.dedent("""
            name: short_run
            circuit: {resistance: 20 ohm, inductance: 50 mH, capacitance: 70 uF}
            source: {peak_voltage: 10 V, frequency: 50 Hz}
            simulation: {sim_time: 2 ms, timestep: 0.1 ms}
        """))
        result = run_transient_from_file(config_file)
        assert result.step_count == 20

    def test_run_from_missing_file(self, tmp_path):
        with pytest.raises(ParsingError):
            run_transient_from_file(tmp_path / "absent.yaml")


def test_package_exports():
    for name in rlcsim_core.__all__:
        assert hasattr(rlcsim_core, name), name
