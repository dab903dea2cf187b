# src/rlcsim_core/simulation/sources.py
"""
Time-varying voltage source waveforms.

A waveform is any callable `v(t) -> float` (volts). The engine evaluates it once per
step at the step's start time.
"""
from __future__ import annotations

import math
from typing import Callable


__all__ = [
    "VoltageWaveform",
    "sine_waveform",
    "step_waveform",
    "driven_decay_waveform",
]


VoltageWaveform = Callable[[float], float]


def step_waveform(V: float, t_start: float = 0.0) -> VoltageWaveform:
    """
    Returns a voltage step-function.

    Parameters
    ----------
    V: float
        Constant voltage value in Volts.
    t_start: float
        Time moment in seconds from t = 0 where the voltage steps up from 0 to V.
    """
    return lambda t: V if t >= t_start else 0.0


def sine_waveform(
    amplitude: float,
    frequency_hz: float,
    *,
    phase_rad: float = 0.0,
    offset: float = 0.0,
) -> VoltageWaveform:
    """
    Returns the sinusoidal waveform v(t) = offset + amplitude * sin(2*pi*f*t + phase).

    Parameters
    ----------
    amplitude: float
        Peak amplitude (not RMS).
    frequency_hz: float
        Frequency in Hz.
    phase_rad: float
        Phase shift in radians.
    offset: float
        DC offset added to the sine.
    """
    if frequency_hz < 0:
        raise ValueError("frequency_hz must be >= 0")

    w = 2.0 * math.pi * frequency_hz

    def v(t: float) -> float:
        return offset + amplitude * math.sin(w * t + phase_rad)

    return v


def driven_decay_waveform(
    amplitude: float,
    frequency_hz: float,
    decay_start: float,
) -> VoltageWaveform:
    """
    Sinusoidal drive that is switched off for good at `decay_start`.

    For t < decay_start:
        v(t) = amplitude * sin(2*pi*frequency_hz*t)

    For t >= decay_start:
        v(t) = 0, letting the circuit ring down on its stored energy.

    Parameters
    ----------
    amplitude: float
        Peak amplitude (not RMS).
    frequency_hz: float
        Frequency in Hz.
    decay_start: float
        Time in seconds from which the source is forced to zero.
    """
    drive = sine_waveform(amplitude, frequency_hz)

    def v(t: float) -> float:
        if t < decay_start:
            return drive(t)
        return 0.0

    return v
