"""
Shared compute infrastructure for PyHouseholder.

Hardware detection, timing, tolerances and the level-1 vector primitives
the reducer is written against. Backends live in householder/backends/;
this module contains shared NUMERIC infrastructure only.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    tolerances: Tolerance tiers and the rank threshold
    vector: Allocation-free vector primitives
"""

from pyhouseholder.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pyhouseholder.core.compute.timing import Timer, timed

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
    "timed",
]
