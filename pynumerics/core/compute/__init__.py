"""
Shared compute infrastructure for PyNumerics.

Submodules:
    timing: Execution timing utilities
    tolerances: Accuracy settings and numerical thresholds
"""

from pynumerics.core.compute.timing import Timer, timed
from pynumerics.core.compute.tolerances import SolverConfig, DEFAULT_SOLVER_CONFIG

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Settings
    "SolverConfig",
    "DEFAULT_SOLVER_CONFIG",
]
