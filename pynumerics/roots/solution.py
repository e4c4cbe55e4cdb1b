"""
Root-finding solution types.

RootSolution wraps Result[RootParams] and exposes the root, convergence
diagnostics and timing as properties.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pynumerics.core.result import Result

if TYPE_CHECKING:
    from pynumerics.roots.design import RootDesign


@dataclass(frozen=True)
class RootParams:
    """
    Parameter payload for a root-finding result.

    Attributes:
        root: Abscissa accepted as the root
        function_value: f(root) if the algorithm evaluated it, else None
    """
    root: float
    function_value: float | None


@dataclass
class RootSolution:
    """
    User-facing root-finding result.

    Wraps Result[RootParams] and provides summary() output.
    """
    _result: Result[RootParams]
    _design: 'RootDesign | None'

    @property
    def root(self) -> float:
        return self._result.params.root

    @property
    def function_value(self) -> float | None:
        return self._result.params.function_value

    @property
    def method(self) -> str:
        return self._result.info['method']

    @property
    def iterations(self) -> int:
        return self._result.info['iterations']

    @property
    def evaluations(self) -> int:
        """Number of function evaluations."""
        return self._result.info['evaluations']

    @property
    def converged(self) -> bool:
        return self._result.info['converged']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def design(self) -> 'RootDesign | None':
        return self._design

    def summary(self) -> str:
        """Multi-line human-readable report."""
        lines = [
            f"Root finding ({self.method})",
            "",
        ]
        if self._design is not None:
            lines.append(f"Interval:        [{self._design.lower:.6g}, {self._design.upper:.6g}]")
        lines.append(f"Root:            {self.root:.15g}")
        if self.function_value is not None:
            lines.append(f"f(root):         {self.function_value:.3e}")
        lines.append(f"Iterations:      {self.iterations}")
        lines.append(f"Evaluations:     {self.evaluations}")
        lines.append(f"Converged:       {self.converged}")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"RootSolution(root={self.root!r}, method={self.method!r})"
