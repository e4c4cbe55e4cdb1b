"""
Solver dispatch for univariate root finding.

This module provides the find_root() function (public API) and the
new_solver() factory.
"""

import dataclasses
from typing import Callable, Literal

from pynumerics.core.compute.timing import Timer
from pynumerics.core.compute.tolerances import DEFAULT_SOLVER_CONFIG, SolverConfig
from pynumerics.core.result import Result
from pynumerics.roots._base import BaseUnivariateSolver, SolverState
from pynumerics.roots._bisection import BisectionSolver
from pynumerics.roots._brent import BrentSolver
from pynumerics.roots._laguerre import LaguerreSolver
from pynumerics.roots._muller import MullerSolver
from pynumerics.roots._newton import NewtonSolver
from pynumerics.roots._ridders import RiddersSolver
from pynumerics.roots._secant import SecantSolver
from pynumerics.roots.design import RootDesign
from pynumerics.roots.solution import RootParams, RootSolution


MethodChoice = Literal[
    'bisection', 'brent', 'secant', 'muller', 'ridders', 'newton', 'laguerre',
]

_SOLVERS: dict[str, type[BaseUnivariateSolver]] = {
    'bisection': BisectionSolver,
    'brent': BrentSolver,
    'secant': SecantSolver,
    'muller': MullerSolver,
    'ridders': RiddersSolver,
    'newton': NewtonSolver,
    'laguerre': LaguerreSolver,
}


def new_solver(
    method: MethodChoice = 'brent',
    config: SolverConfig | None = None,
) -> BaseUnivariateSolver:
    """
    Create a root finder by name.

    Args:
        method: Algorithm name; Brent's method by default
        config: Accuracies and iteration cap (DEFAULT_SOLVER_CONFIG if None)

    Raises:
        ValueError: If method is unknown
    """
    try:
        cls = _SOLVERS[method]
    except KeyError:
        raise ValueError(
            f"Unknown method: {method!r}. Available: {', '.join(sorted(_SOLVERS))}"
        ) from None
    return cls(config)


def find_root(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    *,
    method: MethodChoice = 'brent',
    start: float | None = None,
    absolute_accuracy: float | None = None,
    relative_accuracy: float | None = None,
    function_value_accuracy: float | None = None,
    max_iterations: int | None = None,
) -> RootSolution:
    """
    Find a root of a univariate function inside an interval.

    This is the primary public API for root finding. All input validation,
    solver selection, and result wrapping happens here.

    Args:
        f: Function whose root is sought. Newton requires a function with
            derivative() (DifferentiableFunction, PolynomialFunction);
            Laguerre requires a PolynomialFunction or coefficient sequence.
        lower: Lower end of the search interval
        upper: Upper end of the search interval
        method: 'bisection', 'brent' (default), 'secant', 'muller',
            'ridders', 'newton' or 'laguerre'
        start: Initial guess inside (lower, upper); defaults to the midpoint
        absolute_accuracy: Absolute tolerance on x (default 1e-6)
        relative_accuracy: Relative tolerance on x (default 1e-14)
        function_value_accuracy: Tolerance on |f(x)| (default 1e-15)
        max_iterations: Iteration cap (default 100)

    Returns:
        RootSolution with the root, diagnostics and timing

    Raises:
        ValidationError: If inputs are invalid
        InvalidIntervalError: If lower >= upper or start is outside
        NoBracketingError: If a bracketing method gets same-sign ends
        ConvergenceError: If the iteration cap is exceeded

    Example:
        >>> from pynumerics.roots import find_root
        >>> sol = find_root(lambda x: x * x - 2.0, 0.0, 2.0)
        >>> round(sol.root, 6)
        1.414214
    """
    # === Input Validation ===
    design = RootDesign.build(f, lower, upper, start)

    overrides = {
        'absolute_accuracy': absolute_accuracy,
        'relative_accuracy': relative_accuracy,
        'function_value_accuracy': function_value_accuracy,
        'max_iterations': max_iterations,
    }
    config = dataclasses.replace(
        DEFAULT_SOLVER_CONFIG,
        **{k: v for k, v in overrides.items() if v is not None},
    )

    # === Select Solver ===
    solver = new_solver(method, config)

    # === Solve ===
    timer = Timer()
    timer.start()
    with timer.section('solve'):
        root = solver.solve(design.function, design.lower, design.upper, design.start)
    timer.stop()

    converged = solver.state is SolverState.CONVERGED
    function_value = solver.function_value if converged else None

    # === Wrap and Return ===
    result = Result(
        params=RootParams(root=root, function_value=function_value),
        info={
            'method': solver.name,
            'converged': converged,
            'iterations': solver.iterations,
            'evaluations': solver.evaluations,
            'absolute_accuracy': config.absolute_accuracy,
            'relative_accuracy': config.relative_accuracy,
            'function_value_accuracy': config.function_value_accuracy,
            'max_iterations': config.max_iterations,
        },
        timing=timer.result(),
        backend_name=solver.name,
        warnings=solver.warnings,
    )
    return RootSolution(_result=result, _design=design)
