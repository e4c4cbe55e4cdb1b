"""
Univariate root finding.

Public API:
    find_root(f, lower, upper)  - Find a root in an interval (Brent by default)
    new_solver(method)          - Create a reusable solver by name
    BisectionSolver, BrentSolver, SecantSolver, MullerSolver,
    RiddersSolver, NewtonSolver, LaguerreSolver
    PolynomialFunction          - Polynomial with derivative (Newton, Laguerre)
    DifferentiableFunction      - Function paired with its derivative (Newton)
"""

from pynumerics.roots._base import BaseUnivariateSolver, SolverState
from pynumerics.roots._bisection import BisectionSolver
from pynumerics.roots._brent import BrentSolver
from pynumerics.roots._laguerre import LaguerreSolver
from pynumerics.roots._muller import MullerSolver
from pynumerics.roots._newton import NewtonSolver
from pynumerics.roots._ridders import RiddersSolver
from pynumerics.roots._secant import SecantSolver
from pynumerics.roots.design import RootDesign
from pynumerics.roots.functions import DifferentiableFunction, PolynomialFunction
from pynumerics.roots.solution import RootParams, RootSolution
from pynumerics.roots.solvers import find_root, new_solver

__all__ = [
    "find_root",
    "new_solver",
    "BaseUnivariateSolver",
    "SolverState",
    "BisectionSolver",
    "BrentSolver",
    "SecantSolver",
    "MullerSolver",
    "RiddersSolver",
    "NewtonSolver",
    "LaguerreSolver",
    "PolynomialFunction",
    "DifferentiableFunction",
    "RootDesign",
    "RootParams",
    "RootSolution",
]
