"""Smoothed-particle hydrodynamics fluid simulation on a uniform block grid, with vector, matrix and record-container helpers."""

__version__ = "0.1.0"

__all__ = [
    "block",
    "constants",
    "dual_vector",
    "errors",
    "fld",
    "grid",
    "matrix",
    "particle",
    "vector",
]