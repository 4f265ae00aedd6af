"""Numeric utilities: fixed-point types, congruence rings, linear systems, special-function coefficients and sequence concatenation."""

__version__ = "0.1.0"