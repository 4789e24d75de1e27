"""PLANETSEARCH test suite."""
