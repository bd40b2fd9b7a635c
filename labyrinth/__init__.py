"""Labyrinth: grid maze generation, a turn-based maze protocol, and solvers."""

__version__ = "1.0.0"
