"""Velocity control for a differential-drive quadruped robot."""

__version__ = "0.1.0"

__all__ = ["geometry", "pp", "pid", "mpc", "controller"]