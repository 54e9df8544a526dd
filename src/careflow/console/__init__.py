"""Console output - Rich logging and display helpers."""

from careflow.console.logger import CareFlowConsole

__all__ = ["CareFlowConsole"]
