"""Runtime core of a small Java virtual machine: arguments, threads and interpreter frames."""

__version__ = "0.1.0"

__all__ = ["arguments", "frame", "thread"]