"""Remote host inspection runner.

Connects to a machine over SSH, runs the diagnostic tasks matching the
machine's role and collects their results and abnormal findings.
"""

__all__ = ["main", "executor", "connection"]

__version__ = "1.0.0"
