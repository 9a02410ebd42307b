"""Baby Sleep: a single-screen sleep session timer."""

__version__ = "0.3.0"
