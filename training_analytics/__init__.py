"""Training analytics engine: plan volume analysis and progressive overload."""

__version__ = "0.1.0"
