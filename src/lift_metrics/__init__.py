"""lift-metrics: derived training and wellness metrics."""

__version__ = "0.1.0"
