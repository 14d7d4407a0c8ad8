"""Fixed-interval host CPU usage sampler."""

__version__ = "0.1.0"
