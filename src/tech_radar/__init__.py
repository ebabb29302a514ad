"""Personal technology radar: CV analysis queue backed by a generative model."""

__version__ = "0.1.0"
