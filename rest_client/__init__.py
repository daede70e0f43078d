"""REST client backend: request execution, history, collections and environments."""

__version__ = "1.0.0"
