"""Lightning payment execution and response classification over LND."""

__version__ = "0.1.0"
