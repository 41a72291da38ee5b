"""TalisPod: environment-driven creature growth and round-based battles."""
__version__ = "0.9.0"
