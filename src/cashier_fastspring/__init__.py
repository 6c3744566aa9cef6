"""FastSpring billing integration."""

__version__ = "0.1.0"
