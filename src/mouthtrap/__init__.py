"""MOUTH TRAP: steer a tongue through scrolling rows of teeth."""

__version__ = "0.1.0"
