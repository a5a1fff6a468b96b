"""Utilities for IP addresses and sets, local ports, ebtables, nsenter, tracing, names, paths and temporary directories."""

__version__ = "0.1.0"