"""Helpers for Go modules: building module commands and preparing documentation pages."""

__version__ = "0.1.0"