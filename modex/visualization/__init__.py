"""Visualization module - Figures and reports for parsed networks."""

from .plots import NetworkPlotter

__all__ = ["NetworkPlotter"]
