"""
ModEx

Loads social-influence networks (agents with an opinion and a
receptivity, plus a shared resource budget) from their text format,
derives the extremism of the network and the effort of moderating it,
and keeps the parsed networks in a concurrent in-memory registry.
"""

__version__ = "0.1.0"
