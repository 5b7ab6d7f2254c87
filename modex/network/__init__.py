"""Network module - Agents and networks.

The text-format parser lives in ``modex.network.parser``; it depends on
the analysis engine, which itself builds on these model types.
"""

from .model import Agent, Network

__all__ = [
    "Agent",
    "Network",
]
