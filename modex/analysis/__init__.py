"""Analysis module - Extremism and moderation effort."""

from .extremism import (
    SELECTED,
    NOT_SELECTED,
    compute_extremism,
    compute_effort,
    agent_effort,
    all_selected_strategy,
    moderated_opinions,
    moderated_extremism,
)

__all__ = [
    "SELECTED",
    "NOT_SELECTED",
    "compute_extremism",
    "compute_effort",
    "agent_effort",
    "all_selected_strategy",
    "moderated_opinions",
    "moderated_extremism",
]
